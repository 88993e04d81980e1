"""Bank-alert SMS parsing - turns raw message text into typed transactions"""

import math
import re
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple

from creditgo_gateway.domain.models import RawMessage, Transaction, TransactionType
from creditgo_gateway.utils.date_utils import as_utc

CREDIT_KEYWORDS = (
    "credit",
    "credited",
    "received",
    "deposit",
    "payment received",
    "salary",
    "transfer from",
    "inflow",
)

DEBIT_KEYWORDS = (
    "debit",
    "debited",
    "withdrawal",
    "transfer to",
    "payment",
    "purchase",
    "pos",
    "atm",
)

# First match wins in both the pattern and source tables
AMOUNT_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"NGN\s?([\d,]+\.?\d*)", re.IGNORECASE),
    re.compile(r"N\s?([\d,]+\.?\d*)", re.IGNORECASE),
    re.compile(r"([\d,]+\.?\d*)\s?naira", re.IGNORECASE),
)

BANK_AMOUNT_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"NGN\s?([\d,]+\.?\d*)", re.IGNORECASE),
    re.compile(r"₦\s?([\d,]+\.?\d*)", re.IGNORECASE),
    re.compile(r"N\s?([\d,]+\.?\d*)", re.IGNORECASE),
    re.compile(r"([\d,]+\.?\d*)\s?naira", re.IGNORECASE),
    re.compile(r"amount[:\s]+([\d,]+\.?\d*)", re.IGNORECASE),
    re.compile(r"sum of[:\s]+([\d,]+\.?\d*)", re.IGNORECASE),
)

REFERENCE_PATTERN = re.compile(r"Ref:\s*([^.]+)", re.IGNORECASE)

BANK_REFERENCE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"ref[:\s]+([^\n.]+)", re.IGNORECASE),
    re.compile(r"reference[:\s]+([^\n.]+)", re.IGNORECASE),
    re.compile(r"desc[:\s]+([^\n.]+)", re.IGNORECASE),
    re.compile(r"from[:\s]+([^\n.]+)", re.IGNORECASE),
    re.compile(r"to[:\s]+([^\n.]+)", re.IGNORECASE),
)

SOURCE_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("salary", "Salary"),
    ("fiverr", "Fiverr"),
    ("upwork", "Upwork"),
    ("paystack", "Paystack"),
    ("pos", "POS"),
    ("atm", "ATM"),
)

BANK_SOURCE_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("salary", "Salary"),
    ("fiverr", "Fiverr"),
    ("upwork", "Upwork"),
    ("paystack", "Paystack"),
    ("flutterwave", "Flutterwave"),
    ("paypal", "PayPal"),
    ("pos", "POS"),
    ("atm", "ATM"),
    ("transfer", "Transfer"),
)

BANK_CONTENT_KEYWORDS = (
    "credit",
    "debit",
    "credited",
    "debited",
    "transfer",
    "payment",
    "ngn",
    "balance",
    "alert",
    "transaction",
    "withdrawal",
    "deposit",
)

# Nigerian bank and fintech sender IDs
BANK_SENDERS = (
    "gtbank", "gtb", "gtbalert", "gtworld",
    "zenith", "zenithbank", "zenithalert",
    "access", "accessbank", "accessalert",
    "firstbank", "firstbankng", "firstbankalert", "first",
    "uba", "ubabank",
    "sterling", "sterlingbank",
    "fcmb",
    "fidelity", "fidelitysms",
    "union", "unionbank",
    "wema", "wemabank",
    "polaris", "polarisbank",
    "stanbic", "stanbicibtc",
    "ecobank",
    "keystone", "keystonebank",
    "heritage", "heritagebank",
    "jaiz", "jaizbank",
    "providus", "providusbank",
    "suntrust", "suntrustbank",
    "titan", "titantrust",
    "opay", "opayng",
    "palmpay",
    "moniepoint",
    "kuda",
    "carbon",
    "fairmoney",
)

AMOUNT_HINT_PATTERN = re.compile(
    r"ngn|₦|\bnaira\b|\bamt\b|\bamount\b|\d{1,3}(,\d{3})*(\.\d{2})?",
    re.IGNORECASE,
)

DEFAULT_DESCRIPTION = "Transaction"
MAX_DESCRIPTION_LENGTH = 50


def classify_message(body: str) -> Optional[TransactionType]:
    """
    Classify a message as credit or debit by keyword.

    Credit keywords are checked first, so a message matching both sets
    is a credit. Returns None when neither set matches.
    """
    lowered = body.lower()
    if any(keyword in lowered for keyword in CREDIT_KEYWORDS):
        return TransactionType.CREDIT
    if any(keyword in lowered for keyword in DEBIT_KEYWORDS):
        return TransactionType.DEBIT
    return None


def extract_amount(body: str, patterns: Sequence[Pattern[str]] = AMOUNT_PATTERNS) -> Optional[float]:
    """Return the first matching positive amount, or None"""
    for pattern in patterns:
        match = pattern.search(body)
        if match:
            return _to_amount(match.group(1))
    return None


def detect_source(body: str, table: Sequence[Tuple[str, str]] = SOURCE_KEYWORDS) -> Optional[str]:
    lowered = body.lower()
    for keyword, source in table:
        if keyword in lowered:
            return source
    return None


def parse_sms_transactions(messages: Iterable[RawMessage]) -> List[Transaction]:
    """
    Parse demo or caller-supplied messages into transactions, newest first.

    Messages without a credit/debit keyword or a positive amount are
    dropped silently.
    """
    transactions = []

    for index, message in enumerate(messages):
        txn_type = classify_message(message.body)
        if txn_type is None:
            continue

        amount = extract_amount(message.body)
        if amount is None:
            continue

        description = DEFAULT_DESCRIPTION
        ref_match = REFERENCE_PATTERN.search(message.body)
        if ref_match:
            description = ref_match.group(1).strip() or DEFAULT_DESCRIPTION

        date = as_utc(message.date)
        transactions.append(
            Transaction(
                id=f"txn_{int(date.timestamp())}_{index}",
                type=txn_type,
                amount=amount,
                description=description,
                date=date,
                source=detect_source(message.body),
            )
        )

    return _newest_first(transactions)


def filter_bank_alerts(messages: Iterable[RawMessage]) -> List[RawMessage]:
    """Keep messages that look like bank alerts and carry an amount"""
    alerts = []
    for message in messages:
        body = message.body.lower()
        sender = (message.address or "").lower()

        is_from_bank = "bank" in sender or any(bank in sender for bank in BANK_SENDERS)
        has_bank_content = any(keyword in body for keyword in BANK_CONTENT_KEYWORDS)
        has_amount = AMOUNT_HINT_PATTERN.search(body) is not None

        if (is_from_bank or has_bank_content) and has_amount:
            alerts.append(message)
    return alerts


def parse_bank_sms_to_transactions(messages: Iterable[RawMessage]) -> List[Transaction]:
    """
    Parse device inbox messages that already passed filter_bank_alerts.

    Uses the wider amount, reference and source tables seen in real
    bank alerts. Descriptions are truncated to 50 characters.
    """
    transactions = []

    for index, message in enumerate(messages):
        txn_type = classify_message(message.body)
        if txn_type is None:
            continue

        amount = extract_amount(message.body, BANK_AMOUNT_PATTERNS)
        if amount is None:
            continue

        description = DEFAULT_DESCRIPTION
        for pattern in BANK_REFERENCE_PATTERNS:
            match = pattern.search(message.body)
            if match:
                description = match.group(1).strip()[:MAX_DESCRIPTION_LENGTH] or DEFAULT_DESCRIPTION
                break

        date = as_utc(message.date)
        message_id = message.message_id or str(index)
        transactions.append(
            Transaction(
                id=f"sms_{message_id}_{int(date.timestamp())}",
                type=txn_type,
                amount=amount,
                description=description,
                date=date,
                source=detect_source(message.body, BANK_SOURCE_KEYWORDS),
            )
        )

    return _newest_first(transactions)


def _to_amount(raw: str) -> Optional[float]:
    try:
        amount = float(raw.replace(",", ""))
    except ValueError:
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def _newest_first(transactions: List[Transaction]) -> List[Transaction]:
    # sorted() is stable with reverse=True, equal dates keep input order
    return sorted(transactions, key=lambda t: t.date, reverse=True)
