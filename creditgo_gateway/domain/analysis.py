"""Transaction analysis - aggregates parsed alerts into income statistics"""

from typing import List, Sequence, Tuple

from creditgo_gateway.domain.models import Transaction, TransactionAnalysis, TransactionType
from creditgo_gateway.utils.date_utils import as_utc, months_spanned

SALARY_SOURCE = "Salary"
REGULAR_SALARY_CONSISTENCY = 0.9
IRREGULAR_INCOME_CONSISTENCY = 0.6
MIN_SALARY_CREDITS = 2


def analyze_transactions(transactions: Sequence[Transaction]) -> TransactionAnalysis:
    """
    Summarize a transaction history.

    Rules:
    - Average monthly income divides total credits by the months spanned
      by the observed dates (30-day months, at least 1)
    - Consistency is 0.9 with two or more salary credits, 0.6 otherwise,
      and 0.0 when there is no history at all
    - Detected sources are distinct credit sources in first-seen order
    """
    credits = [t for t in transactions if t.type == TransactionType.CREDIT]
    debits = [t for t in transactions if t.type == TransactionType.DEBIT]

    total_credits = sum(t.amount for t in credits)
    total_debits = sum(t.amount for t in debits)

    if transactions:
        dates = [as_utc(t.date) for t in transactions]
        months = months_spanned(min(dates), max(dates))
    else:
        months = 1
    average_monthly_income = total_credits / months

    if not transactions:
        consistency = 0.0
    elif sum(1 for t in credits if t.source == SALARY_SOURCE) >= MIN_SALARY_CREDITS:
        consistency = REGULAR_SALARY_CONSISTENCY
    else:
        consistency = IRREGULAR_INCOME_CONSISTENCY

    return TransactionAnalysis(
        total_credits=total_credits,
        total_debits=total_debits,
        average_monthly_income=average_monthly_income,
        income_consistency=consistency,
        detected_sources=_distinct_sources(credits),
        transactions=tuple(transactions),
    )


def _distinct_sources(credits: List[Transaction]) -> Tuple[str, ...]:
    seen: List[str] = []
    for txn in credits:
        if txn.source and txn.source not in seen:
            seen.append(txn.source)
    return tuple(seen)
