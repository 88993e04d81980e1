"""Fixed bank-alert inbox served in demo mode"""

from datetime import datetime, timedelta, timezone
from typing import List

from creditgo_gateway.domain.models import RawMessage

LAGOS = timezone(timedelta(hours=1), "WAT")

DEMO_SMS_MESSAGES: List[RawMessage] = [
    # January 2026
    RawMessage(
        body="Credit Alert! Your GTBank account 0123XXXXXX has been credited with NGN300,000.00. "
        "Ref: SALARY/JAN/2026. Balance: NGN485,000.00",
        date=datetime(2026, 1, 5, 9, 30, tzinfo=LAGOS),
        address="GTBank",
    ),
    RawMessage(
        body="Debit Alert: NGN45,000.00 was debited from your account for RENT SAVINGS. "
        "Ref: AUTO-SAVE. Balance: NGN440,000.00",
        date=datetime(2026, 1, 6, 10, 0, tzinfo=LAGOS),
        address="GTBank",
    ),
    RawMessage(
        body="Credit: Your Kuda account has been credited with NGN75,000.00 from UPWORK INC. "
        "Balance: NGN120,000.00",
        date=datetime(2026, 1, 8, 14, 22, tzinfo=LAGOS),
        address="Kuda",
    ),
    RawMessage(
        body="You received NGN25,000.00 from FIVERR PAYMENT. Your new balance is NGN145,000.00",
        date=datetime(2026, 1, 9, 11, 45, tzinfo=LAGOS),
        address="OPay",
    ),
    RawMessage(
        body="Debit: NGN15,000.00 POS purchase at SHOPRITE IKEJA. Balance: NGN425,000.00",
        date=datetime(2026, 1, 10, 16, 30, tzinfo=LAGOS),
        address="GTBank",
    ),
    # December 2025
    RawMessage(
        body="Credit Alert! Your account has been credited with NGN300,000.00. "
        "Ref: SALARY/DEC/2025. Balance: NGN520,000.00",
        date=datetime(2025, 12, 5, 9, 15, tzinfo=LAGOS),
        address="GTBank",
    ),
    RawMessage(
        body="Credit: NGN50,000.00 from UPWORK FREELANCE PAYMENT. Balance: NGN180,000.00",
        date=datetime(2025, 12, 12, 15, 0, tzinfo=LAGOS),
        address="Kuda",
    ),
    RawMessage(
        body="Debit: NGN80,000.00 transferred to RENT ACCOUNT. Balance: NGN440,000.00",
        date=datetime(2025, 12, 15, 8, 0, tzinfo=LAGOS),
        address="GTBank",
    ),
    RawMessage(
        body="Credit: NGN35,000.00 from FIVERR. Balance: NGN115,000.00",
        date=datetime(2025, 12, 20, 12, 30, tzinfo=LAGOS),
        address="OPay",
    ),
    # November 2025
    RawMessage(
        body="Credit Alert! NGN300,000.00 credited. Ref: SALARY/NOV/2025. Balance: NGN450,000.00",
        date=datetime(2025, 11, 5, 9, 0, tzinfo=LAGOS),
        address="GTBank",
    ),
    RawMessage(
        body="Credit: NGN60,000.00 from UPWORK. Balance: NGN200,000.00",
        date=datetime(2025, 11, 15, 14, 0, tzinfo=LAGOS),
        address="Kuda",
    ),
]


class DemoMessageSource:
    """Message source backed by the fixed demo inbox"""

    def read_messages(self, max_count: int = 200) -> List[RawMessage]:
        return list(DEMO_SMS_MESSAGES[:max_count])
