"""Display formatting for naira amounts"""

from decimal import ROUND_HALF_UP, Decimal

NAIRA_SIGN = "₦"


def format_naira(amount: float) -> str:
    """Whole-naira currency string, e.g. 300000 -> '₦300,000'"""
    whole = int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if whole < 0 else ""
    return f"{sign}{NAIRA_SIGN}{abs(whole):,}"

