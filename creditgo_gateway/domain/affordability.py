"""Safe-amount engine - monthly repayment a user can carry without strain"""

import math
from typing import Optional

from creditgo_gateway.domain.models import (
    AffordabilityBreakdown,
    CreditLimitCalculation,
    SafeAmountResult,
    TransactionAnalysis,
)
from creditgo_gateway.domain.scoring import calculate_credit_score

# Nigerian micro-lending debt-service ratios
BASE_SAFE_RATIO = 0.15
BASE_MAX_RATIO = 0.20
SAFE_RATIO_CAP = 0.22
MAX_RATIO_CAP = 0.28

IDENTITY_BONUS = (0.02, 0.02)
EMPLOYMENT_BONUS = (0.03, 0.03)
HIGH_CONSISTENCY_BONUS = (0.02, 0.03)
MODERATE_CONSISTENCY_BONUS = (0.01, 0.01)
MULTIPLE_SOURCES_BONUS = (0.01, 0.02)

HIGH_CONSISTENCY = 0.9
MODERATE_CONSISTENCY = 0.7
MIN_INCOME_SOURCES = 2

# Verified data may pull the base down to 80% of stated income, no further
VERIFIED_INCOME_FLOOR = 0.8
DEFAULT_EXPENSE_RATIO = 0.60
DISPOSABLE_SHARE = 0.5
MAX_INCOME_SHARE = 0.25

LOW_RISK_CONSISTENCY = 0.8


def to_amount(value: Optional[float]) -> float:
    """Coerce an income or expense figure to a finite, non-negative float (0 otherwise)"""
    try:
        amount = float(value or 0)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def resolve_base_income(stated_income: float, analysis: Optional[TransactionAnalysis] = None) -> float:
    """
    Stated income, cross-checked against SMS-derived income when available.

    An analysis with no observed income (no credits, or nothing parsed)
    is not evidence and leaves the stated income unchanged.
    """
    stated = to_amount(stated_income)
    observed = to_amount(analysis.average_monthly_income) if analysis is not None else 0.0
    if observed <= 0:
        return stated
    return min(stated, max(observed, stated * VERIFIED_INCOME_FLOOR))


def calculate_repayment_ratios(
    analysis: Optional[TransactionAnalysis] = None,
    identity_verified: bool = False,
    employment_verified: bool = False,
) -> tuple[float, float]:
    """
    Safe and max debt-service ratios after verification bonuses.

    Bonuses are additive and independent:
    - identity verified:         +2% safe / +2% max
    - employment verified:       +3% safe / +3% max
    - consistency >= 0.9:        +2% safe / +3% max
    - 0.7 <= consistency < 0.9:  +1% safe / +1% max
    - 2+ income sources:         +1% safe / +2% max

    Capped at 22% safe and 28% max.
    """
    bonuses = []
    if identity_verified:
        bonuses.append(IDENTITY_BONUS)
    if employment_verified:
        bonuses.append(EMPLOYMENT_BONUS)

    if analysis is not None:
        if analysis.income_consistency >= HIGH_CONSISTENCY:
            bonuses.append(HIGH_CONSISTENCY_BONUS)
        elif analysis.income_consistency >= MODERATE_CONSISTENCY:
            bonuses.append(MODERATE_CONSISTENCY_BONUS)

        if len(analysis.detected_sources) >= MIN_INCOME_SOURCES:
            bonuses.append(MULTIPLE_SOURCES_BONUS)

    safe_ratio = BASE_SAFE_RATIO + sum(safe for safe, _ in bonuses)
    max_ratio = BASE_MAX_RATIO + sum(max_ for _, max_ in bonuses)

    # Round away float noise so 0.15 + 0.02 + 0.03 compares as 0.20
    return round(min(safe_ratio, SAFE_RATIO_CAP), 4), round(min(max_ratio, MAX_RATIO_CAP), 4)


def calculate_safe_amount(
    stated_income: float,
    analysis: Optional[TransactionAnalysis] = None,
    identity_verified: bool = False,
    employment_verified: bool = False,
    stated_expenses: Optional[float] = None,
) -> SafeAmountResult:
    """
    Compute safe and maximum monthly repayments.

    Example (N300,000, nothing verified, no SMS):
        safe = 300,000 * 15% = 45,000
        expenses = 60% -> 180,000, disposable 120,000
        max = max(45,000, min(60,000, 75,000)) = 60,000

    Never raises; zero or missing inputs produce zero amounts.
    """
    base_income = resolve_base_income(stated_income, analysis)
    safe_ratio, max_ratio = calculate_repayment_ratios(analysis, identity_verified, employment_verified)

    if to_amount(stated_expenses) > 0:
        expenses = to_amount(stated_expenses)
    else:
        expenses = base_income * DEFAULT_EXPENSE_RATIO
    disposable = base_income - expenses

    safe_amount = max(0, _floor(base_income * safe_ratio))
    max_candidate = _floor(min(disposable * DISPOSABLE_SHARE, base_income * MAX_INCOME_SHARE))
    max_amount = max(0, safe_amount, max_candidate)

    return SafeAmountResult(
        safe_amount=safe_amount,
        max_amount=max_amount,
        breakdown=AffordabilityBreakdown(
            income=_floor(base_income),
            expenses=max(0, _floor(expenses)),
            disposable=max(0, _floor(disposable)),
            safe_ratio=safe_ratio,
            max_ratio=max_ratio,
        ),
    )


def assess_risk_level(
    identity_verified: bool,
    employment_verified: bool,
    analysis: Optional[TransactionAnalysis] = None,
) -> str:
    """low: fully verified with steady income; high: nothing verified"""
    consistency = analysis.income_consistency if analysis is not None else 0.0
    if identity_verified and employment_verified and consistency >= LOW_RISK_CONSISTENCY:
        return "low"
    if not identity_verified and not employment_verified:
        return "high"
    return "medium"


def calculate_credit_limit(
    stated_income: float,
    analysis: Optional[TransactionAnalysis] = None,
    identity_verified: bool = False,
    employment_verified: bool = False,
) -> CreditLimitCalculation:
    """Ratio-only repayment limits, used for partner pre-qualification"""
    base_income = resolve_base_income(stated_income, analysis)
    safe_ratio, max_ratio = calculate_repayment_ratios(analysis, identity_verified, employment_verified)

    expenses = base_income * DEFAULT_EXPENSE_RATIO
    safe_monthly = max(0, _floor(base_income * safe_ratio))
    max_monthly = max(safe_monthly, _floor(base_income * max_ratio))

    return CreditLimitCalculation(
        safe_monthly_repayment=safe_monthly,
        max_monthly_repayment=max_monthly,
        credit_score=calculate_credit_score(identity_verified, employment_verified, analysis, base_income),
        risk_level=assess_risk_level(identity_verified, employment_verified, analysis),
        breakdown=AffordabilityBreakdown(
            income=_floor(base_income),
            expenses=_floor(expenses),
            disposable=max(0, _floor(base_income - expenses)),
            safe_ratio=safe_ratio,
            max_ratio=max_ratio,
        ),
    )


def _floor(value: float) -> int:
    # 300000 * 0.29 is 86999.99999999999 in binary floating point
    return math.floor(round(value, 6))
