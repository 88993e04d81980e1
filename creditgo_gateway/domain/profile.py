"""Financial profile builder - composes affordability, scoring and badges"""

from datetime import datetime, timezone
from typing import List, Optional

from creditgo_gateway.domain.affordability import calculate_safe_amount
from creditgo_gateway.domain.models import (
    CreditBadge,
    EmploymentType,
    FinancialInputs,
    FinancialProfile,
    TransactionAnalysis,
)
from creditgo_gateway.domain.scoring import calculate_credit_score

CONSISTENT_INCOME_THRESHOLD = 0.8

# Employment type -> (id, name, description, icon)
EMPLOYMENT_BADGES = {
    EmploymentType.SALARIED: ("employed", "Employed Professional", "Verified corporate email", "building"),
    EmploymentType.FREELANCER: ("freelancer", "Freelancer Verified", "Professional profile confirmed", "user-check"),
    EmploymentType.BUSINESS: ("business_owner", "Business Owner", "Registered business confirmed", "briefcase"),
}


def generate_badges(
    identity_verified: bool,
    employment_verified: bool,
    employment_type: Optional[EmploymentType] = None,
    analysis: Optional[TransactionAnalysis] = None,
    now: Optional[datetime] = None,
) -> List[CreditBadge]:
    """
    Recompute the badge set from scratch.

    Order: identity, employment type, consistent income, positive cash
    flow, multiple income streams. All badges share one timestamp.
    """
    earned_at = now or datetime.now(timezone.utc)
    badges = []

    if identity_verified:
        badges.append(
            CreditBadge(
                id="identity_verified",
                name="Identity Verified",
                description="Identity verification completed",
                icon="shield-check",
                earned_at=earned_at,
            )
        )

    if employment_verified and employment_type in EMPLOYMENT_BADGES:
        badge_id, name, description, icon = EMPLOYMENT_BADGES[employment_type]
        badges.append(CreditBadge(id=badge_id, name=name, description=description, icon=icon, earned_at=earned_at))

    if analysis is not None:
        if analysis.income_consistency >= CONSISTENT_INCOME_THRESHOLD:
            badges.append(
                CreditBadge(
                    id="consistent_income",
                    name="Consistent Income",
                    description="Regular income pattern detected",
                    icon="trending-up",
                    earned_at=earned_at,
                )
            )

        if analysis.total_credits > analysis.total_debits:
            badges.append(
                CreditBadge(
                    id="positive_cashflow",
                    name="Cash Flow Positive",
                    description="Healthy financial balance",
                    icon="wallet",
                    earned_at=earned_at,
                )
            )

        if len(analysis.detected_sources) > 1:
            badges.append(
                CreditBadge(
                    id="multiple_income",
                    name="Multiple Income Streams",
                    description="Diversified income sources",
                    icon="coins",
                    earned_at=earned_at,
                )
            )

    return badges


def build_financial_profile(
    income: float,
    identity_verified: bool,
    employment_verified: bool,
    employment_type: Optional[EmploymentType] = None,
    analysis: Optional[TransactionAnalysis] = None,
    expenses: Optional[float] = None,
    now: Optional[datetime] = None,
) -> FinancialProfile:
    """
    Main entry point: turn onboarding inputs into a complete profile.

    Pure and idempotent; identical arguments give equal profiles apart
    from badge timestamps (pass `now` to pin those too).
    """
    result = calculate_safe_amount(
        income,
        analysis,
        identity_verified=identity_verified,
        employment_verified=employment_verified,
        stated_expenses=expenses,
    )
    credit_score = calculate_credit_score(identity_verified, employment_verified, analysis, income)
    badges = generate_badges(identity_verified, employment_verified, employment_type, analysis, now=now)

    return FinancialProfile(
        total_income=result.breakdown.income,
        estimated_expenses=result.breakdown.expenses,
        disposable_income=result.breakdown.disposable,
        safe_monthly_repayment=result.safe_amount,
        max_monthly_repayment=result.max_amount,
        repayment_ratio=result.breakdown.safe_ratio,
        credit_score=credit_score,
        badges=tuple(badges),
    )


def build_profile_from_inputs(
    inputs: FinancialInputs,
    analysis: Optional[TransactionAnalysis] = None,
    now: Optional[datetime] = None,
) -> FinancialProfile:
    """Convenience wrapper over build_financial_profile for a FinancialInputs record"""
    return build_financial_profile(
        inputs.stated_monthly_income,
        inputs.is_identity_verified,
        inputs.is_employment_verified,
        inputs.employment_type,
        analysis,
        inputs.monthly_expenses,
        now=now,
    )
