"""Credit scoring engine - 0-100 score and display tier"""

import math
from typing import Optional

from creditgo_gateway.domain.models import CreditTier, TransactionAnalysis

BASE_SCORE = 30
IDENTITY_POINTS = 20
EMPLOYMENT_POINTS = 15
CONSISTENCY_POINTS = 20
MULTIPLE_SOURCES_POINTS = 10
POSITIVE_CASH_FLOW_POINTS = 5
MIN_INCOME_SOURCES = 2

# (monthly income threshold in naira, bonus points), highest first
INCOME_BONUS_TABLE = (
    (1_000_000, 10),
    (500_000, 7),
    (300_000, 5),
    (150_000, 3),
)

MIN_SCORE = 0
MAX_SCORE = 100


def income_bonus(monthly_income: Optional[float]) -> int:
    if not monthly_income or monthly_income <= 0:
        return 0
    for threshold, points in INCOME_BONUS_TABLE:
        if monthly_income >= threshold:
            return points
    return 0


def calculate_credit_score(
    identity_verified: bool,
    employment_verified: bool,
    analysis: Optional[TransactionAnalysis] = None,
    monthly_income: Optional[float] = None,
) -> int:
    """
    Calculate credit score from 0 (no evidence) to 100.

    Points:
    - 30 base for completing onboarding
    - +20 identity verified, +15 employment verified
    - SMS analysis: up to +20 for income consistency, +10 for 2+
      income sources, +5 when credits exceed debits
    - income level: +3 / +5 / +7 / +10 at N150k / N300k / N500k / N1m

    The raw sum can exceed 100 and is clamped.
    """
    score = BASE_SCORE

    if identity_verified:
        score += IDENTITY_POINTS
    if employment_verified:
        score += EMPLOYMENT_POINTS

    if analysis is not None:
        consistency = min(max(analysis.income_consistency, 0.0), 1.0)
        score += math.floor(round(consistency * CONSISTENCY_POINTS, 6))

        if len(analysis.detected_sources) >= MIN_INCOME_SOURCES:
            score += MULTIPLE_SOURCES_POINTS

        if analysis.total_credits > analysis.total_debits:
            score += POSITIVE_CASH_FLOW_POINTS

    score += income_bonus(monthly_income)

    return int(min(MAX_SCORE, max(MIN_SCORE, round(score))))


def get_credit_tier(score: float) -> CreditTier:
    """
    Map a score to its display tier.

    Tier bands:
    - 85+:    Platinum
    - 70-84:  Gold
    - 55-69:  Silver
    - 0-54:   Bronze
    """
    if score >= 85:
        return CreditTier(
            tier="platinum",
            name="Platinum",
            color="#6366f1",
            benefits=("Lowest interest rates", "Priority processing", "Higher limits"),
        )
    elif score >= 70:
        return CreditTier(
            tier="gold",
            name="Gold",
            color="#eab308",
            benefits=("Low interest rates", "Fast processing", "Good limits"),
        )
    elif score >= 55:
        return CreditTier(
            tier="silver",
            name="Silver",
            color="#94a3b8",
            benefits=("Standard rates", "Regular processing", "Standard limits"),
        )
    else:
        return CreditTier(
            tier="bronze",
            name="Bronze",
            color="#d97706",
            benefits=("Entry-level access", "Build your score", "Limited options"),
        )
