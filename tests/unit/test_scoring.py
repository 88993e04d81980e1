"""Unit tests for credit scoring logic"""

import pytest
from creditgo_gateway.domain.models import TransactionAnalysis
from creditgo_gateway.domain.scoring import calculate_credit_score, get_credit_tier, income_bonus


def make_analysis(consistency, sources, credits, debits):
    return TransactionAnalysis(
        total_credits=credits,
        total_debits=debits,
        average_monthly_income=credits,
        income_consistency=consistency,
        detected_sources=tuple(sources),
        transactions=(),
    )


def test_base_score_for_unverified_user():
    """Test onboarding alone is worth 30 points"""
    assert calculate_credit_score(False, False) == 30


def test_verification_points():
    assert calculate_credit_score(True, False) == 50
    assert calculate_credit_score(False, True) == 45
    assert calculate_credit_score(True, True) == 65


def test_analysis_points():
    """Test consistency, sources and cash flow contributions"""
    analysis = make_analysis(0.6, ["Salary"], credits=200_000, debits=50_000)

    # 30 + 20 (identity) + floor(0.6 * 20) + 5 (cash flow) + 3 (income)
    assert calculate_credit_score(True, False, analysis, 200_000) == 70


def test_negative_cash_flow_earns_nothing():
    analysis = make_analysis(0.6, ["Fiverr", "Upwork"], credits=50_000, debits=50_000)

    # 30 + 12 + 10
    assert calculate_credit_score(False, False, analysis) == 52


@pytest.mark.parametrize(
    "income,points",
    [
        (None, 0),
        (0, 0),
        (-300_000, 0),
        (149_999, 0),
        (150_000, 3),
        (299_999, 3),
        (300_000, 5),
        (500_000, 7),
        (999_999, 7),
        (1_000_000, 10),
        (25_000_000, 10),
    ],
)
def test_income_bonus_table(income, points):
    assert income_bonus(income) == points


def test_score_is_clamped_to_100():
    analysis = make_analysis(0.9, ["Salary", "Upwork", "Fiverr"], credits=1_145_000, debits=140_000)

    assert calculate_credit_score(True, True, analysis, 1_000_000) == 100


def test_score_always_in_range():
    """Test every combination of inputs stays within 0-100"""
    analyses = [
        None,
        make_analysis(0.0, [], credits=0, debits=0),
        make_analysis(0.6, ["POS"], credits=10, debits=1_000),
        make_analysis(0.9, ["Salary", "Upwork"], credits=900_000, debits=10),
        make_analysis(5.0, ["Salary", "Upwork"], credits=900_000, debits=10),
    ]
    for identity in (False, True):
        for employment in (False, True):
            for analysis in analyses:
                for income in (None, -1, 0, 150_000, 10**9):
                    score = calculate_credit_score(identity, employment, analysis, income)
                    assert isinstance(score, int)
                    assert 0 <= score <= 100


@pytest.mark.parametrize(
    "score,tier",
    [
        (100, "platinum"),
        (85, "platinum"),
        (84, "gold"),
        (70, "gold"),
        (69, "silver"),
        (55, "silver"),
        (54, "bronze"),
        (0, "bronze"),
    ],
)
def test_tier_boundaries(score, tier):
    assert get_credit_tier(score).tier == tier


def test_tiers_partition_scores_in_order():
    """Test tiers never go down as the score goes up"""
    order = ["bronze", "silver", "gold", "platinum"]
    ranks = [order.index(get_credit_tier(score).tier) for score in range(0, 101)]

    assert ranks == sorted(ranks)
    assert set(ranks) == {0, 1, 2, 3}


def test_tier_display_details():
    platinum = get_credit_tier(90)

    assert platinum.name == "Platinum"
    assert platinum.color == "#6366f1"
    assert platinum.benefits == ("Lowest interest rates", "Priority processing", "Higher limits")
    assert get_credit_tier(10).color == "#d97706"
