"""Financial profile endpoints - compute, fetch and reset a user's profile"""

import time
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from creditgo_gateway.api.dependencies import get_demo_source, get_request_id
from creditgo_gateway.api.v1.schemas import (
    BadgeSchema,
    CreditTierSchema,
    ProfileRequest,
    ProfileResponse,
)
from creditgo_gateway.api.v1.transactions import analyze_request_messages
from creditgo_gateway.domain.affordability import assess_risk_level
from creditgo_gateway.domain.exceptions import ProfileNotFoundError
from creditgo_gateway.domain.models import ExpenseBreakdown, FinancialInputs, FinancialProfile
from creditgo_gateway.domain.profile import build_profile_from_inputs
from creditgo_gateway.domain.scoring import get_credit_tier
from creditgo_gateway.infrastructure.clients.demo_messages import DemoMessageSource
from creditgo_gateway.infrastructure.database.repositories import ProfileRepository
from creditgo_gateway.infrastructure.database.session import get_db
from creditgo_gateway.infrastructure.observability.logging import log_profile_computed
from creditgo_gateway.infrastructure.observability.metrics import record_profile
from creditgo_gateway.utils.formatting import format_naira

router = APIRouter()


def _profile_response(user_id: str, profile: FinancialProfile, risk_level: Optional[str] = None) -> ProfileResponse:
    return ProfileResponse(
        user_id=user_id,
        total_income=profile.total_income,
        estimated_expenses=profile.estimated_expenses,
        disposable_income=profile.disposable_income,
        safe_monthly_repayment=profile.safe_monthly_repayment,
        max_monthly_repayment=profile.max_monthly_repayment,
        safe_monthly_repayment_display=format_naira(profile.safe_monthly_repayment),
        max_monthly_repayment_display=format_naira(profile.max_monthly_repayment),
        repayment_ratio=profile.repayment_ratio,
        credit_score=profile.credit_score,
        badges=[BadgeSchema.model_validate(b) for b in profile.badges],
        tier=CreditTierSchema.model_validate(get_credit_tier(profile.credit_score)),
        risk_level=risk_level,
    )


@router.post("/profile", response_model=ProfileResponse)
def create_profile(
    request_body: ProfileRequest,
    request: Request,
    db: Session = Depends(get_db),
    demo_source: DemoMessageSource = Depends(get_demo_source),
):
    """
    Build the user's financial profile from onboarding inputs.

    Flow:
    1. Parse SMS alerts (request messages, or the demo inbox when asked)
    2. Analyze income statistics
    3. Compute safe/max repayment, credit score and badges
    4. Replace the stored profile
    5. Return the profile with its tier and risk level
    """
    start_time = time.time()
    request_id = get_request_id(request)

    # 1-2. Optional SMS evidence
    analysis = analyze_request_messages(request_body.messages, request_body.use_demo_sms, demo_source)

    if request_body.monthly_expenses is not None:
        expenses = request_body.monthly_expenses
    elif request_body.expense_breakdown is not None:
        expenses = ExpenseBreakdown(**request_body.expense_breakdown.model_dump()).total
    else:
        expenses = None

    # 3. Compute
    inputs = FinancialInputs(
        stated_monthly_income=request_body.monthly_income,
        employment_type=request_body.employment_type,
        is_identity_verified=request_body.is_identity_verified,
        is_employment_verified=request_body.is_employment_verified,
        monthly_expenses=expenses,
    )
    profile = build_profile_from_inputs(inputs, analysis)
    risk_level = assess_risk_level(
        request_body.is_identity_verified,
        request_body.is_employment_verified,
        analysis,
    )
    tier = get_credit_tier(profile.credit_score)

    # 4. Persist
    try:
        ProfileRepository(db).save_profile(request_body.user_id, profile)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Failed to store profile: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_profile(tier.tier, profile.safe_monthly_repayment)
    log_profile_computed(
        request_id,
        request_body.user_id,
        profile.credit_score,
        tier.tier,
        profile.safe_monthly_repayment,
        len(analysis.transactions) if analysis else 0,
        duration_ms,
    )

    return _profile_response(request_body.user_id, profile, risk_level)


@router.get("/profile/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: str, db: Session = Depends(get_db)):
    """Retrieve the last stored profile exactly as it was computed"""
    try:
        profile = ProfileRepository(db).get_profile(user_id)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")

    return _profile_response(user_id, profile)


@router.delete("/profile/{user_id}", status_code=204)
def delete_profile(user_id: str, request: Request, db: Session = Depends(get_db)):
    """Reset: drop the stored profile so onboarding can start over"""
    try:
        ProfileRepository(db).delete_profile(user_id)
        db.commit()
    except ProfileNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Profile not found")

    logging.info("Profile reset", extra={"request_id": get_request_id(request), "user_id": user_id})
    return Response(status_code=204)
