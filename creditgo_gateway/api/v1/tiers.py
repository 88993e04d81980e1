"""Credit endpoints - tier lookup and partner pre-qualification limits"""

from fastapi import APIRouter, Depends, Path

from creditgo_gateway.api.dependencies import get_demo_source
from creditgo_gateway.api.v1.schemas import CreditLimitRequest, CreditLimitResponse, CreditTierSchema
from creditgo_gateway.api.v1.transactions import analyze_request_messages
from creditgo_gateway.domain.affordability import calculate_credit_limit
from creditgo_gateway.domain.scoring import get_credit_tier
from creditgo_gateway.infrastructure.clients.demo_messages import DemoMessageSource

router = APIRouter()


@router.get("/credit-tier/{score}", response_model=CreditTierSchema)
def credit_tier(score: int = Path(..., ge=0, le=100, description="Credit score")):
    """Return the display tier, color and benefits for a 0-100 score"""
    return CreditTierSchema.model_validate(get_credit_tier(score))


@router.post("/credit-limit", response_model=CreditLimitResponse)
def credit_limit(
    request_body: CreditLimitRequest,
    demo_source: DemoMessageSource = Depends(get_demo_source),
):
    """
    Pre-qualify a user for a lending partner.

    Limits come from the debt-service ratios alone (stated expenses are
    not considered) and nothing is stored.
    """
    analysis = analyze_request_messages(request_body.messages, request_body.use_demo_sms, demo_source)
    limit = calculate_credit_limit(
        request_body.monthly_income,
        analysis,
        identity_verified=request_body.is_identity_verified,
        employment_verified=request_body.is_employment_verified,
    )
    return CreditLimitResponse.model_validate(limit)
