"""Onboarding validation endpoints - NIN, email, work email, freelance profile"""

from fastapi import APIRouter

from creditgo_gateway.api.v1.schemas import (
    EmailRequest,
    EmailValidationResponse,
    FreelanceLinkRequest,
    FreelanceLinkResponse,
    NinRequest,
    NinResponse,
    WorkEmailResponse,
)
from creditgo_gateway.domain.validation import (
    format_nin,
    is_free_email_provider,
    validate_corporate_email,
    validate_email_format,
    validate_freelance_link,
    validate_nin,
)
from creditgo_gateway.infrastructure.observability.metrics import record_validation_failure

router = APIRouter()


@router.post("/validate/nin", response_model=NinResponse)
def check_nin(request_body: NinRequest):
    is_valid = validate_nin(request_body.nin)
    if not is_valid:
        record_validation_failure("nin")
    return NinResponse(is_valid=is_valid, formatted=format_nin(request_body.nin))


@router.post("/validate/email", response_model=EmailValidationResponse)
def check_email(request_body: EmailRequest):
    """
    Structural email check.

    Invalid input is a 200 with is_valid=false; the error string is
    meant to be shown to the user directly.
    """
    result = validate_email_format(request_body.email)
    if result.error is not None:
        record_validation_failure("email")
    return EmailValidationResponse(
        is_valid=result.is_valid,
        error=result.error,
        is_free_provider=result.is_valid and is_free_email_provider(request_body.email.strip()),
    )


@router.post("/validate/work-email", response_model=WorkEmailResponse)
def check_work_email(request_body: EmailRequest):
    result = validate_corporate_email(request_body.email)
    if not result.is_valid:
        record_validation_failure("work_email")
    return WorkEmailResponse(is_valid=result.is_valid, company=result.company)


@router.post("/validate/freelance-link", response_model=FreelanceLinkResponse)
def check_freelance_link(request_body: FreelanceLinkRequest):
    result = validate_freelance_link(request_body.url)
    if not result.is_valid:
        record_validation_failure("freelance_link")
    return FreelanceLinkResponse(is_valid=result.is_valid, platform=result.platform)
