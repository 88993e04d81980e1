"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from creditgo_gateway.domain.models import EmploymentType, TransactionType
from creditgo_gateway.domain.validation import parse_income

# N1 trillion per month
MAX_NAIRA_AMOUNT = 1_000_000_000_000


class MessageSchema(BaseModel):
    """Raw bank alert as received on the device"""

    body: str
    date: datetime
    address: Optional[str] = None


class TransactionSchema(BaseModel):
    """Parsed credit/debit transaction"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    type: TransactionType
    amount: float
    description: str
    date: datetime
    source: Optional[str] = None
    category: Optional[str] = None


class AnalysisSchema(BaseModel):
    """Income statistics derived from transactions"""

    model_config = ConfigDict(from_attributes=True)

    total_credits: float
    total_debits: float
    average_monthly_income: float
    income_consistency: float
    detected_sources: List[str]


class ParseRequest(BaseModel):
    """Request body for POST /v1/transactions/parse"""

    messages: List[MessageSchema] = Field(default_factory=list)
    filter_bank_alerts: bool = Field(False, description="Apply bank sender/content filter first")


class TransactionsResponse(BaseModel):
    """Parsed transactions with their analysis"""

    transactions: List[TransactionSchema]
    analysis: AnalysisSchema


class ImportRequest(BaseModel):
    """Request body for POST /v1/transactions/import"""

    max_count: int = Field(200, gt=0, le=1000, description="Maximum inbox messages to read")


class ImportResponse(BaseModel):
    """Outcome of a device inbox import"""

    success: bool
    transactions: List[TransactionSchema]
    analysis: Optional[AnalysisSchema] = None
    error: Optional[str] = None


class ExpenseBreakdownSchema(BaseModel):
    """Monthly expenses per category"""

    rent: int = Field(0, ge=0, le=MAX_NAIRA_AMOUNT)
    utilities: int = Field(0, ge=0, le=MAX_NAIRA_AMOUNT)
    internet: int = Field(0, ge=0, le=MAX_NAIRA_AMOUNT)
    transport: int = Field(0, ge=0, le=MAX_NAIRA_AMOUNT)
    food: int = Field(0, ge=0, le=MAX_NAIRA_AMOUNT)
    other: int = Field(0, ge=0, le=MAX_NAIRA_AMOUNT)


class ProfileRequest(BaseModel):
    """Request body for POST /v1/profile"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    monthly_income: int = Field(..., ge=0, le=MAX_NAIRA_AMOUNT, description="Stated monthly income; separators are ignored")
    monthly_expenses: Optional[int] = Field(None, ge=0, le=MAX_NAIRA_AMOUNT)
    expense_breakdown: Optional[ExpenseBreakdownSchema] = None
    employment_type: EmploymentType = EmploymentType.NONE
    is_identity_verified: bool = False
    is_employment_verified: bool = False
    messages: Optional[List[MessageSchema]] = None
    use_demo_sms: bool = Field(False, description="Analyze the demo inbox when no messages are sent")

    @field_validator("monthly_income", mode="before")
    @classmethod
    def strip_income_separators(cls, value):
        if isinstance(value, str):
            return parse_income(value)
        return value


class BadgeSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    icon: str
    earned_at: datetime


class CreditTierSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tier: str
    name: str
    color: str
    benefits: List[str]


class ProfileResponse(BaseModel):
    """Financial profile as rendered by the app"""

    user_id: str
    total_income: int
    estimated_expenses: int
    disposable_income: int
    safe_monthly_repayment: int
    max_monthly_repayment: int
    safe_monthly_repayment_display: str
    max_monthly_repayment_display: str
    repayment_ratio: float
    credit_score: int
    badges: List[BadgeSchema]
    tier: CreditTierSchema
    risk_level: Optional[str] = None


class NinRequest(BaseModel):
    nin: str


class NinResponse(BaseModel):
    is_valid: bool
    formatted: str


class EmailRequest(BaseModel):
    email: str


class EmailValidationResponse(BaseModel):
    is_valid: bool
    error: Optional[str] = None
    is_free_provider: bool = False


class WorkEmailResponse(BaseModel):
    is_valid: bool
    company: Optional[str] = None


class FreelanceLinkRequest(BaseModel):
    url: str


class FreelanceLinkResponse(BaseModel):
    is_valid: bool
    platform: Optional[str] = None


class CreditLimitRequest(BaseModel):
    """Request body for POST /v1/credit-limit (partner pre-qualification)"""

    monthly_income: int = Field(..., ge=0, le=MAX_NAIRA_AMOUNT, description="Stated monthly income; separators are ignored")
    is_identity_verified: bool = False
    is_employment_verified: bool = False
    messages: Optional[List[MessageSchema]] = None
    use_demo_sms: bool = False

    @field_validator("monthly_income", mode="before")
    @classmethod
    def strip_income_separators(cls, value):
        if isinstance(value, str):
            return parse_income(value)
        return value


class AffordabilityBreakdownSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    income: int
    expenses: int
    disposable: int
    safe_ratio: float
    max_ratio: float


class CreditLimitResponse(BaseModel):
    """Ratio-based repayment limits, not stored"""

    model_config = ConfigDict(from_attributes=True)

    safe_monthly_repayment: int
    max_monthly_repayment: int
    credit_score: int
    risk_level: str
    breakdown: AffordabilityBreakdownSchema
