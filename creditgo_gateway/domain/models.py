"""Domain models - pure Python dataclasses representing financial-profile entities"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class TransactionType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class EmploymentType(str, Enum):
    SALARIED = "salaried"
    FREELANCER = "freelancer"
    BUSINESS = "business"
    NONE = "none"


@dataclass(frozen=True)
class RawMessage:
    """Bank alert text as delivered by a message source"""

    body: str
    date: datetime
    address: Optional[str] = None
    message_id: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Credit or debit parsed from a single bank alert"""

    id: str
    type: TransactionType
    amount: float
    description: str
    date: datetime
    source: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class TransactionAnalysis:
    """Income statistics aggregated from a transaction collection"""

    total_credits: float
    total_debits: float
    average_monthly_income: float
    income_consistency: float
    detected_sources: Tuple[str, ...]
    transactions: Tuple[Transaction, ...]


@dataclass(frozen=True)
class ExpenseBreakdown:
    """Monthly expenses entered per category during onboarding"""

    rent: int = 0
    utilities: int = 0
    internet: int = 0
    transport: int = 0
    food: int = 0
    other: int = 0

    @property
    def total(self) -> int:
        return self.rent + self.utilities + self.internet + self.transport + self.food + self.other


@dataclass(frozen=True)
class FinancialInputs:
    """User-entered figures and verification flags owned by onboarding"""

    stated_monthly_income: int
    employment_type: EmploymentType = EmploymentType.NONE
    is_identity_verified: bool = False
    is_employment_verified: bool = False
    monthly_expenses: Optional[int] = None


@dataclass(frozen=True)
class AffordabilityBreakdown:
    """Intermediate figures behind a safe-amount calculation"""

    income: int
    expenses: int
    disposable: int
    safe_ratio: float
    max_ratio: float


@dataclass(frozen=True)
class SafeAmountResult:
    """Output of the safe-amount calculator"""

    safe_amount: int
    max_amount: int
    breakdown: AffordabilityBreakdown


@dataclass(frozen=True)
class CreditTier:
    """Display band for a credit score"""

    tier: str  # bronze | silver | gold | platinum
    name: str
    color: str
    benefits: Tuple[str, ...]


@dataclass(frozen=True)
class CreditLimitCalculation:
    """Ratio-based repayment limits with a coarse risk level"""

    safe_monthly_repayment: int
    max_monthly_repayment: int
    credit_score: int
    risk_level: str  # low | medium | high
    breakdown: AffordabilityBreakdown


@dataclass(frozen=True)
class CreditBadge:
    """Evidence badge shown on the user's profile"""

    id: str
    name: str
    description: str
    icon: str
    earned_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "earned_at": self.earned_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CreditBadge":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data["description"],
            icon=data["icon"],
            earned_at=datetime.fromisoformat(data["earned_at"]),
        )


@dataclass(frozen=True)
class FinancialProfile:
    """Result of a full profile computation, consumed by display components"""

    total_income: int
    estimated_expenses: int
    disposable_income: int
    safe_monthly_repayment: int
    max_monthly_repayment: int
    repayment_ratio: float
    credit_score: int
    badges: Tuple[CreditBadge, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-serializable form stored in the key-value store"""
        return {
            "total_income": self.total_income,
            "estimated_expenses": self.estimated_expenses,
            "disposable_income": self.disposable_income,
            "safe_monthly_repayment": self.safe_monthly_repayment,
            "max_monthly_repayment": self.max_monthly_repayment,
            "repayment_ratio": self.repayment_ratio,
            "credit_score": self.credit_score,
            "badges": [badge.to_dict() for badge in self.badges],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FinancialProfile":
        return cls(
            total_income=data["total_income"],
            estimated_expenses=data["estimated_expenses"],
            disposable_income=data["disposable_income"],
            safe_monthly_repayment=data["safe_monthly_repayment"],
            max_monthly_repayment=data["max_monthly_repayment"],
            repayment_ratio=data["repayment_ratio"],
            credit_score=data["credit_score"],
            badges=tuple(CreditBadge.from_dict(b) for b in data.get("badges", [])),
        )


@dataclass(frozen=True)
class EmailValidationResult:
    is_valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class CorporateEmailResult:
    is_valid: bool
    company: Optional[str] = None


@dataclass(frozen=True)
class FreelanceLinkResult:
    is_valid: bool
    platform: Optional[str] = None


@dataclass(frozen=True)
class SmsImportResult:
    """Outcome of a best-effort device inbox import"""

    success: bool
    transactions: Tuple[Transaction, ...]
    error: Optional[str] = None
