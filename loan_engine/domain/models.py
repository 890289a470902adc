"""Domain models - pure Python dataclasses representing loans, debts and ratio results"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class PaymentFrequency(str, Enum):
    """Cadence a payment is stated in"""

    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"
    WEEKLY = "weekly"
    ACCELERATED_BIWEEKLY = "acceleratedBiweekly"


class DebtType(str, Enum):
    """Debt facility types offered by the loan and debt forms"""

    PERSONAL = "personal"
    MORTGAGE = "mortgage"
    AUTO = "auto"
    STUDENT = "student"
    OTHER = "other"
    CAR_LOAN = "carLoan"
    STUDENT_LOAN = "studentLoan"
    CREDIT_CARD = "creditCard"
    LINE_OF_CREDIT = "lineOfCredit"
    PERSONAL_LOAN = "personalLoan"
    HELOC = "heloc"


@dataclass(frozen=True)
class LoanTerms:
    """A single loan facility being priced"""

    principal: float  # amount financed, after any down payment
    annual_rate_percent: float  # 5.25 means 5.25%
    term_years: int
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY


@dataclass(frozen=True)
class AmortizationPeriod:
    """One row of an amortization schedule"""

    period: int
    payment: float
    principal_portion: float
    interest_portion: float
    remaining_balance: float


@dataclass(frozen=True)
class DebtObligation:
    """Existing debt counted toward the total debt service ratio"""

    balance: float
    interest_rate_percent: float
    minimum_payment: Optional[float] = None  # None means estimate it
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    is_interest_only: bool = False
    type: DebtType = DebtType.OTHER


@dataclass(frozen=True)
class IncomeProfile:
    """Gross income feeding the denominator of every ratio"""

    monthly_income: float
    other_annual_income: float = 0.0

    @property
    def total_monthly_income(self) -> float:
        return self.monthly_income + self.other_annual_income / 12


@dataclass(frozen=True)
class HousingCosts:
    """Property carrying costs added to the housing expense for GDSR"""

    property_tax_annual: float = 0.0
    heating_costs_monthly: float = 0.0
    condo_fees_monthly: float = 0.0
    property_value: Optional[float] = None


@dataclass
class ServiceabilityResult:
    """Output of a serviceability evaluation"""

    gross_debt_service_ratio: float
    total_debt_service_ratio: float
    monthly_housing_expenses: float
    monthly_debt_payments: float
    total_monthly_obligations: float
    available_monthly_income: float  # negative signals a shortfall
    max_affordable_loan: float


@dataclass
class ApprovalAssessment:
    """Lender policy outcome derived from a ServiceabilityResult"""

    approval_likely: bool
    reasons: List[str] = field(default_factory=list)


@dataclass
class LoanCalculation:
    """Everything the loan calculator page displays for one set of terms"""

    monthly_payment: float
    biweekly_payment: float
    total_payment: float
    total_interest: float
    schedule: List[AmortizationPeriod]
    loan_to_value_ratio: float
    total_cost_of_borrowing: float
    break_even_point: int
    estimated_tax_savings: float
    debt_service_ratios: ServiceabilityResult
    approval: ApprovalAssessment


@dataclass
class PayoffPlan:
    """Aggregate payoff projection for a set of existing debts"""

    total_debt: float
    weighted_interest_rate: float
    total_minimum_payment: float
    months: int
    total_interest: float
    total_payment: float
    debt_to_income_ratio: float
    disposable_income: float
    remaining_balance: float = 0.0  # left unpaid at the projection horizon
    paid_off: bool = True
