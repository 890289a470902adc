"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import List, Optional

from loan_engine.domain.models import (
    DebtObligation,
    DebtType,
    HousingCosts,
    IncomeProfile,
    PaymentFrequency,
)


class DebtObligationSchema(BaseModel):
    """Existing debt entered in the debt list"""

    balance: float = Field(..., ge=0, allow_inf_nan=False, description="Outstanding balance")
    interest_rate_percent: float = Field(..., ge=0, allow_inf_nan=False, description="Annual rate, 5.25 means 5.25%")
    minimum_payment: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Omit to have it estimated")
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    is_interest_only: bool = False
    type: DebtType = DebtType.OTHER

    def to_domain(self) -> DebtObligation:
        return DebtObligation(
            balance=self.balance,
            interest_rate_percent=self.interest_rate_percent,
            minimum_payment=self.minimum_payment,
            payment_frequency=self.payment_frequency,
            is_interest_only=self.is_interest_only,
            type=self.type,
        )


class IncomeSchema(BaseModel):
    """Gross income used as the ratio denominator"""

    monthly_income: float = Field(..., ge=0, allow_inf_nan=False)
    other_annual_income: float = Field(0.0, ge=0, allow_inf_nan=False)

    def to_domain(self) -> IncomeProfile:
        return IncomeProfile(monthly_income=self.monthly_income, other_annual_income=self.other_annual_income)


class HousingSchema(BaseModel):
    """Property carrying costs (mortgages only)"""

    property_value: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    property_tax_annual: float = Field(0.0, ge=0, allow_inf_nan=False)
    heating_costs_monthly: float = Field(0.0, ge=0, allow_inf_nan=False)
    condo_fees_monthly: float = Field(0.0, ge=0, allow_inf_nan=False)

    def to_domain(self) -> HousingCosts:
        return HousingCosts(
            property_tax_annual=self.property_tax_annual,
            heating_costs_monthly=self.heating_costs_monthly,
            condo_fees_monthly=self.condo_fees_monthly,
            property_value=self.property_value,
        )


class AmortizationPeriodSchema(BaseModel):
    """Single row of an amortization schedule"""

    period: int
    payment: float
    principal_portion: float
    interest_portion: float
    remaining_balance: float


class ServiceabilitySchema(BaseModel):
    """GDSR/TDSR ratios and affordability"""

    gross_debt_service_ratio: float
    total_debt_service_ratio: float
    monthly_housing_expenses: float
    monthly_debt_payments: float
    total_monthly_obligations: float
    available_monthly_income: float
    max_affordable_loan: float


class ApprovalSchema(BaseModel):
    """Approval likelihood under the 32% GDSR / 44% TDSR policy"""

    approval_likely: bool
    reasons: List[str] = []


class LoanCalculationRequest(BaseModel):
    """Request body for POST /v1/loan/calculate"""

    amount: float = Field(..., gt=0, allow_inf_nan=False, description="Purchase or loan amount before down payment")
    down_payment: float = Field(0.0, ge=0, allow_inf_nan=False)
    annual_rate_percent: float = Field(..., ge=0, allow_inf_nan=False)
    term_years: int = Field(..., gt=0)
    loan_type: DebtType = DebtType.PERSONAL
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    income: IncomeSchema
    housing: Optional[HousingSchema] = None
    existing_debts: List[DebtObligationSchema] = []


class LoanCalculationResponse(BaseModel):
    """Response for POST /v1/loan/calculate"""

    monthly_payment: float
    biweekly_payment: float
    display_payment: float  # biweekly figure unless the loan is paid monthly
    payment_frequency: PaymentFrequency
    total_payment: float
    total_interest: float
    loan_to_value_ratio: float
    total_cost_of_borrowing: float
    break_even_point: int
    estimated_tax_savings: float
    debt_service_ratios: ServiceabilitySchema
    approval: ApprovalSchema
    amortization_schedule: List[AmortizationPeriodSchema]


class ScheduleRequest(BaseModel):
    """Request body for POST /v1/loan/schedule"""

    principal: float = Field(..., gt=0, allow_inf_nan=False)
    annual_rate_percent: float = Field(..., ge=0, allow_inf_nan=False)
    term_years: int = Field(..., gt=0)


class ScheduleResponse(BaseModel):
    """Response for POST /v1/loan/schedule"""

    monthly_payment: float
    biweekly_payment: float
    total_interest: float
    amortization_schedule: List[AmortizationPeriodSchema]


class ServiceabilityRequest(BaseModel):
    """Request body for POST /v1/serviceability"""

    principal: float = Field(..., gt=0, allow_inf_nan=False)
    annual_rate_percent: float = Field(..., ge=0, allow_inf_nan=False)
    term_years: int = Field(..., gt=0)
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    new_loan_monthly_payment: float = Field(..., ge=0, allow_inf_nan=False)
    income: IncomeSchema
    housing: Optional[HousingSchema] = None
    existing_debts: List[DebtObligationSchema] = []


class ServiceabilityResponse(BaseModel):
    """Response for POST /v1/serviceability"""

    debt_service_ratios: ServiceabilitySchema
    approval: ApprovalSchema


class PayoffRequest(BaseModel):
    """Request body for POST /v1/debt/payoff"""

    debts: List[DebtObligationSchema] = Field(..., min_length=1)
    monthly_income: float = Field(0.0, ge=0, allow_inf_nan=False)
    monthly_expenses: float = Field(0.0, ge=0, allow_inf_nan=False)
    additional_payment: float = Field(0.0, ge=0, allow_inf_nan=False)


class PayoffResponse(BaseModel):
    """Response for POST /v1/debt/payoff"""

    total_debt: float
    weighted_interest_rate: float
    total_minimum_payment: float
    months: int
    total_interest: float
    total_payment: float
    debt_to_income_ratio: float
    disposable_income: float
    remaining_balance: float
    paid_off: bool


class NormalizeRequest(BaseModel):
    """Request body for POST /v1/payments/normalize"""

    payment: float = Field(..., ge=0, allow_inf_nan=False)
    payment_frequency: PaymentFrequency


class NormalizeResponse(BaseModel):
    """Response for POST /v1/payments/normalize"""

    payment: float
    payment_frequency: PaymentFrequency
    monthly_equivalent: float
