"""Serviceability evaluation - GDSR/TDSR ratios, affordability and approval policy"""

from typing import List, Optional

from loan_engine.domain.amortization import compute_max_loan_amount
from loan_engine.domain.models import (
    ApprovalAssessment,
    DebtObligation,
    HousingCosts,
    IncomeProfile,
    LoanTerms,
    ServiceabilityResult,
)
from loan_engine.domain.normalization import resolve_monthly_payment, validate_debt
from loan_engine.utils.numeric import require_finite_non_negative, require_positive, safe_percentage

# Lender policy ceilings, in percent of gross monthly income
GDSR_LIMIT_PERCENT = 32.0
TDSR_LIMIT_PERCENT = 44.0


def calculate_monthly_housing_expenses(new_loan_monthly_payment: float, housing: Optional[HousingCosts]) -> float:
    """Principal and interest plus monthly property tax, heating and condo fees"""
    if housing is None:
        return new_loan_monthly_payment

    return (
        new_loan_monthly_payment
        + housing.property_tax_annual / 12
        + housing.heating_costs_monthly
        + housing.condo_fees_monthly
    )


def calculate_monthly_debt_payments(existing_debts: List[DebtObligation]) -> float:
    """Sum of monthly-equivalent payments on all existing debts"""
    return sum(resolve_monthly_payment(debt) for debt in existing_debts)


def evaluate(
    loan_terms: LoanTerms,
    new_loan_monthly_payment: float,
    existing_debts: List[DebtObligation],
    income: IncomeProfile,
    housing: Optional[HousingCosts] = None,
) -> ServiceabilityResult:
    """
    Aggregate the new loan, housing costs and existing debts against income.

    Ratios:
    - GDSR = housing expenses / total monthly income * 100
    - TDSR = (housing expenses + existing debt payments) / total monthly income * 100

    Zero income yields 0 ratios instead of dividing by zero; this is a normal
    state while a form is being filled in.

    maxAffordableLoan is the principal whose payment at the loan's rate/term
    fills the TDSR ceiling after existing debts; 0 when there is no room.
    """
    require_finite_non_negative(loan_terms.annual_rate_percent, "annual_rate_percent")
    require_positive(loan_terms.term_years, "term_years")
    require_finite_non_negative(new_loan_monthly_payment, "new_loan_monthly_payment")
    require_finite_non_negative(income.monthly_income, "monthly_income")
    require_finite_non_negative(income.other_annual_income, "other_annual_income")
    for index, debt in enumerate(existing_debts):
        validate_debt(debt, index)
    if housing is not None:
        require_finite_non_negative(housing.property_tax_annual, "property_tax_annual")
        require_finite_non_negative(housing.heating_costs_monthly, "heating_costs_monthly")
        require_finite_non_negative(housing.condo_fees_monthly, "condo_fees_monthly")

    total_monthly_income = income.total_monthly_income

    monthly_housing_expenses = calculate_monthly_housing_expenses(new_loan_monthly_payment, housing)
    monthly_debt_payments = calculate_monthly_debt_payments(existing_debts)
    total_monthly_obligations = monthly_housing_expenses + monthly_debt_payments

    gross_debt_service_ratio = safe_percentage(monthly_housing_expenses, total_monthly_income)
    total_debt_service_ratio = safe_percentage(total_monthly_obligations, total_monthly_income)

    max_monthly_payment = total_monthly_income * TDSR_LIMIT_PERCENT / 100 - monthly_debt_payments
    max_affordable_loan = compute_max_loan_amount(
        max_monthly_payment,
        loan_terms.annual_rate_percent,
        loan_terms.term_years,
    )

    return ServiceabilityResult(
        gross_debt_service_ratio=gross_debt_service_ratio,
        total_debt_service_ratio=total_debt_service_ratio,
        monthly_housing_expenses=monthly_housing_expenses,
        monthly_debt_payments=monthly_debt_payments,
        total_monthly_obligations=total_monthly_obligations,
        available_monthly_income=total_monthly_income - total_monthly_obligations,
        max_affordable_loan=max_affordable_loan,
    )


def assess_approval(result: ServiceabilityResult) -> ApprovalAssessment:
    """
    Apply the lender ceilings to a serviceability result.

    Approval is likely only when GDSR <= 32% and TDSR <= 44%. Each exceeded
    ceiling is named in the reasons, in GDSR, TDSR order.
    """
    reasons = []

    if result.gross_debt_service_ratio > GDSR_LIMIT_PERCENT:
        reasons.append(f"Gross Debt Service Ratio exceeds {GDSR_LIMIT_PERCENT:g}%")
    if result.total_debt_service_ratio > TDSR_LIMIT_PERCENT:
        reasons.append(f"Total Debt Service Ratio exceeds {TDSR_LIMIT_PERCENT:g}%")

    return ApprovalAssessment(approval_likely=not reasons, reasons=reasons)
