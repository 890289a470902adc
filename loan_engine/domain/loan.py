"""Loan calculator - payment, schedule, cost metrics and debt service ratios for one loan"""

import math
from typing import List, Optional

from loan_engine.domain.amortization import (
    MAX_TERM_YEARS,
    build_amortization_schedule,
    compute_biweekly_payment,
    compute_monthly_payment,
)
from loan_engine.domain.exceptions import InvalidInputError
from loan_engine.domain.models import (
    DebtObligation,
    DebtType,
    HousingCosts,
    IncomeProfile,
    LoanCalculation,
    LoanTerms,
)
from loan_engine.domain.serviceability import assess_approval, evaluate
from loan_engine.utils.numeric import require_finite_non_negative, safe_percentage

# Rough marginal-rate estimate of the tax value of deductible mortgage interest
MORTGAGE_INTEREST_TAX_RATE = 0.25


def financed_principal(amount: float, down_payment: float) -> float:
    """Loan amount less down payment; must leave something to finance"""
    require_finite_non_negative(amount, "amount")
    require_finite_non_negative(down_payment, "down_payment")
    principal = amount - down_payment
    if principal <= 0:
        raise InvalidInputError("down_payment", "must be less than the loan amount")
    return principal


def calculate_loan(
    loan_terms: LoanTerms,
    income: IncomeProfile,
    existing_debts: Optional[List[DebtObligation]] = None,
    housing: Optional[HousingCosts] = None,
    loan_type: DebtType = DebtType.PERSONAL,
    max_term_years: int = MAX_TERM_YEARS,
) -> LoanCalculation:
    """
    Price a loan and test it against the borrower's income and debts.

    Flow:
    1. Build the monthly-stepped schedule (validates the terms)
    2. Total interest and cost from the schedule
    3. Serviceability ratios with the new payment as the housing payment
       (property tax, heating and condo fees count for mortgages only)
    4. Approval policy on those ratios

    Raises:
        InvalidInputError: invalid terms, income or debts
        InvalidPaymentError: the payment cannot amortize the loan
    """
    existing_debts = existing_debts or []
    principal = loan_terms.principal

    # Property fields only apply to mortgages; other loans carry no housing costs
    if loan_type != DebtType.MORTGAGE:
        housing = None

    schedule = build_amortization_schedule(
        principal,
        loan_terms.annual_rate_percent,
        loan_terms.term_years,
        max_term_years,
    )

    monthly_payment = compute_monthly_payment(principal, loan_terms.annual_rate_percent, loan_terms.term_years)
    total_payment = monthly_payment * len(schedule)
    total_interest = sum(row.interest_portion for row in schedule)

    property_value = housing.property_value if housing is not None else None
    loan_to_value_ratio = safe_percentage(principal, property_value) if property_value else 0.0

    debt_service_ratios = evaluate(loan_terms, monthly_payment, existing_debts, income, housing)

    return LoanCalculation(
        monthly_payment=monthly_payment,
        biweekly_payment=compute_biweekly_payment(monthly_payment),
        total_payment=total_payment,
        total_interest=total_interest,
        schedule=schedule,
        loan_to_value_ratio=loan_to_value_ratio,
        total_cost_of_borrowing=total_payment,
        break_even_point=math.ceil(principal / monthly_payment),
        estimated_tax_savings=(
            total_interest * MORTGAGE_INTEREST_TAX_RATE if loan_type == DebtType.MORTGAGE else 0.0
        ),
        debt_service_ratios=debt_service_ratios,
        approval=assess_approval(debt_service_ratios),
    )
