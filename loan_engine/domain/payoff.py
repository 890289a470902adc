"""Debt payoff projection for a borrower's existing debts"""

import math
from typing import List

from loan_engine.domain.exceptions import InvalidPaymentError
from loan_engine.domain.models import DebtObligation, PayoffPlan
from loan_engine.domain.normalization import resolve_monthly_payment, validate_debt
from loan_engine.utils.numeric import monthly_rate, require_finite_non_negative, safe_percentage

# Projection stops after 30 years even if a balance remains
PAYOFF_HORIZON_MONTHS = 360


def weighted_interest_rate(debts: List[DebtObligation]) -> float:
    """Balance-weighted average annual rate in percent; 0 when there is no debt"""
    total_debt = sum(debt.balance for debt in debts)
    if total_debt <= 0:
        return 0.0
    return sum(debt.interest_rate_percent * debt.balance for debt in debts) / total_debt


def project_payoff(
    total_debt: float, annual_rate_percent: float, monthly_payment: float
) -> tuple[int, float, float]:
    """
    Months to clear a pooled balance at a fixed monthly payment, and interest paid.

    Returns: (months, total_interest, remaining_balance). remaining_balance is
    non-zero only when the projection hit PAYOFF_HORIZON_MONTHS first.

    Raises:
        InvalidPaymentError: the payment does not exceed the first month's interest
    """
    if total_debt <= 0:
        return 0, 0.0, 0.0

    if annual_rate_percent == 0:
        if monthly_payment <= 0:
            raise InvalidPaymentError(monthly_payment, 0.0)
        months = math.ceil(total_debt / monthly_payment)
        if months > PAYOFF_HORIZON_MONTHS:
            return PAYOFF_HORIZON_MONTHS, 0.0, total_debt - monthly_payment * PAYOFF_HORIZON_MONTHS
        return months, 0.0, 0.0

    rate = monthly_rate(annual_rate_percent)
    first_interest = total_debt * rate
    if monthly_payment <= first_interest:
        raise InvalidPaymentError(monthly_payment, first_interest)

    balance = total_debt
    months = 0
    total_interest = 0.0

    while balance > 0 and months < PAYOFF_HORIZON_MONTHS:
        interest = balance * rate
        total_interest += interest
        balance -= min(monthly_payment - interest, balance)
        months += 1

    return months, total_interest, balance


def summarize_debts(
    debts: List[DebtObligation],
    monthly_income: float,
    monthly_expenses: float,
    additional_payment: float = 0.0,
) -> PayoffPlan:
    """
    Pool all debts at their weighted rate and project the payoff.

    The payoff is projected at the sum of each debt's monthly-equivalent
    minimum (estimated when not stated) plus any additional payment. The
    debt-to-income ratio and disposable income use the minimums alone.
    """
    require_finite_non_negative(monthly_income, "monthly_income")
    require_finite_non_negative(monthly_expenses, "monthly_expenses")
    require_finite_non_negative(additional_payment, "additional_payment")
    for index, debt in enumerate(debts):
        validate_debt(debt, index)

    total_debt = sum(debt.balance for debt in debts)
    rate = weighted_interest_rate(debts)
    total_minimum_payment = sum(resolve_monthly_payment(debt) for debt in debts)

    months, total_interest, remaining_balance = project_payoff(
        total_debt, rate, total_minimum_payment + additional_payment
    )

    return PayoffPlan(
        total_debt=total_debt,
        weighted_interest_rate=rate,
        total_minimum_payment=total_minimum_payment,
        months=months,
        total_interest=total_interest,
        total_payment=total_debt - remaining_balance + total_interest,
        debt_to_income_ratio=safe_percentage(total_minimum_payment, monthly_income),
        disposable_income=monthly_income - monthly_expenses - total_minimum_payment,
        remaining_balance=remaining_balance,
        paid_off=remaining_balance == 0,
    )
