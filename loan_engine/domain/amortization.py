"""Amortization engine - fixed-rate payments and period-by-period schedules"""

from typing import Iterator, List

from loan_engine.domain.exceptions import InvalidInputError, InvalidPaymentError
from loan_engine.domain.models import AmortizationPeriod
from loan_engine.utils.numeric import (
    MONTHS_PER_YEAR,
    annuity_factor,
    monthly_rate,
    require_finite_non_negative,
    require_positive,
)

# Upper bound on amortization length; keeps schedule materialization bounded
MAX_TERM_YEARS = 50

BIWEEKLY_PERIODS_PER_YEAR = 26


def validate_loan_terms(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
    max_term_years: int = MAX_TERM_YEARS,
) -> None:
    """
    Fail fast on parameters the formulas are undefined for.

    Raises:
        InvalidInputError: non-positive principal or term, negative rate,
            non-integer term, or a term above max_term_years
    """
    require_positive(principal, "principal")
    require_finite_non_negative(annual_rate_percent, "annual_rate_percent")
    if isinstance(term_years, bool) or not isinstance(term_years, int):
        raise InvalidInputError("term_years", "must be a whole number of years")
    if term_years <= 0:
        raise InvalidInputError("term_years", "must be greater than zero")
    if term_years > max_term_years:
        raise InvalidInputError("term_years", f"must not exceed {max_term_years} years")


def compute_monthly_payment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    """
    Fixed monthly payment that fully amortizes the principal.

    Standard annuity formula:

        payment = P * r * (1 + r)^n / ((1 + r)^n - 1)

    evaluated as P * r / (1 - (1 + r)^-n), which is the same quantity but does
    not overflow for large n, with the denominator taken from annuity_factor so
    tiny rates stay accurate. r is the monthly rate and n the number of monthly
    payments. A zero rate is straight-line: P / n.

    Does not validate; callers guard against n == 0 and negative principal.
    """
    number_of_payments = term_years * MONTHS_PER_YEAR
    rate = monthly_rate(annual_rate_percent)

    if rate == 0:
        return principal / number_of_payments

    return principal * rate / annuity_factor(rate, number_of_payments)


def compute_biweekly_payment(monthly_payment: float) -> float:
    """
    Bi-weekly display amount for a monthly payment (12 monthly payments spread over 26).

    Display only: schedules are always stepped monthly.
    """
    return monthly_payment * MONTHS_PER_YEAR / BIWEEKLY_PERIODS_PER_YEAR


def compute_max_loan_amount(max_monthly_payment: float, annual_rate_percent: float, term_years: int) -> float:
    """
    Largest principal a monthly payment can amortize (annuity present value).

    Returns 0.0 when there is no room for a payment.
    """
    if max_monthly_payment <= 0:
        return 0.0

    number_of_payments = term_years * MONTHS_PER_YEAR
    rate = monthly_rate(annual_rate_percent)

    if rate == 0:
        return max_monthly_payment * number_of_payments

    return max_monthly_payment * annuity_factor(rate, number_of_payments) / rate


def iter_amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
    max_term_years: int = MAX_TERM_YEARS,
) -> Iterator[AmortizationPeriod]:
    """
    Lazily yield one AmortizationPeriod per month for term_years * 12 months.

    Inputs are validated eagerly, before the first row is requested.

    Raises:
        InvalidInputError: see validate_loan_terms
        InvalidPaymentError: the payment does not exceed the first month's
            interest (raised when the first row is produced)
    """
    validate_loan_terms(principal, annual_rate_percent, term_years, max_term_years)
    return _generate_periods(principal, annual_rate_percent, term_years)


def _generate_periods(principal: float, annual_rate_percent: float, term_years: int) -> Iterator[AmortizationPeriod]:
    rate = monthly_rate(annual_rate_percent)
    payment = compute_monthly_payment(principal, annual_rate_percent, term_years)
    number_of_payments = term_years * MONTHS_PER_YEAR

    remaining_balance = principal
    for period in range(1, number_of_payments + 1):
        interest_portion = remaining_balance * rate
        principal_portion = payment - interest_portion
        period_payment = payment

        # Negative amortization: the balance would never reach zero
        if period == 1 and principal_portion <= 0:
            raise InvalidPaymentError(payment, interest_portion)

        # Principal repaid never exceeds what is owed, and the last payment
        # retires whatever floating-point drift has left on the balance
        if period == number_of_payments or principal_portion > remaining_balance:
            principal_portion = remaining_balance
            period_payment = interest_portion + principal_portion

        remaining_balance -= principal_portion
        if period == number_of_payments:
            remaining_balance = 0.0

        yield AmortizationPeriod(
            period=period,
            payment=period_payment,
            principal_portion=principal_portion,
            interest_portion=interest_portion,
            remaining_balance=remaining_balance,
        )


def build_amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
    max_term_years: int = MAX_TERM_YEARS,
) -> List[AmortizationPeriod]:
    """Materialize the full amortization schedule"""
    return list(iter_amortization_schedule(principal, annual_rate_percent, term_years, max_term_years))
