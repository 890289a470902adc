"""Numeric helpers shared by the calculators"""

import math

from loan_engine.domain.exceptions import InvalidInputError

MONTHS_PER_YEAR = 12


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert a nominal annual percentage (5.25) to a monthly decimal rate"""
    return annual_rate_percent / 100 / MONTHS_PER_YEAR


def annuity_factor(rate: float, number_of_payments: int) -> float:
    """
    1 - (1 + rate)^-n, computed without cancellation.

    Going through log1p/expm1 keeps full precision when rate is so small that
    1 + rate rounds to 1.0.
    """
    return -math.expm1(-number_of_payments * math.log1p(rate))


def safe_percentage(numerator: float, denominator: float) -> float:
    """numerator / denominator * 100, or 0.0 when the denominator is not positive"""
    if denominator <= 0:
        return 0.0
    return numerator / denominator * 100


def require_finite_non_negative(value: float, field: str) -> float:
    if value is None or not math.isfinite(value):
        raise InvalidInputError(field, "must be a finite number")
    if value < 0:
        raise InvalidInputError(field, "must not be negative")
    return value


def require_positive(value: float, field: str) -> float:
    require_finite_non_negative(value, field)
    if value == 0:
        raise InvalidInputError(field, "must be greater than zero")
    return value
