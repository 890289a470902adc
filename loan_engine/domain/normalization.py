"""Payment normalization - monthly equivalents and minimum-payment estimates for existing debts"""

from loan_engine.domain.amortization import compute_monthly_payment
from loan_engine.domain.models import DebtObligation, DebtType, PaymentFrequency
from loan_engine.utils.numeric import require_finite_non_negative

# Paying half the monthly amount every two weeks makes ~13 monthly payments a
# year instead of 12; approximated as a flat 8% uplift, not derived from rate
ACCELERATED_BIWEEKLY_UPLIFT = 1.08

# Amortization assumed for term debts with no stated payment. Every ratio that
# includes such a debt depends on this value.
DEFAULT_AMORTIZATION_YEARS = 25

CREDIT_CARD_MINIMUM_RATE = 0.03
CREDIT_CARD_MINIMUM_FLOOR = 10.0
REVOLVING_PRINCIPAL_RATE = 0.01

REVOLVING_DEBT_TYPES = {DebtType.LINE_OF_CREDIT, DebtType.HELOC}


def normalize_to_monthly(payment: float, frequency: PaymentFrequency) -> float:
    """Convert a payment stated at any supported cadence to its monthly equivalent"""
    if frequency == PaymentFrequency.WEEKLY:
        return payment * 52 / 12
    if frequency == PaymentFrequency.BIWEEKLY:
        return payment * 26 / 12
    if frequency == PaymentFrequency.ACCELERATED_BIWEEKLY:
        return payment * 26 / 12 * ACCELERATED_BIWEEKLY_UPLIFT
    return payment


def estimate_minimum_payment(debt: DebtObligation) -> float:
    """
    Estimate a debt's minimum payment when the borrower did not state one.

    Policy, in order:
    - Interest-only: one month of interest
    - Credit card: 3% of balance, at least 10
    - Line of credit / HELOC: one month of interest plus 1% of balance
    - Anything else: fully amortizing payment over DEFAULT_AMORTIZATION_YEARS

    The result is in the debt's own payment cadence.
    """
    monthly_interest = debt.balance * (debt.interest_rate_percent / 100) / 12

    if debt.is_interest_only:
        return monthly_interest

    if debt.type == DebtType.CREDIT_CARD:
        return max(debt.balance * CREDIT_CARD_MINIMUM_RATE, CREDIT_CARD_MINIMUM_FLOOR)

    if debt.type in REVOLVING_DEBT_TYPES:
        return monthly_interest + debt.balance * REVOLVING_PRINCIPAL_RATE

    return compute_monthly_payment(debt.balance, debt.interest_rate_percent, DEFAULT_AMORTIZATION_YEARS)


def resolve_monthly_payment(debt: DebtObligation) -> float:
    """Monthly-equivalent obligation of a debt, estimating the payment only when none was given"""
    payment = debt.minimum_payment if debt.minimum_payment is not None else estimate_minimum_payment(debt)
    return normalize_to_monthly(payment, debt.payment_frequency)


def validate_debt(debt: DebtObligation, index: int = 0) -> None:
    """Reject negative or non-finite debt figures before they reach a ratio"""
    prefix = f"existing_debts[{index}]"
    require_finite_non_negative(debt.balance, f"{prefix}.balance")
    require_finite_non_negative(debt.interest_rate_percent, f"{prefix}.interest_rate_percent")
    if debt.minimum_payment is not None:
        require_finite_non_negative(debt.minimum_payment, f"{prefix}.minimum_payment")
