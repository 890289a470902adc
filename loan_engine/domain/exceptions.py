"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Loan or debt parameters are out of range (caller must validate the field)"""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class InvalidPaymentError(DomainException):
    """Payment does not exceed the first period's interest, so the balance never amortizes"""

    def __init__(self, payment: float, interest: float):
        super().__init__(
            f"Payment of {payment:.2f} does not cover the first period's interest of {interest:.2f}"
        )
        self.payment = payment
        self.interest = interest
