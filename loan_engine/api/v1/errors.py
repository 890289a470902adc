"""Translate domain errors into HTTP responses"""

import logging
from fastapi import HTTPException

from loan_engine.domain.exceptions import DomainException, InvalidInputError, InvalidPaymentError
from loan_engine.infrastructure.observability.metrics import record_error


def to_http_exception(error: DomainException, request_id: str) -> HTTPException:
    """
    Map a domain error to a 422 the form can show next to the offending input.

    InvalidPaymentError is reported separately so the UI can suggest
    increasing the payment or extending the term.
    """
    if isinstance(error, InvalidPaymentError):
        record_error("invalid_payment")
        logging.warning(f"Invalid payment: {error}", extra={"request_id": request_id})
        return HTTPException(
            status_code=422,
            detail={
                "error": "invalid_payment",
                "message": str(error),
                "suggestion": "Increase the payment or extend the term",
            },
        )

    if isinstance(error, InvalidInputError):
        record_error("invalid_input")
        logging.warning(f"Invalid input: {error}", extra={"request_id": request_id})
        return HTTPException(
            status_code=422,
            detail={"error": "invalid_input", "field": error.field, "message": error.message},
        )

    record_error("domain")
    logging.error(f"Unhandled domain error: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=500, detail="Internal server error")
