"""POST /v1/debt/payoff and /v1/payments/normalize - existing debt endpoints"""

import time
from dataclasses import asdict
from fastapi import APIRouter, Request

from loan_engine.api.dependencies import get_request_id
from loan_engine.api.v1.errors import to_http_exception
from loan_engine.api.v1.schemas import NormalizeRequest, NormalizeResponse, PayoffRequest, PayoffResponse
from loan_engine.domain.exceptions import DomainException
from loan_engine.domain.normalization import normalize_to_monthly
from loan_engine.domain.payoff import summarize_debts
from loan_engine.infrastructure.observability.logging import log_calculation
from loan_engine.infrastructure.observability.metrics import record_calculation

router = APIRouter()


@router.post("/debt/payoff", response_model=PayoffResponse)
def create_payoff_plan(request_body: PayoffRequest, request: Request):
    """
    Project how long the borrower's debts take to clear at their minimum payments.

    Returns 422 with error "invalid_payment" when the payments do not cover
    the first month's interest.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        plan = summarize_debts(
            [debt.to_domain() for debt in request_body.debts],
            monthly_income=request_body.monthly_income,
            monthly_expenses=request_body.monthly_expenses,
            additional_payment=request_body.additional_payment,
        )
    except DomainException as e:
        raise to_http_exception(e, request_id) from e

    record_calculation("payoff")
    log_calculation(request_id, "payoff", (time.time() - start_time) * 1000, months=plan.months)

    return PayoffResponse(**asdict(plan))


@router.post("/payments/normalize", response_model=NormalizeResponse)
def normalize_payment(request_body: NormalizeRequest):
    """Monthly equivalent of a weekly, bi-weekly or accelerated bi-weekly payment"""
    record_calculation("normalize")
    return NormalizeResponse(
        payment=request_body.payment,
        payment_frequency=request_body.payment_frequency,
        monthly_equivalent=normalize_to_monthly(request_body.payment, request_body.payment_frequency),
    )
