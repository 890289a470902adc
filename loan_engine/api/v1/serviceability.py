"""POST /v1/serviceability - debt service ratio endpoint"""

import time
from dataclasses import asdict
from fastapi import APIRouter, Request

from loan_engine.api.dependencies import get_request_id
from loan_engine.api.v1.errors import to_http_exception
from loan_engine.api.v1.schemas import (
    ApprovalSchema,
    ServiceabilityRequest,
    ServiceabilityResponse,
    ServiceabilitySchema,
)
from loan_engine.domain.exceptions import DomainException
from loan_engine.domain.models import LoanTerms
from loan_engine.domain.serviceability import assess_approval, evaluate
from loan_engine.infrastructure.observability.logging import log_assessment, log_calculation
from loan_engine.infrastructure.observability.metrics import record_assessment, record_calculation

router = APIRouter()


@router.post("/serviceability", response_model=ServiceabilityResponse)
def create_serviceability(request_body: ServiceabilityRequest, request: Request):
    """
    Evaluate GDSR/TDSR for a known loan payment.

    Used when the presentation layer already has the payment (e.g. a
    lender quote) and only needs the ratios and approval outcome.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    loan_terms = LoanTerms(
        principal=request_body.principal,
        annual_rate_percent=request_body.annual_rate_percent,
        term_years=request_body.term_years,
        payment_frequency=request_body.payment_frequency,
    )

    try:
        result = evaluate(
            loan_terms,
            request_body.new_loan_monthly_payment,
            [debt.to_domain() for debt in request_body.existing_debts],
            request_body.income.to_domain(),
            request_body.housing.to_domain() if request_body.housing else None,
        )
    except DomainException as e:
        raise to_http_exception(e, request_id) from e

    approval = assess_approval(result)

    record_calculation("serviceability")
    record_assessment(approval.approval_likely, result.total_debt_service_ratio)
    log_calculation(request_id, "serviceability", (time.time() - start_time) * 1000)
    log_assessment(
        request_id,
        approval.approval_likely,
        result.gross_debt_service_ratio,
        result.total_debt_service_ratio,
    )

    return ServiceabilityResponse(
        debt_service_ratios=ServiceabilitySchema(**asdict(result)),
        approval=ApprovalSchema(**asdict(approval)),
    )
