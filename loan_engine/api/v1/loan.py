"""POST /v1/loan/calculate and /v1/loan/schedule - loan pricing endpoints"""

import time
from dataclasses import asdict
from fastapi import APIRouter, Depends, Request

from loan_engine.api.dependencies import get_request_id, get_settings
from loan_engine.api.v1.errors import to_http_exception
from loan_engine.api.v1.schemas import (
    AmortizationPeriodSchema,
    ApprovalSchema,
    LoanCalculationRequest,
    LoanCalculationResponse,
    ScheduleRequest,
    ScheduleResponse,
    ServiceabilitySchema,
)
from loan_engine.config import Settings
from loan_engine.domain.amortization import build_amortization_schedule, compute_biweekly_payment
from loan_engine.domain.exceptions import DomainException
from loan_engine.domain.loan import calculate_loan, financed_principal
from loan_engine.domain.models import LoanTerms, PaymentFrequency
from loan_engine.infrastructure.observability.logging import log_assessment, log_calculation
from loan_engine.infrastructure.observability.metrics import record_assessment, record_calculation

router = APIRouter()


@router.post("/loan/calculate", response_model=LoanCalculationResponse)
def create_loan_calculation(
    request_body: LoanCalculationRequest,
    request: Request,
    app_settings: Settings = Depends(get_settings),
):
    """
    Price a loan against the borrower's income and existing debts.

    Flow:
    1. Finance amount less down payment
    2. Build schedule, totals and cost metrics
    3. Evaluate GDSR/TDSR with the new payment
    4. Apply the approval policy
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        principal = financed_principal(request_body.amount, request_body.down_payment)
        loan_terms = LoanTerms(
            principal=principal,
            annual_rate_percent=request_body.annual_rate_percent,
            term_years=request_body.term_years,
            payment_frequency=request_body.payment_frequency,
        )
        calculation = calculate_loan(
            loan_terms,
            request_body.income.to_domain(),
            existing_debts=[debt.to_domain() for debt in request_body.existing_debts],
            housing=request_body.housing.to_domain() if request_body.housing else None,
            loan_type=request_body.loan_type,
            max_term_years=app_settings.max_term_years,
        )
    except DomainException as e:
        raise to_http_exception(e, request_id) from e

    ratios = calculation.debt_service_ratios
    duration_ms = (time.time() - start_time) * 1000
    record_calculation("loan")
    record_assessment(calculation.approval.approval_likely, ratios.total_debt_service_ratio)
    log_calculation(request_id, "loan", duration_ms, monthly_payment=round(calculation.monthly_payment, 2))
    log_assessment(
        request_id,
        calculation.approval.approval_likely,
        ratios.gross_debt_service_ratio,
        ratios.total_debt_service_ratio,
    )

    display_payment = (
        calculation.monthly_payment
        if request_body.payment_frequency == PaymentFrequency.MONTHLY
        else calculation.biweekly_payment
    )

    return LoanCalculationResponse(
        monthly_payment=calculation.monthly_payment,
        biweekly_payment=calculation.biweekly_payment,
        display_payment=display_payment,
        payment_frequency=request_body.payment_frequency,
        total_payment=calculation.total_payment,
        total_interest=calculation.total_interest,
        loan_to_value_ratio=calculation.loan_to_value_ratio,
        total_cost_of_borrowing=calculation.total_cost_of_borrowing,
        break_even_point=calculation.break_even_point,
        estimated_tax_savings=calculation.estimated_tax_savings,
        debt_service_ratios=ServiceabilitySchema(**asdict(ratios)),
        approval=ApprovalSchema(**asdict(calculation.approval)),
        amortization_schedule=[AmortizationPeriodSchema(**asdict(row)) for row in calculation.schedule],
    )


@router.post("/loan/schedule", response_model=ScheduleResponse)
def create_schedule(
    request_body: ScheduleRequest,
    request: Request,
    app_settings: Settings = Depends(get_settings),
):
    """Amortization schedule alone, for charting"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        schedule = build_amortization_schedule(
            request_body.principal,
            request_body.annual_rate_percent,
            request_body.term_years,
            max_term_years=app_settings.max_term_years,
        )
    except DomainException as e:
        raise to_http_exception(e, request_id) from e

    monthly_payment = schedule[0].payment
    record_calculation("schedule")
    log_calculation(request_id, "schedule", (time.time() - start_time) * 1000, periods=len(schedule))

    return ScheduleResponse(
        monthly_payment=monthly_payment,
        biweekly_payment=compute_biweekly_payment(monthly_payment),
        total_interest=sum(row.interest_portion for row in schedule),
        amortization_schedule=[AmortizationPeriodSchema(**asdict(row)) for row in schedule],
    )
