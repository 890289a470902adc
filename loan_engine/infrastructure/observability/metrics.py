"""Prometheus metrics for calculation volume, approval outcomes and request latency"""

from prometheus_client import Counter, Histogram

# Calculation metrics
calculation_counter = Counter(
    "loan_engine_calculations_total",
    "Total calculations served",
    ["kind"],  # loan | schedule | serviceability | payoff | normalize
)

calculation_error_counter = Counter(
    "loan_engine_calculation_errors_total",
    "Calculations rejected by the domain layer",
    ["error"],  # invalid_input | invalid_payment
)

approval_counter = Counter(
    "loan_engine_approval_total",
    "Serviceability assessments by outcome",
    ["outcome"],  # likely | unlikely
)

tdsr_histogram = Histogram(
    "loan_engine_tdsr_percent",
    "Total debt service ratio of assessed applications",
    buckets=[20, 32, 40, 44, 50, 60, 80, 100],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(kind: str) -> None:
    calculation_counter.labels(kind=kind).inc()


def record_assessment(approval_likely: bool, total_debt_service_ratio: float) -> None:
    """Record approval outcome and where the TDSR landed relative to the ceilings"""
    outcome = "likely" if approval_likely else "unlikely"
    approval_counter.labels(outcome=outcome).inc()
    tdsr_histogram.observe(total_debt_service_ratio)


def record_error(error: str) -> None:
    calculation_error_counter.labels(error=error).inc()
