"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient
from loan_engine.api.dependencies import get_settings
from loan_engine.api.main import create_app
from loan_engine.config import Settings


@pytest.fixture
def mortgage_request() -> dict:
    """$450k home, $90k down, 5.25% over 25 years, with a car loan and credit card"""
    return {
        "amount": 450000,
        "down_payment": 90000,
        "annual_rate_percent": 5.25,
        "term_years": 25,
        "loan_type": "mortgage",
        "payment_frequency": "biweekly",
        "income": {"monthly_income": 11000, "other_annual_income": 6000},
        "housing": {
            "property_value": 450000,
            "property_tax_annual": 4800,
            "heating_costs_monthly": 120,
            "condo_fees_monthly": 0,
        },
        "existing_debts": [
            {"balance": 4000, "interest_rate_percent": 19.99, "type": "creditCard"},
            {
                "balance": 15000,
                "interest_rate_percent": 6.9,
                "minimum_payment": 150,
                "payment_frequency": "biweekly",
                "type": "carLoan",
            },
        ],
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "loan_engine_calculations_total" in response.text


def test_request_id_header(client: TestClient):
    """Test request ID is generated, or echoed when supplied"""
    generated = client.get("/health")
    assert generated.headers["X-Request-ID"]

    echoed = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert echoed.headers["X-Request-ID"] == "req-123"


def test_loan_calculate_mortgage(client: TestClient, mortgage_request: dict):
    """Test POST /v1/loan/calculate for a mortgage"""
    response = client.post("/v1/loan/calculate", json=mortgage_request)

    assert response.status_code == 200
    data = response.json()
    assert len(data["amortization_schedule"]) == 300
    assert data["amortization_schedule"][-1]["remaining_balance"] == 0
    assert data["display_payment"] == pytest.approx(data["monthly_payment"] * 12 / 26)
    assert data["loan_to_value_ratio"] == pytest.approx(80.0)
    assert data["estimated_tax_savings"] == pytest.approx(data["total_interest"] * 0.25)

    ratios = data["debt_service_ratios"]
    assert ratios["monthly_housing_expenses"] == pytest.approx(data["monthly_payment"] + 400 + 120)
    assert ratios["monthly_debt_payments"] == pytest.approx(4000 * 0.03 + 150 * 26 / 12)
    assert data["approval"]["approval_likely"] is True
    assert data["approval"]["reasons"] == []


def test_loan_calculate_monthly_display_payment(client: TestClient, mortgage_request: dict):
    """Test monthly loans display the monthly payment"""
    mortgage_request["payment_frequency"] = "monthly"

    data = client.post("/v1/loan/calculate", json=mortgage_request).json()

    assert data["display_payment"] == data["monthly_payment"]


def test_loan_calculate_down_payment_too_large(client: TestClient, mortgage_request: dict):
    """Test down payment covering the purchase is a field error"""
    mortgage_request["down_payment"] = 450000

    response = client.post("/v1/loan/calculate", json=mortgage_request)

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error"] == "invalid_input"
    assert detail["field"] == "down_payment"


def test_loan_calculate_schema_validation(client: TestClient, mortgage_request: dict):
    """Test negative rate is rejected by request validation"""
    mortgage_request["annual_rate_percent"] = -1

    response = client.post("/v1/loan/calculate", json=mortgage_request)

    assert response.status_code == 422


def test_loan_schedule_endpoint(client: TestClient):
    """Test POST /v1/loan/schedule with zero interest"""
    response = client.post(
        "/v1/loan/schedule",
        json={"principal": 10000, "annual_rate_percent": 0, "term_years": 5},
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data["amortization_schedule"]) == 60
    assert data["monthly_payment"] == pytest.approx(10000 / 60)
    assert data["total_interest"] == 0


def test_loan_schedule_term_above_cap(client: TestClient):
    """Test terms beyond the configured maximum are rejected"""
    response = client.post(
        "/v1/loan/schedule",
        json={"principal": 10000, "annual_rate_percent": 4, "term_years": 75},
    )

    assert response.status_code == 422
    assert response.json()["detail"]["field"] == "term_years"


def test_loan_schedule_term_cap_from_settings():
    """Test the term ceiling follows application settings"""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: Settings(max_term_years=10)
    client = TestClient(app)

    response = client.post(
        "/v1/loan/schedule",
        json={"principal": 10000, "annual_rate_percent": 4, "term_years": 15},
    )

    assert response.status_code == 422


def test_loan_schedule_negative_amortization(client: TestClient):
    """Test a rate so high the payment only covers interest"""
    response = client.post(
        "/v1/loan/schedule",
        json={"principal": 1000, "annual_rate_percent": 5000, "term_years": 25},
    )

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error"] == "invalid_payment"
    assert "extend the term" in detail["suggestion"]


def test_serviceability_endpoint(client: TestClient):
    """Test POST /v1/serviceability at the GDSR ceiling"""
    response = client.post(
        "/v1/serviceability",
        json={
            "principal": 300000,
            "annual_rate_percent": 5,
            "term_years": 25,
            "new_loan_monthly_payment": 1600,
            "income": {"monthly_income": 5000},
            "existing_debts": [{"balance": 4000, "interest_rate_percent": 8, "minimum_payment": 200}],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["debt_service_ratios"]["gross_debt_service_ratio"] == pytest.approx(32.0)
    assert data["debt_service_ratios"]["total_debt_service_ratio"] == pytest.approx(36.0)
    assert data["approval"]["approval_likely"] is True


def test_serviceability_endpoint_declined(client: TestClient):
    """Test both exceeded ceilings are reported by name"""
    response = client.post(
        "/v1/serviceability",
        json={
            "principal": 300000,
            "annual_rate_percent": 5,
            "term_years": 25,
            "new_loan_monthly_payment": 2000,
            "income": {"monthly_income": 4000},
            "existing_debts": [{"balance": 9000, "interest_rate_percent": 8, "minimum_payment": 300}],
        },
    )

    data = response.json()
    assert data["approval"]["approval_likely"] is False
    assert data["approval"]["reasons"] == [
        "Gross Debt Service Ratio exceeds 32%",
        "Total Debt Service Ratio exceeds 44%",
    ]
    assert data["debt_service_ratios"]["max_affordable_loan"] > 0


def test_debt_payoff_endpoint(client: TestClient):
    """Test POST /v1/debt/payoff"""
    response = client.post(
        "/v1/debt/payoff",
        json={
            "debts": [{"balance": 1000, "interest_rate_percent": 12, "minimum_payment": 100}],
            "monthly_income": 3000,
            "monthly_expenses": 1500,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["months"] == 11
    assert data["debt_to_income_ratio"] == pytest.approx(100 / 3000 * 100)
    assert data["disposable_income"] == pytest.approx(1400)


def test_debt_payoff_payment_below_interest(client: TestClient):
    """Test payoff with payments under the monthly interest"""
    response = client.post(
        "/v1/debt/payoff",
        json={"debts": [{"balance": 10000, "interest_rate_percent": 24, "minimum_payment": 100}]},
    )

    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "invalid_payment"


def test_debt_payoff_requires_debts(client: TestClient):
    """Test an empty debt list fails validation"""
    response = client.post("/v1/debt/payoff", json={"debts": []})
    assert response.status_code == 422


def test_normalize_endpoint(client: TestClient):
    """Test POST /v1/payments/normalize for a weekly payment"""
    response = client.post(
        "/v1/payments/normalize",
        json={"payment": 120, "payment_frequency": "weekly"},
    )

    assert response.status_code == 200
    assert response.json()["monthly_equivalent"] == pytest.approx(520)


def test_normalize_endpoint_rejects_unknown_frequency(client: TestClient):
    """Test cadences outside the supported set fail validation"""
    response = client.post(
        "/v1/payments/normalize",
        json={"payment": 120, "payment_frequency": "quarterly"},
    )

    assert response.status_code == 422


@pytest.mark.parametrize(
    "path, body",
    [
        ("/v1/payments/normalize", '{"payment": Infinity, "payment_frequency": "weekly"}'),
        ("/v1/loan/schedule", '{"principal": 1000, "annual_rate_percent": NaN, "term_years": 5}'),
        ("/v1/debt/payoff", '{"debts": [{"balance": Infinity, "interest_rate_percent": 5}]}'),
    ],
)
def test_non_finite_numbers_rejected(client: TestClient, path: str, body: str):
    """Test Infinity/NaN in request JSON fail validation instead of reaching the response"""
    response = client.post(path, content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == 422


def test_schedule_endpoint_near_zero_rate(client: TestClient):
    """Test a near-zero positive rate prices like an interest-free loan"""
    response = client.post(
        "/v1/loan/schedule",
        json={"principal": 10000, "annual_rate_percent": 1e-15, "term_years": 5},
    )

    assert response.status_code == 200
    assert response.json()["monthly_payment"] == pytest.approx(10000 / 60)


def test_latency_metric_uses_route_template(client: TestClient):
    """Test unknown paths collapse into one latency label"""
    client.get("/no-such-page-123")
    client.get("/health")

    text = client.get("/metrics").text
    assert 'endpoint="/health"' in text
    assert 'endpoint="unmatched"' in text
    assert "no-such-page-123" not in text
