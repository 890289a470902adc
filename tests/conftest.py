"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from loan_engine.api.main import create_app
from loan_engine.domain.models import (
    DebtObligation,
    DebtType,
    IncomeProfile,
    LoanTerms,
    PaymentFrequency,
)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def mortgage_terms() -> LoanTerms:
    """$300k mortgage at 5% over 25 years"""
    return LoanTerms(principal=300_000, annual_rate_percent=5, term_years=25)


@pytest.fixture
def household_income() -> IncomeProfile:
    """$5000/month salary, no other income"""
    return IncomeProfile(monthly_income=5000, other_annual_income=0)


@pytest.fixture
def sample_debts() -> list[DebtObligation]:
    """Typical mix of existing debts, one without a stated minimum payment"""
    return [
        DebtObligation(
            balance=5000,
            interest_rate_percent=19.99,
            type=DebtType.CREDIT_CARD,
        ),
        DebtObligation(
            balance=18000,
            interest_rate_percent=6.5,
            minimum_payment=190,
            payment_frequency=PaymentFrequency.BIWEEKLY,
            type=DebtType.CAR_LOAN,
        ),
    ]
