"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from credit_plans.api.main import create_app
from credit_plans.domain.models import InterestKind, PlanRequest


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def base_request() -> PlanRequest:
    """Net 15, every 15 days, 3 installments of an interest-free 1000.00"""
    return PlanRequest(
        principal_total=Decimal("1000.00"),
        issue_date=date(2025, 1, 1),
        days_to_first_due=15,
        days_between_installments=15,
        installment_count=3,
        interest_kind=InterestKind.NONE,
    )


@pytest.fixture
def plan_body() -> dict:
    """JSON body equivalent of base_request"""
    return {
        "principal_total": "1000.00",
        "issue_date": "2025-01-01",
        "days_to_first_due": 15,
        "days_between_installments": 15,
        "installment_count": 3,
        "interest_kind": "NONE",
    }
