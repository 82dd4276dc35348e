"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from credit_plans.infrastructure.clients.credit_api import CreditApiClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_credit_api_client() -> CreditApiClient:
    """Provide credit API client instance"""
    return CreditApiClient()
