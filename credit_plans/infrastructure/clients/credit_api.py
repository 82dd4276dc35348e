"""Credit-creation API client with exponential backoff retry logic"""

import asyncio
import logging
from typing import Any, Dict

import httpx

from credit_plans.config import settings
from credit_plans.domain.exceptions import CreditAPIError
from credit_plans.infrastructure.observability.metrics import (
    credit_api_failure_counter,
    credit_api_latency_histogram,
)

logger = logging.getLogger(__name__)


class CreditApiClient:
    """Client for the service that persists credits and their installments"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
    ):
        self.base_url = base_url or settings.credit_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = max_retries or settings.credit_api_max_retries
        self.backoff_base = settings.credit_api_backoff_base if backoff_base is None else backoff_base

    async def create_credit(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Submit a credit with its resolved installments.

        Retry strategy:
        - Exponential backoff: base, 2*base, 4*base ... (base * 2^(attempt-1))
        - Retries on 5xx errors and network failures
        - 4xx responses are not retried: the payload itself was rejected

        Args:
            payload: Credit body; installments must already have ids stripped

        Raises:
            CreditAPIError: After the last failed attempt, or on a 4xx response
        """
        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while True:
                try:
                    with credit_api_latency_histogram.time():
                        response = await client.post(f"{self.base_url}/credits", json=payload)
                        response.raise_for_status()
                    return response.json()

                except httpx.HTTPStatusError as e:
                    credit_api_failure_counter.inc()
                    if e.response.status_code < 500:
                        raise CreditAPIError(f"Credit API rejected request: {e.response.status_code}") from e
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise CreditAPIError(f"Credit API error: {e.response.status_code}") from e

                except httpx.RequestError as e:
                    credit_api_failure_counter.inc()
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise CreditAPIError(f"Credit API unreachable: {e}") from e

                except ValueError as e:
                    raise CreditAPIError(f"Invalid response from credit API: {e}") from e

                backoff = self.backoff_base * (2 ** (attempt - 1))
                logger.warning(
                    "Credit API attempt failed, retrying",
                    extra={"attempt": attempt, "backoff_seconds": backoff},
                )
                await asyncio.sleep(backoff)
