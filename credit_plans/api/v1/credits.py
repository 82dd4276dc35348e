"""POST /v1/credits - Resolve a plan and create the credit"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from credit_plans.api.v1.schemas import CreditCreateRequest, CreditCreateResponse, InstallmentSchema
from credit_plans.api.dependencies import get_credit_api_client, get_request_id
from credit_plans.domain.exceptions import CreditAPIError, InvalidPlanRequest
from credit_plans.domain.reconciler import resolve_submission, to_submission_payload
from credit_plans.infrastructure.clients.credit_api import CreditApiClient
from credit_plans.infrastructure.observability.logging import log_plan_built
from credit_plans.infrastructure.observability.metrics import (
    invalid_plan_request_counter,
    record_plan,
    record_submission,
)

router = APIRouter()


@router.post("/credits", response_model=CreditCreateResponse, status_code=201)
async def create_credit(
    request_body: CreditCreateRequest,
    request: Request,
    credit_client: CreditApiClient = Depends(get_credit_api_client),
):
    """
    Create a credit from a plan request or a manually edited schedule.

    Flow:
    1. Resolve installments (manual override or regenerated plan)
    2. Strip caller-local ids
    3. Send the credit to the credit API
    4. Return the credit id and the installments that were submitted
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)
    plan = request_body.plan
    override = [inst.to_domain() for inst in request_body.override or []]
    is_manual = request_body.is_manual and bool(override)

    try:
        # 1. Resolve installments
        installments = resolve_submission(request_body.is_manual, override, plan.to_domain())

        # 2. Build payload for persistence
        payload = {
            "reference": request_body.reference,
            "principal_total": str(plan.principal_total),
            "issue_date": plan.issue_date.isoformat(),
            "interest_kind": plan.interest_kind.value,
            "interest_rate_per_period": str(plan.interest_rate_per_period),
            "plan_mode": plan.plan_mode.value,
            "register_down_payment_now": request_body.register_down_payment_now,
            "manual": is_manual,
            "installments": to_submission_payload(installments),
        }

        # 3. Create credit
        response = await credit_client.create_credit(payload)

    except InvalidPlanRequest as e:
        invalid_plan_request_counter.inc()
        logging.warning(f"Invalid plan request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except CreditAPIError as e:
        logging.error(f"Credit API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Credit service unavailable")

    # Record metrics and logs
    duration_ms = (time.perf_counter() - start_time) * 1000
    record_plan(plan.interest_kind.value, "credits", len(installments))
    record_submission(is_manual)
    log_plan_built(
        request_id,
        "credit_created",
        plan.interest_kind.value,
        len(installments),
        sum(inst.amount for inst in installments),
        duration_ms,
    )

    credit_id = response.get("id") if isinstance(response, dict) else None

    return CreditCreateResponse(
        credit_id=str(credit_id) if credit_id is not None else None,
        installments=[InstallmentSchema.from_domain(inst) for inst in installments],
    )
