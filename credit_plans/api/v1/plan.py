"""POST /v1/plan/preview and /v1/plan/resolve - Compute installment plans"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from credit_plans.api.v1.schemas import (
    InstallmentSchema,
    PlanPreviewResponse,
    ResolveRequest,
    ResolveResponse,
    PlanRequestSchema,
)
from credit_plans.api.dependencies import get_request_id
from credit_plans.domain.exceptions import InvalidPlanRequest
from credit_plans.domain.installments import build_plan
from credit_plans.domain.reconciler import ensure_id, resolve_submission
from credit_plans.infrastructure.observability.logging import log_plan_built
from credit_plans.infrastructure.observability.metrics import (
    invalid_plan_request_counter,
    record_plan,
    record_submission,
)

router = APIRouter()


@router.post("/plan/preview", response_model=PlanPreviewResponse)
def preview_plan(request_body: PlanRequestSchema, request: Request):
    """
    Compute a plan for live preview.

    Called on every form change, so it only computes: nothing is persisted.
    Installments carry ids so the UI can key its rows and adopt them for
    manual editing.
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)

    try:
        result = build_plan(request_body.to_domain())
    except InvalidPlanRequest as e:
        invalid_plan_request_counter.inc()
        logging.warning(f"Invalid plan request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.perf_counter() - start_time) * 1000
    record_plan(request_body.interest_kind.value, "preview", len(result.installments))
    log_plan_built(
        request_id,
        "preview",
        request_body.interest_kind.value,
        len(result.installments),
        result.total_payable,
        duration_ms,
    )

    return PlanPreviewResponse(
        installments=[InstallmentSchema.from_domain(ensure_id(inst)) for inst in result.installments],
        total_interest=result.total_interest,
        principal_financed=result.principal_financed,
        total_payable=result.total_payable,
    )


@router.post("/plan/resolve", response_model=ResolveResponse)
def resolve_plan(request_body: ResolveRequest, request: Request):
    """
    Resolve the installments to submit.

    Manual mode with a non-empty override returns the operator's rows as-is;
    otherwise the plan is regenerated from the request.
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)
    override = [inst.to_domain() for inst in request_body.override or []]

    try:
        installments = resolve_submission(request_body.is_manual, override, request_body.plan.to_domain())
    except InvalidPlanRequest as e:
        invalid_plan_request_counter.inc()
        logging.warning(f"Invalid plan request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.perf_counter() - start_time) * 1000
    record_plan(request_body.plan.interest_kind.value, "resolve", len(installments))
    record_submission(request_body.is_manual and bool(override))
    log_plan_built(
        request_id,
        "resolve",
        request_body.plan.interest_kind.value,
        len(installments),
        sum(inst.amount for inst in installments),
        duration_ms,
    )

    return ResolveResponse(installments=[InstallmentSchema.from_domain(inst) for inst in installments])
