"""Bridge between a live plan preview and the installments actually submitted"""

from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

from credit_plans.domain.installments import build_plan
from credit_plans.domain.models import Installment, PlanRequest
from credit_plans.utils.date_utils import to_business_date


def ensure_id(installment: Installment) -> Installment:
    """Give the installment a stable id if it has none"""
    if installment.id:
        return installment
    day = to_business_date(installment.due_date).strftime("%Y%m%d")
    return replace(installment, id=f"{installment.number}-{day}")


def resolve_submission(
    is_manual: bool,
    override: Optional[Sequence[Installment]],
    request: PlanRequest,
) -> List[Installment]:
    """
    Final installment list for a credit submission.

    Once the operator has switched to manual editing, their rows are trusted
    as-is: dates and amounts are not re-validated against the plan totals.
    Otherwise the plan is rebuilt from the request.
    """
    if is_manual and override:
        return [ensure_id(inst) for inst in override]

    result = build_plan(request)
    return [ensure_id(inst) for inst in result.installments]


def to_submission_payload(installments: Sequence[Installment]) -> List[Dict[str, Any]]:
    """Persistence shape for the credit API; the caller-local id is dropped"""
    return [
        {
            "number": inst.number,
            "due_date": inst.due_date.isoformat(),
            "amount": f"{inst.amount:.2f}",
            "label": inst.label.value,
        }
        for inst in installments
    ]
