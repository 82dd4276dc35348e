"""Installment plan generation for credit sales and purchases"""

from datetime import datetime
from decimal import Decimal, DecimalException
from typing import List

from credit_plans.domain.exceptions import InvalidPlanRequest
from credit_plans.domain.models import (
    Installment,
    InstallmentLabel,
    InterestKind,
    PlanRequest,
    PlanResult,
)
from credit_plans.utils.date_utils import add_business_days
from credit_plans.utils.money import ZERO, floor2, round2


def validate_plan_request(request: PlanRequest) -> None:
    """Reject structurally invalid requests before any row is computed"""
    if request.installment_count < 1:
        raise InvalidPlanRequest(
            f"installment_count must be at least 1, got {request.installment_count}"
        )
    if request.days_between_installments <= 0:
        raise InvalidPlanRequest(
            f"days_between_installments must be positive, got {request.days_between_installments}"
        )
    if request.days_to_first_due < 0:
        raise InvalidPlanRequest(
            f"days_to_first_due cannot be negative, got {request.days_to_first_due}"
        )
    if request.principal_total <= 0:
        raise InvalidPlanRequest(
            f"principal_total must be positive, got {request.principal_total}"
        )
    if request.interest_kind != InterestKind.NONE and request.interest_rate_per_period < 0:
        raise InvalidPlanRequest(
            f"interest_rate_per_period cannot be negative, got {request.interest_rate_per_period}"
        )


def resolve_down_payment(request: PlanRequest) -> Decimal:
    """Down payment in money terms; zero when absent or non-positive"""
    amount = round2(request.down_payment.resolve(request.principal_total))
    if amount <= 0:
        return ZERO
    if amount > request.principal_total:
        raise InvalidPlanRequest(
            f"Down payment {amount} exceeds principal_total {request.principal_total}"
        )
    return amount


def _regular_due_dates(start: datetime, count: int, cadence_days: int) -> List[datetime]:
    # Rigid cadence, offsets are always counted from the first regular due date
    return [add_business_days(start, cadence_days * k) for k in range(count)]


def _split_evenly(principal: Decimal, count: int) -> List[Decimal]:
    """
    Even split with the last installment absorbing the rounding residual.

    Example:
        1000.00 / 3 -> [333.33, 333.33, 333.34]
    """
    base = floor2(principal / count)
    amounts = [base] * (count - 1)
    amounts.append(principal - sum(amounts, ZERO))
    return amounts


def _simple_interest(principal: Decimal, count: int, rate: Decimal) -> tuple[List[Decimal], Decimal]:
    """
    Equal capital per period plus interest on the outstanding balance.

    Capital is rounded once up front and reused for every period, so the
    capital repaid can differ from the principal by up to half a cent per
    period. That drift is accepted, not corrected.
    """
    capital = round2(principal / count)
    balance = principal
    total_interest = ZERO
    amounts = []

    for _ in range(count):
        interest = round2(balance * rate)
        amounts.append(round2(capital + interest))
        balance -= capital
        total_interest += interest

    return amounts, total_interest


def _compound_interest(principal: Decimal, count: int, rate: Decimal) -> tuple[List[Decimal], Decimal]:
    """
    French amortization: fixed installment A, shifting interest/capital split.

    Formula: A = P * i / (1 - (1+i)^-n)
    Interest is traced period by period on the declining balance.
    """
    denominator = 1 - (1 + rate) ** -count
    if denominator == 0:
        # Rate below working precision, same as a zero rate
        return _split_evenly(principal, count), ZERO

    fixed = round2(principal * rate / denominator)
    balance = principal
    total_interest = ZERO

    for _ in range(count):
        interest = round2(balance * rate)
        capital = round2(fixed - interest)
        balance -= capital
        total_interest += interest

    return [fixed] * count, total_interest


def build_plan(request: PlanRequest) -> PlanResult:
    """
    Generate a dated installment plan for a credit.

    Requirements:
    - Optional down payment as installment #1, due at issue date + Net X
    - Regular installments every days_between_installments days after that
    - NONE: even split, last installment absorbs the residual cent(s)
    - SIMPLE: equal capital + interest on balance (bounded rounding drift)
    - COMPOUND: fixed French installment; a zero rate falls back to NONE
    - total_payable is the sum of the emitted amounts

    Raises:
        InvalidPlanRequest: Counts, cadence, principal or rate are invalid, or
            the amounts exceed the working decimal precision
    """
    validate_plan_request(request)

    try:
        return _build_plan(request)
    except (DecimalException, OverflowError) as e:
        raise InvalidPlanRequest(f"Plan amounts exceed supported decimal precision ({type(e).__name__})") from e


def _build_plan(request: PlanRequest) -> PlanResult:
    down_amount = resolve_down_payment(request)
    first_due = add_business_days(request.issue_date, request.days_to_first_due)

    installments: List[Installment] = []
    if down_amount > 0:
        installments.append(
            Installment(
                number=1,
                due_date=first_due,
                amount=down_amount,
                label=InstallmentLabel.DOWN_PAYMENT,
            )
        )
        regular_start = add_business_days(first_due, request.days_between_installments)
    else:
        regular_start = first_due

    remaining = max(0, request.installment_count - len(installments))
    principal = round2(request.principal_total - down_amount)
    rate = request.interest_rate_per_period
    total_interest = ZERO

    if remaining > 0:
        if request.interest_kind == InterestKind.SIMPLE:
            amounts, total_interest = _simple_interest(principal, remaining, rate)
        elif request.interest_kind == InterestKind.COMPOUND and rate != 0:
            amounts, total_interest = _compound_interest(principal, remaining, rate)
        else:
            amounts = _split_evenly(principal, remaining)

        due_dates = _regular_due_dates(regular_start, remaining, request.days_between_installments)
        offset = len(installments)
        for k, (due_date, amount) in enumerate(zip(due_dates, amounts), start=1):
            installments.append(Installment(number=offset + k, due_date=due_date, amount=amount))

    total_payable = round2(sum((inst.amount for inst in installments), ZERO))

    return PlanResult(
        installments=tuple(installments),
        total_interest=round2(total_interest),
        principal_financed=principal,
        total_payable=total_payable,
    )
