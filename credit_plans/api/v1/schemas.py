"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from credit_plans.domain.models import (
    AmountDownPayment,
    DownPayment,
    Installment,
    InstallmentLabel,
    InterestKind,
    NoDownPayment,
    PercentDownPayment,
    PlanRequest,
)
from credit_plans.utils.money import parse_amount


class PlanMode(str, Enum):
    """EQUAL ignores any down payment; FIRST_LARGER turns it into installment #1"""

    EQUAL = "EQUAL"
    FIRST_LARGER = "FIRST_LARGER"


class DownPaymentSchema(BaseModel):
    """Down payment as a fixed amount or a percentage of the principal"""

    kind: Literal["AMOUNT", "PERCENT"]
    value: Decimal

    @field_validator("value", mode="before")
    @classmethod
    def parse_value(cls, v):
        return parse_amount(v)

    def to_domain(self) -> DownPayment:
        if self.kind == "PERCENT":
            return PercentDownPayment(self.value)
        return AmountDownPayment(self.value)


class PlanRequestSchema(BaseModel):
    """Request body describing the plan to compute"""

    principal_total: Decimal = Field(..., description="Amount financed before the down payment")
    issue_date: date = Field(..., description="Credit issue date (business timezone)")
    days_to_first_due: int = Field(0, description="Net X: days from issue to the first due date")
    days_between_installments: int = Field(..., description="Days between regular installments")
    installment_count: int = Field(..., description="Total installments, down payment included")
    interest_kind: InterestKind = InterestKind.NONE
    interest_rate_per_period: Decimal = Field(Decimal("0"), description="Rate per period, 0.02 = 2%")
    plan_mode: PlanMode = PlanMode.EQUAL
    down_payment: Optional[DownPaymentSchema] = None

    @field_validator("principal_total", "interest_rate_per_period", mode="before")
    @classmethod
    def parse_decimal(cls, v):
        return parse_amount(v)

    def to_domain(self) -> PlanRequest:
        down_payment: DownPayment = NoDownPayment()
        if self.plan_mode == PlanMode.FIRST_LARGER and self.down_payment is not None:
            down_payment = self.down_payment.to_domain()

        return PlanRequest(
            principal_total=self.principal_total,
            issue_date=self.issue_date,
            days_to_first_due=self.days_to_first_due,
            days_between_installments=self.days_between_installments,
            installment_count=self.installment_count,
            interest_kind=self.interest_kind,
            interest_rate_per_period=self.interest_rate_per_period,
            down_payment=down_payment,
        )


class InstallmentSchema(BaseModel):
    """Single installment in a credit plan"""

    number: int = Field(..., ge=1)
    due_date: datetime
    amount: Decimal
    label: InstallmentLabel = InstallmentLabel.REGULAR
    id: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount_value(cls, v):
        return parse_amount(v)

    @classmethod
    def from_domain(cls, inst: Installment) -> "InstallmentSchema":
        return cls(
            number=inst.number,
            due_date=inst.due_date,
            amount=inst.amount,
            label=inst.label,
            id=inst.id,
        )

    def to_domain(self) -> Installment:
        return Installment(
            number=self.number,
            due_date=self.due_date,
            amount=self.amount,
            label=self.label,
            id=self.id,
        )


class PlanPreviewResponse(BaseModel):
    """Response for POST /v1/plan/preview"""

    installments: List[InstallmentSchema]
    total_interest: Decimal
    principal_financed: Decimal
    total_payable: Decimal


class ResolveRequest(BaseModel):
    """Request body for POST /v1/plan/resolve"""

    plan: PlanRequestSchema
    is_manual: bool = False
    override: Optional[List[InstallmentSchema]] = None


class ResolveResponse(BaseModel):
    """Response for POST /v1/plan/resolve"""

    installments: List[InstallmentSchema]


class CreditCreateRequest(ResolveRequest):
    """Request body for POST /v1/credits"""

    reference: Optional[str] = Field(None, description="Caller reference, e.g. purchase folio")
    register_down_payment_now: bool = False


class CreditCreateResponse(BaseModel):
    """Response for POST /v1/credits"""

    credit_id: Optional[str] = None
    installments: List[InstallmentSchema]
