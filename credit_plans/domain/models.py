"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple, Union


class InterestKind(str, Enum):
    """How interest accrues on the financed principal"""

    NONE = "NONE"
    SIMPLE = "SIMPLE"  # equal capital, interest on outstanding balance
    COMPOUND = "COMPOUND"  # French amortization, fixed installment


class InstallmentLabel(str, Enum):
    DOWN_PAYMENT = "DOWN_PAYMENT"
    REGULAR = "REGULAR"


@dataclass(frozen=True)
class NoDownPayment:
    """Plan without a down-payment row"""

    def resolve(self, principal_total: Decimal) -> Decimal:
        return Decimal("0")


@dataclass(frozen=True)
class AmountDownPayment:
    """Down payment given as a fixed amount"""

    value: Decimal

    def resolve(self, principal_total: Decimal) -> Decimal:
        return self.value


@dataclass(frozen=True)
class PercentDownPayment:
    """Down payment given as a percentage of the principal (20 means 20%)"""

    value: Decimal

    def resolve(self, principal_total: Decimal) -> Decimal:
        return principal_total * self.value / Decimal(100)


DownPayment = Union[NoDownPayment, AmountDownPayment, PercentDownPayment]


@dataclass(frozen=True)
class PlanRequest:
    """Inputs for a single plan computation"""

    principal_total: Decimal
    issue_date: Union[date, datetime]
    days_to_first_due: int
    days_between_installments: int
    installment_count: int  # includes the down-payment row, if any
    interest_kind: InterestKind = InterestKind.NONE
    interest_rate_per_period: Decimal = Decimal("0")
    down_payment: DownPayment = field(default_factory=NoDownPayment)


@dataclass(frozen=True)
class Installment:
    """Single payment in a credit plan"""

    number: int
    due_date: datetime  # UTC instant of the business-local midnight
    amount: Decimal
    label: InstallmentLabel = InstallmentLabel.REGULAR
    id: Optional[str] = None  # caller-local, never used for ordering


@dataclass(frozen=True)
class PlanResult:
    """Output of the plan builder"""

    installments: Tuple[Installment, ...]
    total_interest: Decimal
    principal_financed: Decimal
    total_payable: Decimal

    @property
    def first_due(self) -> Optional[Installment]:
        return self.installments[0] if self.installments else None

    @property
    def down_payment(self) -> Optional[Installment]:
        for inst in self.installments:
            if inst.label == InstallmentLabel.DOWN_PAYMENT:
                return inst
        return None
