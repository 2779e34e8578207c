"""Loan input data types: schedule parameters and payment intents."""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class RecurringFrequency(Enum):
    MONTHLY = "monthly"
    ANNUALLY = "annually"

    @property
    def interval(self) -> int:
        return 12 if self is RecurringFrequency.ANNUALLY else 1


class DownPaymentKind(Enum):
    PERCENTAGE = "percentage"
    AMOUNT = "amount"


@dataclass(frozen=True)
class DownPayment:
    kind: DownPaymentKind = DownPaymentKind.PERCENTAGE
    value: Decimal = Decimal("20")


@dataclass(frozen=True)
class PaymentIntent:
    """One user-entered extra payment or forgiveness, possibly recurring."""
    month: Optional[Decimal | int]
    amount: Decimal
    is_forgiveness: bool = False

    # Recurrence
    is_recurring: bool = False
    recurring_quantity: Optional[int] = None  # Number of occurrences
    recurring_end_month: Optional[int] = None  # Inclusive
    recurring_frequency: RecurringFrequency = RecurringFrequency.MONTHLY

    # Metadata
    id: str = ""
    description: str = ""
    category: str = ""
    is_active: bool = True


def _frozen_map(values: Optional[Mapping[int, Decimal]]) -> Mapping[int, Decimal]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class ScheduleParams:
    principal: Decimal
    annual_rate_pct: Decimal  # e.g. 6 for 6%
    term_months: int
    start_ym: str  # "YYYY-MM"
    extra_payments: Mapping[int, Decimal] = field(default_factory=dict)
    forgiveness: Mapping[int, Decimal] = field(default_factory=dict)
    recast_months: frozenset[int] = frozenset()
    auto_recast_on_extra: bool = False

    def __post_init__(self):
        object.__setattr__(self, "extra_payments", _frozen_map(self.extra_payments))
        object.__setattr__(self, "forgiveness", _frozen_map(self.forgiveness))
        object.__setattr__(self, "recast_months", frozenset(self.recast_months))

    @property
    def monthly_rate(self) -> Decimal:
        return Decimal(self.annual_rate_pct) / 100 / 12

    def baseline(self) -> "ScheduleParams":
        """Same loan with no extras, no forgiveness and no recasting."""
        return replace(
            self,
            extra_payments={},
            forgiveness={},
            recast_months=frozenset(),
            auto_recast_on_extra=False,
        )
