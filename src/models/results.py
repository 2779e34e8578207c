from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Row:
    idx: int
    payment_date: str  # YYYY-MM

    scheduled_payment: Decimal  # P&I this month, capped to payoff
    interest: Decimal
    scheduled_principal: Decimal
    extra_principal: Decimal
    forgiven_principal: Decimal  # Non-cash, excluded from actual_payment
    actual_payment: Decimal  # scheduled_payment + extra_principal
    loan_balance: Decimal  # Ending balance

    cumulative_interest: Decimal
    cumulative_principal: Decimal  # Scheduled + extra
    cumulative_forgiveness: Decimal

    recast: bool = False
    new_payment: Optional[Decimal] = None


@dataclass(frozen=True)
class PaymentSegment:
    start: int
    payment: Decimal


@dataclass(frozen=True)
class ChartPoint:
    name: str
    balance: Decimal
    cumulative_interest: Decimal
    cumulative_principal: Decimal
    cumulative_forgiveness: Decimal


@dataclass(frozen=True)
class ScheduleResult:
    rows: tuple[Row, ...] = ()
    total_interest: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")  # Cash only, forgiveness excluded
    total_forgiveness: Decimal = Decimal("0")
    payoff_month: int = 0
    segments: tuple[PaymentSegment, ...] = ()
    chart: tuple[ChartPoint, ...] = ()

    @property
    def total_principal(self) -> Decimal:
        return self.total_paid - self.total_interest

    @property
    def initial_payment(self) -> Decimal:
        return self.segments[0].payment if self.segments else Decimal("0")


@dataclass(frozen=True)
class YearlySummary:
    year: int
    principal: Decimal = Decimal("0")
    extra: Decimal = Decimal("0")
    forgiveness: Decimal = Decimal("0")
    interest: Decimal = Decimal("0")
    cash_paid: Decimal = Decimal("0")
    ending_balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class PlanComparison:
    """Modified plan side by side with its no-extras baseline."""

    result: ScheduleResult
    baseline: ScheduleResult
    interest_saved: Decimal = Decimal("0")
    months_saved: int = 0
