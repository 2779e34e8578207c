"""Expand payment intents (one-off or recurring) into month -> amount maps.

Pure functions. No I/O. Bad intents are normalized or dropped, never raised.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from src.models.loan import PaymentIntent
from src.engine.payment import round2, to_amount


@dataclass(frozen=True)
class IntentMaps:
    extra_payments: Mapping[int, Decimal]
    forgiveness: Mapping[int, Decimal]


def _start_month(month) -> Optional[int]:
    """Round half up to a whole month; None if missing or non-numeric."""
    if month is None:
        return None
    try:
        value = Decimal(str(month))
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return int(value.quantize(Decimal("1"), ROUND_HALF_UP))


def _occurrences(intent: PaymentIntent, start: int, term_months: int) -> list[int]:
    if not intent.is_recurring:
        return [start]

    interval = intent.recurring_frequency.interval
    quantity = intent.recurring_quantity
    end_month = intent.recurring_end_month
    if quantity is not None and quantity < 1:
        quantity = None
    if quantity is None and end_month is None:
        quantity = 1

    last = term_months if end_month is None else min(term_months, end_month)
    months = []
    month = start
    while month <= last and (quantity is None or len(months) < quantity):
        months.append(month)
        month += interval
    return months


def _add_intent(target: dict[int, Decimal], intent: PaymentIntent, term_months: int) -> None:
    start = _start_month(intent.month)
    if start is None or start < 1:
        return
    start = min(term_months, start)
    amount = to_amount(intent.amount)

    for month in _occurrences(intent, start, term_months):
        target[month] = round2(target.get(month, Decimal("0")) + amount)


def map_intents(intents: Iterable[PaymentIntent], term_months: int) -> IntentMaps:
    """Split intents into an extra-payment map and a forgiveness map."""
    extras: dict[int, Decimal] = {}
    forgiveness: dict[int, Decimal] = {}

    for intent in intents:
        if not intent.is_active:
            continue
        target = forgiveness if intent.is_forgiveness else extras
        _add_intent(target, intent, term_months)

    return IntentMaps(
        extra_payments=MappingProxyType(extras),
        forgiveness=MappingProxyType(forgiveness),
    )
