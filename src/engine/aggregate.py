"""Derived views over a built schedule: payoff month, chart points, yearly totals.

Single forward passes over existing rows. Nothing here re-simulates the loan.
"""

from decimal import Decimal
from typing import Sequence

from src.models.results import ChartPoint, Row, ScheduleResult, YearlySummary


def payoff_month(rows: Sequence[Row]) -> int:
    """Index of the final row, 0 for an empty schedule."""
    return rows[-1].idx if rows else 0


def chart_projection(rows: Sequence[Row]) -> tuple[ChartPoint, ...]:
    return tuple(
        ChartPoint(
            name=f"{r.idx}\n{r.payment_date}",
            balance=r.loan_balance,
            cumulative_interest=r.cumulative_interest,
            cumulative_principal=r.cumulative_principal,
            cumulative_forgiveness=r.cumulative_forgiveness,
        )
        for r in rows
    )


def yearly_summary(result: ScheduleResult) -> list[YearlySummary]:
    """Aggregate a schedule by loan year (months 1-12 are year 1, and so on).

    The last year may be partial when the loan pays off early.
    """
    yearly: list[YearlySummary] = []
    year_principal = Decimal("0")
    year_extra = Decimal("0")
    year_forgiveness = Decimal("0")
    year_interest = Decimal("0")
    year_cash = Decimal("0")

    for i, r in enumerate(result.rows):
        year_principal += r.scheduled_principal
        year_extra += r.extra_principal
        year_forgiveness += r.forgiven_principal
        year_interest += r.interest
        year_cash += r.actual_payment

        is_last = i == len(result.rows) - 1
        if r.idx % 12 == 0 or is_last:
            yearly.append(YearlySummary(
                year=(r.idx - 1) // 12 + 1,
                principal=year_principal,
                extra=year_extra,
                forgiveness=year_forgiveness,
                interest=year_interest,
                cash_paid=year_cash,
                ending_balance=r.loan_balance,
            ))
            year_principal = Decimal("0")
            year_extra = Decimal("0")
            year_forgiveness = Decimal("0")
            year_interest = Decimal("0")
            year_cash = Decimal("0")

    return yearly
