"""Canonical test fixtures used across all engine tests.

Fixture: $100K loan, 6% fixed, 30yr, first payment January 2024.
Zero-rate fixtures keep recast arithmetic exact for hand-checked values.
"""

import pytest
from decimal import Decimal

from src.models.loan import ScheduleParams


@pytest.fixture
def canonical_params() -> ScheduleParams:
    """$100K at 6% for 360 months, no extras."""
    return ScheduleParams(
        principal=Decimal("100000"),
        annual_rate_pct=Decimal("6"),
        term_months=360,
        start_ym="2024-01",
    )


@pytest.fixture
def zero_rate_params() -> ScheduleParams:
    """$12K interest-free over 12 months: $1,000/mo."""
    return ScheduleParams(
        principal=Decimal("12000"),
        annual_rate_pct=Decimal("0"),
        term_months=12,
        start_ym="2024-01",
    )


def assert_ledger_invariants(params: ScheduleParams, result) -> None:
    """Balance bookkeeping, totals and segment ordering for any schedule."""
    previous = params.principal
    cumulative_interest = Decimal("0")
    for r in result.rows:
        assert r.loan_balance >= 0
        assert r.loan_balance <= previous
        assert r.loan_balance == previous - r.scheduled_principal - r.extra_principal - r.forgiven_principal
        assert r.actual_payment == r.scheduled_payment + r.extra_principal
        cumulative_interest += r.interest
        assert r.cumulative_interest == cumulative_interest
        previous = r.loan_balance

    assert result.total_interest == sum((r.interest for r in result.rows), Decimal("0"))
    assert result.total_forgiveness == sum((r.forgiven_principal for r in result.rows), Decimal("0"))
    assert result.total_paid == sum(
        (r.scheduled_payment + r.extra_principal for r in result.rows), Decimal("0")
    )
    assert result.total_paid == result.total_interest + sum(
        (r.scheduled_principal + r.extra_principal for r in result.rows), Decimal("0")
    )

    starts = [s.start for s in result.segments]
    assert starts[0] == 1
    assert starts == sorted(set(starts))


@pytest.fixture
def check_invariants():
    return assert_ledger_invariants
