"""Baseline vs modified plan comparison.

Pure functions. No I/O. Both plans are built independently from the same loan.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from src.models.loan import DownPayment, DownPaymentKind, PaymentIntent, ScheduleParams
from src.models.results import PlanComparison
from src.engine.intents import map_intents
from src.engine.months import parse_months
from src.engine.payment import round2
from src.engine.schedule import build_schedule


def loan_principal(home_price: Decimal, down_payment: DownPayment) -> Decimal:
    """Loan amount left after the down payment."""
    if down_payment.kind == DownPaymentKind.PERCENTAGE:
        return round2(home_price * (Decimal("1") - down_payment.value / 100))
    return max(Decimal("0"), round2(home_price - down_payment.value))


def term_months_from_years(term_years: Decimal) -> int:
    """Whole months in a term given in years, at least one."""
    months = (Decimal(term_years) * 12).quantize(Decimal("1"), ROUND_HALF_UP)
    return max(1, int(months))


def build_params(
    principal: Decimal,
    annual_rate_pct: Decimal,
    term_years: Decimal,
    start_ym: str,
    intents: Iterable[PaymentIntent] = (),
    recast_months_text: str = "",
    auto_recast: bool = False,
) -> ScheduleParams:
    """Assemble ScheduleParams from user-level inputs.

    Intents are expanded into fresh maps on every call.
    """
    term_months = term_months_from_years(term_years)
    maps = map_intents(intents, term_months)
    return ScheduleParams(
        principal=principal,
        annual_rate_pct=annual_rate_pct,
        term_months=term_months,
        start_ym=start_ym,
        extra_payments=maps.extra_payments,
        forgiveness=maps.forgiveness,
        recast_months=frozenset(parse_months(recast_months_text)),
        auto_recast_on_extra=auto_recast,
    )


def compare_plans(params: ScheduleParams) -> PlanComparison:
    """Build the modified plan and its baseline, and report savings."""
    result = build_schedule(params)
    baseline = build_schedule(params.baseline())

    return PlanComparison(
        result=result,
        baseline=baseline,
        interest_saved=round2(baseline.total_interest - result.total_interest),
        months_saved=max(0, baseline.payoff_month - result.payoff_month),
    )
