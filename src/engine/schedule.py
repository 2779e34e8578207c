"""Month-by-month loan schedule with extra payments, forgiveness and recasting.

Pure computation: ScheduleParams in, ScheduleResult out. Never raises on
valid params; malformed month amounts are clamped rather than rejected.
"""

import logging
from decimal import Decimal

from src.models.loan import ScheduleParams
from src.models.results import Row, PaymentSegment, ScheduleResult
from src.engine.aggregate import chart_projection, payoff_month
from src.engine.calendar import add_months
from src.engine.payment import calc_payment, round2, to_amount

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
MAX_EXTRA_ITERATIONS = 600  # Months allowed past the original term
MIN_BALANCE_THRESHOLD = Decimal("0.001")  # Below this the loan is paid off
PAYMENT_DIFFERENCE_THRESHOLD = Decimal("0.005")  # Smaller recast changes are ignored
MATURITY_RESIDUE_LIMIT = Decimal("1.00")  # Rounding drift folded into the final row


def _clamp(value: Decimal, upper: Decimal) -> Decimal:
    return max(ZERO, min(value, upper))


class _Ledger:
    """Running totals for a single build. Append-only."""

    def __init__(self, initial_payment: Decimal):
        self.rows: list[Row] = []
        self.segments: list[PaymentSegment] = [PaymentSegment(start=1, payment=initial_payment)]
        self.total_interest = ZERO
        self.total_paid = ZERO
        self.total_forgiveness = ZERO
        self.cumulative_principal = ZERO

    def post(
        self,
        idx: int,
        payment_date: str,
        scheduled_payment: Decimal,
        interest: Decimal,
        scheduled_principal: Decimal,
        extra: Decimal,
        forgiven: Decimal,
        balance: Decimal,
        recast: bool = False,
        new_payment: Decimal | None = None,
    ) -> Row:
        actual_payment = round2(scheduled_payment + extra)
        self.total_interest += interest
        self.total_paid += actual_payment
        self.total_forgiveness += forgiven
        self.cumulative_principal += scheduled_principal + extra

        row = Row(
            idx=idx,
            payment_date=payment_date,
            scheduled_payment=scheduled_payment,
            interest=interest,
            scheduled_principal=scheduled_principal,
            extra_principal=extra,
            forgiven_principal=forgiven,
            actual_payment=actual_payment,
            loan_balance=balance,
            cumulative_interest=self.total_interest,
            cumulative_principal=self.cumulative_principal,
            cumulative_forgiveness=self.total_forgiveness,
            recast=recast,
            new_payment=new_payment,
        )
        self.rows.append(row)
        return row

    def open_segment(self, start: int, payment: Decimal) -> None:
        self.segments.append(PaymentSegment(start=start, payment=payment))

    def result(self) -> ScheduleResult:
        rows = tuple(self.rows)
        return ScheduleResult(
            rows=rows,
            total_interest=self.total_interest,
            total_paid=self.total_paid,
            total_forgiveness=self.total_forgiveness,
            payoff_month=payoff_month(rows),
            segments=tuple(self.segments),
            chart=chart_projection(rows),
        )


def build_schedule(params: ScheduleParams) -> ScheduleResult:
    """Simulate the loan until it is retired or the original term ends.

    Each month: interest accrues on the opening balance, the scheduled
    payment is capped at the payoff amount, then extra cash and forgiveness
    are applied (each capped independently). A recast re-levels the payment
    over the months left in the original term, so maturity never moves.
    """
    rate = params.monthly_rate
    term = params.term_months
    balance = max(ZERO, round2(params.principal))
    payment = calc_payment(balance, rate, term)
    ledger = _Ledger(payment)

    max_iterations = term + MAX_EXTRA_ITERATIONS
    month = 1
    while balance > MIN_BALANCE_THRESHOLD and month <= max_iterations:
        interest = round2(balance * rate)
        payoff_amount = round2(balance + interest)
        scheduled_payment = min(payment, payoff_amount)
        principal_part = round2(scheduled_payment - interest)
        if principal_part < ZERO:
            logger.warning("Month %d: payment %s below interest %s", month, scheduled_payment, interest)
            principal_part = ZERO

        planned_extra = round2(to_amount(params.extra_payments.get(month)))
        # Interest is already covered by the scheduled payment
        extra = _clamp(planned_extra, round2(balance - principal_part))

        planned_forgiveness = round2(to_amount(params.forgiveness.get(month)))
        forgiven = _clamp(planned_forgiveness, round2(balance))

        new_balance = max(ZERO, round2(balance - principal_part - extra - forgiven))

        # Rounding drift at maturity: absorb into the last scheduled payment
        if month == term and MIN_BALANCE_THRESHOLD < new_balance < MATURITY_RESIDUE_LIMIT:
            principal_part += new_balance
            scheduled_payment += new_balance
            new_balance = ZERO

        recast = False
        new_payment = None
        months_left = term - month
        wants_recast = month in params.recast_months or (
            params.auto_recast_on_extra and (extra > 0 or forgiven > 0)
        )
        if wants_recast and months_left > 0 and new_balance > 0:
            recast = True
            new_payment = calc_payment(new_balance, rate, months_left)
            if abs(new_payment - payment) > PAYMENT_DIFFERENCE_THRESHOLD:
                logger.debug("Month %d: recast %s -> %s", month, payment, new_payment)
                payment = new_payment
                ledger.open_segment(month + 1, payment)

        ledger.post(
            idx=month,
            payment_date=add_months(params.start_ym, month - 1),
            scheduled_payment=scheduled_payment,
            interest=interest,
            scheduled_principal=principal_part,
            extra=extra,
            forgiven=forgiven,
            balance=new_balance,
            recast=recast,
            new_payment=new_payment,
        )
        balance = new_balance

        if month == term and balance > MIN_BALANCE_THRESHOLD:
            _post_payoff_row(ledger, params, month + 1, balance)
            balance = ZERO
            break
        month += 1

    if balance > MIN_BALANCE_THRESHOLD:
        logger.warning(
            "Schedule truncated at %d months with %s outstanding", max_iterations, balance
        )

    return ledger.result()


def _post_payoff_row(ledger: _Ledger, params: ScheduleParams, month: int, balance: Decimal) -> None:
    """Retire a residue left after the final contractual month."""
    interest = round2(balance * params.monthly_rate)
    ledger.post(
        idx=month,
        payment_date=add_months(params.start_ym, month - 1),
        scheduled_payment=round2(balance + interest),
        interest=interest,
        scheduled_principal=balance,
        extra=ZERO,
        forgiven=ZERO,
        balance=ZERO,
    )
