"""Schedule routes: build, compare, export and validate a loan plan."""

import logging
from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from src.api.deps import get_settings
from src.api.schemas import (
    ChartPointResponse,
    ComparisonResponse,
    PaymentIntentRequest,
    PaymentSegmentResponse,
    RowResponse,
    ScheduleRequest,
    ScheduleResponse,
    ValidationResponse,
    YearlySummaryResponse,
)
from src.config import Settings
from src.engine.aggregate import yearly_summary
from src.engine.comparison import build_params, compare_plans, loan_principal
from src.engine.schedule import build_schedule
from src.engine.validation import ValidationResult, validate_intents, validate_params
from src.export.schedule_csv import schedule_csv
from src.models.loan import (
    DownPayment,
    DownPaymentKind,
    PaymentIntent,
    RecurringFrequency,
    ScheduleParams,
)
from src.models.results import ScheduleResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/schedule", tags=["schedule"])


def _to_intent(p: PaymentIntentRequest) -> PaymentIntent:
    return PaymentIntent(
        month=p.month,
        amount=p.amount,
        is_forgiveness=p.is_forgiveness,
        is_recurring=p.is_recurring,
        recurring_quantity=p.recurring_quantity,
        recurring_end_month=p.recurring_end_month,
        recurring_frequency=RecurringFrequency(p.recurring_frequency),
        id=p.id,
        description=p.description,
        category=p.category,
        is_active=p.is_active,
    )


def _principal(req: ScheduleRequest) -> Decimal:
    if req.principal is not None:
        return req.principal
    if req.home_price is None:
        raise HTTPException(status_code=400, detail="Provide principal or home_price.")
    down_payment = DownPayment(kind=DownPaymentKind(req.down_payment_type), value=req.down_payment_value)
    return loan_principal(req.home_price, down_payment)


def _validate(req: ScheduleRequest, params: ScheduleParams) -> ValidationResult:
    result = validate_params(params, today=date.today())
    result.merge(validate_intents([_to_intent(p) for p in req.payments], params.term_months))
    return result


def _build_params(req: ScheduleRequest) -> ScheduleParams:
    """Convert a request into ScheduleParams, rejecting invalid input in strict mode."""
    params = build_params(
        principal=_principal(req),
        annual_rate_pct=req.annual_rate_pct,
        term_years=req.term_years,
        start_ym=req.start_ym,
        intents=[_to_intent(p) for p in req.payments],
        recast_months_text=req.recast_months,
        auto_recast=req.auto_recast,
    )
    if req.strict:
        check = _validate(req, params)
        if not check.is_valid:
            raise HTTPException(status_code=422, detail=check.errors)
    return params


def _result_to_response(result: ScheduleResult, params: ScheduleParams) -> ScheduleResponse:
    """Convert engine ScheduleResult to API response."""
    rows = [
        RowResponse(
            idx=r.idx,
            payment_date=r.payment_date,
            scheduled_payment=r.scheduled_payment,
            interest=r.interest,
            scheduled_principal=r.scheduled_principal,
            extra_principal=r.extra_principal,
            forgiven_principal=r.forgiven_principal,
            actual_payment=r.actual_payment,
            loan_balance=r.loan_balance,
            cumulative_interest=r.cumulative_interest,
            cumulative_principal=r.cumulative_principal,
            cumulative_forgiveness=r.cumulative_forgiveness,
            recast=r.recast,
            new_payment=r.new_payment,
        )
        for r in result.rows
    ]
    return ScheduleResponse(
        principal=params.principal,
        term_months=params.term_months,
        total_interest=result.total_interest,
        total_paid=result.total_paid,
        total_forgiveness=result.total_forgiveness,
        payoff_month=result.payoff_month,
        payoff_date=result.rows[-1].payment_date if result.rows else None,
        segments=[PaymentSegmentResponse(start=s.start, payment=s.payment) for s in result.segments],
        rows=rows,
        chart=[
            ChartPointResponse(
                name=c.name,
                balance=c.balance,
                cumulative_interest=c.cumulative_interest,
                cumulative_principal=c.cumulative_principal,
                cumulative_forgiveness=c.cumulative_forgiveness,
            )
            for c in result.chart
        ],
    )


@router.post("", response_model=ScheduleResponse)
async def create_schedule(req: ScheduleRequest):
    """Simulate the loan with the requested payments and recasts."""
    params = _build_params(req)
    result = build_schedule(params)
    logger.info("Built schedule: %d months, payoff month %d", params.term_months, result.payoff_month)
    return _result_to_response(result, params)


@router.post("/compare", response_model=ComparisonResponse)
async def compare_schedule(req: ScheduleRequest):
    """Simulate the plan and its no-extras baseline and report savings."""
    params = _build_params(req)
    comparison = compare_plans(params)
    return ComparisonResponse(
        result=_result_to_response(comparison.result, params),
        baseline=_result_to_response(comparison.baseline, params.baseline()),
        interest_saved=comparison.interest_saved,
        months_saved=comparison.months_saved,
    )


@router.post("/yearly", response_model=list[YearlySummaryResponse])
async def yearly_schedule(req: ScheduleRequest):
    """Schedule totals grouped by loan year."""
    result = build_schedule(_build_params(req))
    return [
        YearlySummaryResponse(
            year=y.year,
            principal=y.principal,
            extra=y.extra,
            forgiveness=y.forgiveness,
            interest=y.interest,
            cash_paid=y.cash_paid,
            ending_balance=y.ending_balance,
        )
        for y in yearly_summary(result)
    ]


@router.post("/csv")
async def export_schedule_csv(req: ScheduleRequest, app_settings: Settings = Depends(get_settings)):
    """Download the schedule as CSV."""
    result = build_schedule(_build_params(req))
    return Response(
        content=schedule_csv(result.rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{app_settings.csv_filename}"'},
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate_schedule(req: ScheduleRequest):
    """Report input problems without simulating."""
    check = _validate(req, _build_params(req.model_copy(update={"strict": False})))
    return ValidationResponse(is_valid=check.is_valid, errors=check.errors, warnings=check.warnings)
