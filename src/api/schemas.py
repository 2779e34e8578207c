"""Pydantic schemas for API request/response models."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from src.config import settings


# ---- Request schemas ----

class PaymentIntentRequest(BaseModel):
    month: int | None = Field(None, description="1-based loan month of the first payment")
    amount: Decimal = Decimal("0")
    is_forgiveness: bool = False

    is_recurring: bool = False
    recurring_quantity: int | None = None
    recurring_end_month: int | None = None
    recurring_frequency: Literal["monthly", "annually"] = "monthly"

    id: str = ""
    description: str = ""
    category: str = ""
    is_active: bool = True


class ScheduleRequest(BaseModel):
    # Loan amount: either principal directly, or home price less down payment
    principal: Decimal | None = Field(None, ge=0)
    home_price: Decimal | None = Field(None, ge=0)
    down_payment_type: Literal["percentage", "amount"] = "percentage"
    down_payment_value: Decimal = Field(Decimal("20"), ge=0)

    annual_rate_pct: Decimal = Field(settings.default_rate_pct, ge=0)
    term_years: Decimal = Field(Decimal(settings.default_term_years), gt=0)
    start_ym: str = Field(..., pattern=r"^\d{4}-(0[1-9]|1[0-2])$", description="YYYY-MM")

    payments: list[PaymentIntentRequest] = []
    recast_months: str = Field("", description='e.g. "12, 24-26"')
    auto_recast: bool = False

    # Reject inputs with validation errors instead of simulating them
    strict: bool = False


# ---- Response schemas ----

class RowResponse(BaseModel):
    idx: int
    payment_date: str
    scheduled_payment: Decimal
    interest: Decimal
    scheduled_principal: Decimal
    extra_principal: Decimal
    forgiven_principal: Decimal
    actual_payment: Decimal
    loan_balance: Decimal
    cumulative_interest: Decimal
    cumulative_principal: Decimal
    cumulative_forgiveness: Decimal
    recast: bool = False
    new_payment: Decimal | None = None


class PaymentSegmentResponse(BaseModel):
    start: int
    payment: Decimal


class ChartPointResponse(BaseModel):
    name: str
    balance: Decimal
    cumulative_interest: Decimal
    cumulative_principal: Decimal
    cumulative_forgiveness: Decimal


class ScheduleResponse(BaseModel):
    principal: Decimal
    term_months: int
    total_interest: Decimal
    total_paid: Decimal
    total_forgiveness: Decimal
    payoff_month: int
    payoff_date: str | None = None
    segments: list[PaymentSegmentResponse]
    rows: list[RowResponse]
    chart: list[ChartPointResponse]


class ComparisonResponse(BaseModel):
    result: ScheduleResponse
    baseline: ScheduleResponse
    interest_saved: Decimal
    months_saved: int


class YearlySummaryResponse(BaseModel):
    year: int
    principal: Decimal
    extra: Decimal
    forgiveness: Decimal
    interest: Decimal
    cash_paid: Decimal
    ending_balance: Decimal


class ValidationResponse(BaseModel):
    is_valid: bool
    errors: list[str] = []
    warnings: list[str] = []
