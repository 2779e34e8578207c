"""Optional pre-checks for loan inputs.

The schedule engine accepts any ScheduleParams; callers that want stricter
guarantees run these first. Errors block a build, warnings only flag unusual
values.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from src.models.loan import PaymentIntent, ScheduleParams
from src.engine.calendar import parse_year_month

MAX_REASONABLE_PRINCIPAL = Decimal("10000000")
MAX_REASONABLE_RATE_PCT = Decimal("50")
MAX_REASONABLE_TERM_YEARS = Decimal("50")
MAX_START_YEARS_AHEAD = 10


def _is_valid_amount(value) -> bool:
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return False
    return amount.is_finite() and amount >= 0


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def merge(self, other: "ValidationResult", prefix: str = "") -> None:
        self.errors.extend(f"{prefix}{e}" for e in other.errors)
        self.warnings.extend(f"{prefix}{w}" for w in other.warnings)


def validate_principal(principal: Decimal) -> ValidationResult:
    result = ValidationResult()
    if principal <= 0:
        result.errors.append("Principal amount must be greater than 0")
    elif principal > MAX_REASONABLE_PRINCIPAL:
        result.warnings.append("Principal amount seems unusually high")
    return result


def validate_rate(annual_rate_pct: Decimal) -> ValidationResult:
    result = ValidationResult()
    if annual_rate_pct < 0:
        result.errors.append("Interest rate cannot be negative")
    elif annual_rate_pct > MAX_REASONABLE_RATE_PCT:
        result.warnings.append("Interest rate seems unusually high")
    return result


def validate_term_years(term_years: Decimal) -> ValidationResult:
    result = ValidationResult()
    if term_years <= 0:
        result.errors.append("Loan term must be greater than 0 years")
    elif term_years > MAX_REASONABLE_TERM_YEARS:
        result.warnings.append("Loan term seems unusually long")
    return result


def validate_start_date(start_ym: str, today: Optional[date] = None) -> ValidationResult:
    """Check a YYYY-MM start date. Past/far-future checks only run when `today` is given."""
    result = ValidationResult()
    if not start_ym:
        result.errors.append("Start date is required")
        return result
    try:
        year, month = parse_year_month(start_ym)
    except ValueError:
        result.errors.append("Start date must be in YYYY-MM format with a month from 01 to 12")
        return result

    if today is not None:
        if (year, month) < (today.year, today.month):
            result.warnings.append("Start date is in the past")
        if year > today.year + MAX_START_YEARS_AHEAD:
            result.warnings.append("Start date seems too far in the future")
    return result


def validate_intent(intent: PaymentIntent, term_months: int) -> ValidationResult:
    result = ValidationResult()
    month = intent.month
    if month is None or not 1 <= month <= term_months:
        result.errors.append(f"Month must be between 1 and {term_months}")
    if intent.amount is None or not _is_valid_amount(intent.amount):
        result.errors.append("Amount must be a non-negative number")

    if intent.is_recurring:
        if intent.recurring_quantity is not None and intent.recurring_quantity < 1:
            result.errors.append("Recurring quantity must be at least 1")
        end = intent.recurring_end_month
        if end is not None and month is not None and (end < month or end > term_months):
            result.errors.append("Recurring end month must be after start month and within loan term")
    return result


def validate_intents(intents: Iterable[PaymentIntent], term_months: int) -> ValidationResult:
    result = ValidationResult()
    for i, intent in enumerate(intents, start=1):
        result.merge(validate_intent(intent, term_months), prefix=f"Payment {i}: ")
    return result


def validate_params(params: ScheduleParams, today: Optional[date] = None) -> ValidationResult:
    """Pre-check a fully assembled ScheduleParams."""
    result = ValidationResult()
    result.merge(validate_principal(params.principal))
    result.merge(validate_rate(params.annual_rate_pct))
    result.merge(validate_term_years(Decimal(params.term_months) / 12))
    result.merge(validate_start_date(params.start_ym, today))

    for label, amounts in (("Extra payment", params.extra_payments), ("Forgiveness", params.forgiveness)):
        for month, amount in sorted(amounts.items()):
            if not 1 <= month <= params.term_months:
                result.warnings.append(f"{label} in month {month} falls outside the loan term")
            if not _is_valid_amount(amount):
                result.warnings.append(f"{label} in month {month} is not a non-negative amount and will be ignored")
    for month in sorted(params.recast_months):
        if month >= params.term_months:
            result.warnings.append(f"Recast month {month} leaves no remaining term")
    return result
