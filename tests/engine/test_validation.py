from dataclasses import replace
from datetime import date
from decimal import Decimal

from src.engine.validation import (
    ValidationResult,
    validate_intent,
    validate_intents,
    validate_params,
    validate_principal,
    validate_rate,
    validate_start_date,
    validate_term_years,
)
from src.models.loan import PaymentIntent

TODAY = date(2024, 6, 15)


class TestFieldChecks:
    def test_principal(self):
        assert validate_principal(Decimal("250000")).is_valid
        assert not validate_principal(Decimal("0")).is_valid
        high = validate_principal(Decimal("20000000"))
        assert high.is_valid
        assert high.warnings == ["Principal amount seems unusually high"]

    def test_rate(self):
        assert validate_rate(Decimal("0")).is_valid
        assert validate_rate(Decimal("-1")).errors == ["Interest rate cannot be negative"]
        assert validate_rate(Decimal("60")).warnings == ["Interest rate seems unusually high"]

    def test_term_years(self):
        assert validate_term_years(Decimal("30")).is_valid
        assert not validate_term_years(Decimal("0")).is_valid
        assert validate_term_years(Decimal("60")).warnings == ["Loan term seems unusually long"]


class TestStartDate:
    def test_required(self):
        assert validate_start_date("").errors == ["Start date is required"]

    def test_malformed(self):
        assert not validate_start_date("2024-13").is_valid
        assert not validate_start_date("June 2024").is_valid

    def test_no_date_checks_without_today(self):
        result = validate_start_date("1999-01")
        assert result.is_valid
        assert result.warnings == []

    def test_past_start_warns(self):
        result = validate_start_date("2024-05", today=TODAY)
        assert result.is_valid
        assert result.warnings == ["Start date is in the past"]

    def test_current_month_ok(self):
        assert validate_start_date("2024-06", today=TODAY).warnings == []

    def test_far_future_warns(self):
        result = validate_start_date("2040-01", today=TODAY)
        assert result.warnings == ["Start date seems too far in the future"]


class TestIntentChecks:
    def test_valid(self):
        assert validate_intent(PaymentIntent(month=12, amount=Decimal("500")), 360).is_valid

    def test_month_out_of_range(self):
        result = validate_intent(PaymentIntent(month=361, amount=Decimal("500")), 360)
        assert result.errors == ["Month must be between 1 and 360"]

    def test_negative_amount(self):
        result = validate_intent(PaymentIntent(month=1, amount=Decimal("-5")), 360)
        assert result.errors == ["Amount must be a non-negative number"]

    def test_non_finite_amount(self):
        result = validate_intent(PaymentIntent(month=1, amount=Decimal("NaN")), 360)
        assert result.errors == ["Amount must be a non-negative number"]

    def test_recurring_quantity(self):
        intent = PaymentIntent(month=1, amount=Decimal("5"), is_recurring=True, recurring_quantity=0)
        assert validate_intent(intent, 360).errors == ["Recurring quantity must be at least 1"]

    def test_recurring_end_before_start(self):
        intent = PaymentIntent(month=10, amount=Decimal("5"), is_recurring=True, recurring_end_month=5)
        assert not validate_intent(intent, 360).is_valid

    def test_messages_prefixed_by_position(self):
        result = validate_intents(
            [
                PaymentIntent(month=1, amount=Decimal("5")),
                PaymentIntent(month=0, amount=Decimal("5")),
            ],
            360,
        )
        assert result.errors == ["Payment 2: Month must be between 1 and 360"]


class TestValidateParams:
    def test_clean_params(self, canonical_params):
        result = validate_params(canonical_params)
        assert result.is_valid
        assert result.warnings == []

    def test_collects_errors(self, canonical_params):
        params = replace(canonical_params, principal=Decimal("0"), annual_rate_pct=Decimal("-2"))
        result = validate_params(params)
        assert len(result.errors) == 2

    def test_map_and_recast_warnings(self, zero_rate_params):
        params = replace(
            zero_rate_params,
            extra_payments={20: Decimal("100"), 2: Decimal("-5")},
            recast_months={12},
        )
        result = validate_params(params)
        assert result.is_valid
        assert result.warnings == [
            "Extra payment in month 2 is not a non-negative amount and will be ignored",
            "Extra payment in month 20 falls outside the loan term",
            "Recast month 12 leaves no remaining term",
        ]

    def test_non_finite_map_amount_warns(self, zero_rate_params):
        params = replace(zero_rate_params, forgiveness={3: Decimal("Infinity")})
        result = validate_params(params)
        assert result.warnings == ["Forgiveness in month 3 is not a non-negative amount and will be ignored"]

    def test_past_start_with_today(self, canonical_params):
        result = validate_params(canonical_params, today=TODAY)
        assert result.warnings == ["Start date is in the past"]


class TestValidationResult:
    def test_merge_with_prefix(self):
        target = ValidationResult(errors=["a"])
        target.merge(ValidationResult(errors=["b"], warnings=["c"]), prefix="x: ")
        assert target.errors == ["a", "x: b"]
        assert target.warnings == ["x: c"]
        assert not target.is_valid
