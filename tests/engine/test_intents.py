from decimal import Decimal

import pytest

from src.engine.intents import map_intents
from src.models.loan import PaymentIntent, RecurringFrequency

TERM = 360


class TestMapIntents:
    def test_one_time_and_forgiveness_split(self):
        maps = map_intents(
            [
                PaymentIntent(month=1, amount=Decimal("100")),
                PaymentIntent(month=2, amount=Decimal("200"), is_forgiveness=True),
            ],
            TERM,
        )
        assert dict(maps.extra_payments) == {1: Decimal("100.00")}
        assert dict(maps.forgiveness) == {2: Decimal("200.00")}

    def test_annual_recurrence(self):
        maps = map_intents(
            [PaymentIntent(
                month=13,
                amount=Decimal("50"),
                is_recurring=True,
                recurring_quantity=3,
                recurring_frequency=RecurringFrequency.ANNUALLY,
            )],
            TERM,
        )
        assert sorted(maps.extra_payments) == [13, 25, 37]
        assert 49 not in maps.extra_payments

    def test_monthly_recurrence_by_count(self):
        maps = map_intents(
            [PaymentIntent(month=12, amount=Decimal("500"), is_recurring=True, recurring_quantity=4)],
            TERM,
        )
        assert sorted(maps.extra_payments) == [12, 13, 14, 15]

    def test_end_month_binds_before_count(self):
        maps = map_intents(
            [PaymentIntent(
                month=10, amount=Decimal("1"), is_recurring=True,
                recurring_quantity=100, recurring_end_month=12,
            )],
            TERM,
        )
        assert sorted(maps.extra_payments) == [10, 11, 12]

    def test_count_binds_before_end_month(self):
        maps = map_intents(
            [PaymentIntent(
                month=10, amount=Decimal("1"), is_recurring=True,
                recurring_quantity=2, recurring_end_month=30,
            )],
            TERM,
        )
        assert sorted(maps.extra_payments) == [10, 11]

    def test_zero_count_pays_once(self):
        maps = map_intents(
            [PaymentIntent(month=5, amount=Decimal("100"), is_recurring=True, recurring_quantity=0)],
            TERM,
        )
        assert dict(maps.extra_payments) == {5: Decimal("100.00")}

    def test_zero_count_with_end_month_runs_to_end(self):
        maps = map_intents(
            [PaymentIntent(
                month=5, amount=Decimal("1"), is_recurring=True,
                recurring_quantity=0, recurring_end_month=7,
            )],
            TERM,
        )
        assert sorted(maps.extra_payments) == [5, 6, 7]

    def test_end_month_without_count(self):
        maps = map_intents(
            [PaymentIntent(month=5, amount=Decimal("1"), is_recurring=True, recurring_end_month=8)],
            TERM,
        )
        assert sorted(maps.extra_payments) == [5, 6, 7, 8]

    def test_term_binds(self):
        maps = map_intents(
            [PaymentIntent(month=358, amount=Decimal("1"), is_recurring=True, recurring_quantity=10)],
            TERM,
        )
        assert sorted(maps.extra_payments) == [358, 359, 360]

    def test_annual_end_month_not_overshot(self):
        maps = map_intents(
            [PaymentIntent(
                month=1, amount=Decimal("1"), is_recurring=True,
                recurring_end_month=30, recurring_frequency=RecurringFrequency.ANNUALLY,
            )],
            TERM,
        )
        assert sorted(maps.extra_payments) == [1, 13, 25]

    def test_recurring_without_count_or_end_is_single(self):
        maps = map_intents([PaymentIntent(month=7, amount=Decimal("10"), is_recurring=True)], TERM)
        assert dict(maps.extra_payments) == {7: Decimal("10.00")}

    def test_same_month_amounts_sum(self):
        maps = map_intents(
            [
                PaymentIntent(month=5, amount=Decimal("100.10")),
                PaymentIntent(month=5, amount=Decimal("0.25")),
                PaymentIntent(month=3, amount=Decimal("10"), is_recurring=True, recurring_quantity=3),
            ],
            TERM,
        )
        assert maps.extra_payments[5] == Decimal("120.35")
        assert maps.extra_payments[4] == Decimal("10.00")

    def test_start_beyond_term_clamped(self):
        maps = map_intents([PaymentIntent(month=400, amount=Decimal("1000"))], TERM)
        assert dict(maps.extra_payments) == {360: Decimal("1000.00")}

    def test_non_positive_or_missing_month_dropped(self):
        maps = map_intents(
            [
                PaymentIntent(month=0, amount=Decimal("1000")),
                PaymentIntent(month=-3, amount=Decimal("1000")),
                PaymentIntent(month=None, amount=Decimal("1000")),
                PaymentIntent(month=float("nan"), amount=Decimal("1000")),
            ],
            TERM,
        )
        assert dict(maps.extra_payments) == {}

    def test_fractional_month_rounds_half_up(self):
        maps = map_intents([PaymentIntent(month=2.5, amount=Decimal("1"))], TERM)
        assert list(maps.extra_payments) == [3]

    def test_negative_amount_clamped(self):
        maps = map_intents([PaymentIntent(month=4, amount=Decimal("-250"))], TERM)
        assert maps.extra_payments[4] == Decimal("0")

    @pytest.mark.parametrize("amount", [Decimal("NaN"), Decimal("Infinity"), Decimal("-Infinity"), "abc", None])
    def test_malformed_amount_counts_as_zero(self, amount):
        maps = map_intents(
            [
                PaymentIntent(month=5, amount=amount),
                PaymentIntent(month=6, amount=Decimal("25")),
            ],
            TERM,
        )
        assert maps.extra_payments[5] == 0
        assert maps.extra_payments[6] == Decimal("25.00")

    def test_inactive_skipped(self):
        maps = map_intents([PaymentIntent(month=4, amount=Decimal("250"), is_active=False)], TERM)
        assert dict(maps.extra_payments) == {}

    def test_maps_are_read_only(self):
        maps = map_intents([PaymentIntent(month=1, amount=Decimal("1"))], TERM)
        with pytest.raises(TypeError):
            maps.extra_payments[2] = Decimal("1")

