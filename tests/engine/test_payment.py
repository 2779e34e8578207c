from decimal import Decimal

from src.engine.payment import calc_payment, round2, to_amount


class TestRound2:
    def test_half_rounds_away_from_zero(self):
        assert round2(Decimal("1.005")) == Decimal("1.01")
        assert round2(Decimal("-1.005")) == Decimal("-1.01")

    def test_below_half_rounds_down(self):
        assert round2(Decimal("2.0049")) == Decimal("2.00")


class TestCalcPayment:
    def test_standard_mortgage(self):
        """$100K at 6% for 30 years."""
        assert calc_payment(Decimal("100000"), Decimal("0.06") / 12, 360) == Decimal("599.55")

    def test_seven_percent(self):
        assert calc_payment(Decimal("400000"), Decimal("0.07") / 12, 360) == Decimal("2661.21")

    def test_zero_rate(self):
        assert calc_payment(Decimal("100000"), Decimal("0"), 360) == Decimal("277.78")

    def test_near_zero_rate_uses_straight_line(self):
        assert calc_payment(Decimal("100000"), Decimal("1e-13"), 360) == Decimal("277.78")

    def test_tiny_rate_close_to_straight_line(self):
        pmt = calc_payment(Decimal("100000"), Decimal("1e-9"), 360)
        assert abs(pmt - Decimal("277.78")) <= Decimal("0.01")

    def test_zero_or_negative_term(self):
        assert calc_payment(Decimal("100000"), Decimal("0.005"), 0) == 0
        assert calc_payment(Decimal("100000"), Decimal("0.005"), -12) == 0
        assert calc_payment(Decimal("100000"), Decimal("0"), 0) == 0

    def test_zero_principal(self):
        assert calc_payment(Decimal("0"), Decimal("0.005"), 360) == 0

    def test_single_month_is_full_payoff(self):
        # One payment retires principal plus one month of interest
        assert calc_payment(Decimal("1000"), Decimal("0.01"), 1) == Decimal("1010.00")


class TestToAmount:
    def test_passes_through_valid_amounts(self):
        assert to_amount(Decimal("125.50")) == Decimal("125.50")
        assert to_amount(3) == Decimal("3")
        assert to_amount("10.25") == Decimal("10.25")

    def test_negative_clamped(self):
        assert to_amount(Decimal("-40")) == 0

    def test_malformed_counts_as_zero(self):
        assert to_amount(None) == 0
        assert to_amount("abc") == 0
        assert to_amount(Decimal("NaN")) == 0
        assert to_amount(Decimal("Infinity")) == 0
        assert to_amount(float("inf")) == 0
