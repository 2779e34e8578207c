"""Level-payment formula and cent rounding.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

TWO_PLACES = Decimal("0.01")
ZERO_RATE_EPSILON = Decimal("1e-12")


def round2(value: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    return Decimal(value).quantize(TWO_PLACES, ROUND_HALF_UP)


def to_amount(value) -> Decimal:
    """Non-negative Decimal amount; missing, non-numeric or non-finite values count as 0."""
    if value is None:
        return Decimal("0")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")
    if not amount.is_finite():
        return Decimal("0")
    return max(Decimal("0"), amount)


def calc_payment(principal: Decimal, monthly_rate: Decimal, num_months: int) -> Decimal:
    """Calculate the fixed monthly payment that retires principal in num_months.

    Args:
        principal: Amount to amortize
        monthly_rate: Periodic rate (e.g. 0.005 for 6% annual)
        num_months: Number of payments
    """
    if num_months <= 0:
        return Decimal("0")
    principal = Decimal(principal)
    r = Decimal(monthly_rate)
    # Checked before the power term: (1 + r) ** -n is unstable as r -> 0
    if abs(r) < ZERO_RATE_EPSILON:
        return round2(principal / num_months)

    # M = P * r / (1 - (1+r)^-n)
    return round2(principal * r / (1 - (1 + r) ** -num_months))
