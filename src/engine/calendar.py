"""Year-month arithmetic on "YYYY-MM" strings. No time zones, no locale."""


def parse_year_month(year_month: str) -> tuple[int, int]:
    """Split "YYYY-MM" into (year, month). Raises ValueError if malformed."""
    parts = str(year_month).strip().split("-")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Expected YYYY-MM, got {year_month!r}")
    year, month = int(parts[0]), int(parts[1])
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range in {year_month!r}")
    return year, month


def format_year_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def add_months(year_month: str, delta: int) -> str:
    """Shift a year-month by whole months; negative delta steps backwards."""
    year, month = parse_year_month(year_month)
    new_year, new_month_index = divmod(year * 12 + (month - 1) + delta, 12)
    return format_year_month(new_year, new_month_index + 1)


def month_number_to_year_month(month_number: int, start_ym: str) -> str:
    """Calendar month of 1-based loan month `month_number`."""
    return add_months(start_ym, month_number - 1)


def year_month_to_month_number(year_month: str, start_ym: str) -> int:
    """1-based loan month index of a calendar month."""
    year, month = parse_year_month(year_month)
    start_year, start_month = parse_year_month(start_ym)
    return (year - start_year) * 12 + (month - start_month) + 1
