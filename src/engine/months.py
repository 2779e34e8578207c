"""Free-form month list parsing, e.g. "1, 3-5, 8" for recast months."""

import re

_SEPARATORS = re.compile(r"[,\s]+")
_SINGLE = re.compile(r"^\d+$")
_RANGE = re.compile(r"^(\d+)-(\d+)$")


def parse_months(text: str | None) -> list[int]:
    """Parse comma/whitespace separated months and inclusive ranges.

    Invalid tokens (non-numeric, zero, descending ranges) are dropped.
    Returns a sorted list without duplicates.
    """
    if not text or not text.strip():
        return []

    months: set[int] = set()
    for token in filter(None, _SEPARATORS.split(text.strip())):
        range_match = _RANGE.match(token)
        if range_match:
            start, end = int(range_match.group(1)), int(range_match.group(2))
            if start > 0 and end >= start:
                months.update(range(start, end + 1))
        elif _SINGLE.match(token):
            value = int(token)
            if value > 0:
                months.add(value)
    return sorted(months)
