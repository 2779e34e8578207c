"""CSV rendering of schedule rows. Column set and order are fixed."""

import csv
import io
from decimal import Decimal
from typing import Iterable

from src.models.results import Row

HEADER = [
    "Month",
    "Date",
    "Scheduled Payment",
    "Interest",
    "Principal",
    "Extra",
    "Total Paid",
    "Ending Balance",
    "Recast?",
    "New Payment",
]


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


def row_values(r: Row) -> list[str]:
    return [
        str(r.idx),
        r.payment_date,
        _money(r.scheduled_payment),
        _money(r.interest),
        _money(r.scheduled_principal),
        _money(r.extra_principal),
        _money(r.actual_payment),
        _money(r.loan_balance),
        "YES" if r.recast else "",
        _money(r.new_payment) if r.new_payment else "",
    ]


def schedule_csv(rows: Iterable[Row]) -> str:
    """Render rows as CSV text: header line first, no trailing newline."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(HEADER)
    for r in rows:
        writer.writerow(row_values(r))
    return buf.getvalue().rstrip("\n")
