from __future__ import annotations

import csv
import io
from typing import Iterable, Sequence

ATTENDANCE_CSV_HEADER = (
    "Employee Name",
    "Date",
    "Check In",
    "Check Out",
    "Status",
    "Work Duration (Hours)",
    "Break Duration (Hours)",
)


def write_csv(header: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render rows as CSV text (one record per row, header first)."""

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow(row)
    return out.getvalue()
