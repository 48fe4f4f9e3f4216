from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse the ``?date=YYYY-MM-DD`` filter of the attendance log."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Wall-clock time of the scanning station.

    Attendance rows take their ``date`` from this local timestamp, not from
    UTC, so a late-evening scan lands on the day the student actually came.
    """
    return datetime.now()
