from __future__ import annotations

from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> str:
    """Validate a YYYY-MM month key and return it normalized."""
    return datetime.strptime(value.strip(), "%Y-%m").strftime("%Y-%m")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now()


def wall_clock(moment: datetime) -> time:
    """Truncate to the minute; the attendance log works on HH:MM."""
    return time(moment.hour, moment.minute)


def to_minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def fmt_hhmm(t: time | None, empty: str = "-") -> str:
    return t.strftime("%H:%M") if t else empty


def is_weekend(d: date) -> bool:
    return d.weekday() >= 5
