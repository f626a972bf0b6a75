from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import DayType, EventType


@dataclass(frozen=True)
class CalendarEvent:
    event_id: str
    title: str
    event_date: date
    event_type: EventType


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the monthly attendance calendar."""

    day: date
    day_type: DayType
    status: str = ""
    hours: float = 0.0
    info: str = ""

    def as_dict(self) -> dict:
        return {
            "date": self.day.strftime("%Y-%m-%d"),
            "type": self.day_type.value,
            "status": self.status,
            "hours": round(self.hours, 1),
            "info": self.info,
        }
