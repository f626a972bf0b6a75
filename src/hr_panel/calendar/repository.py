from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import EventType
from .model import CalendarEvent


class EventRepository(Protocol):
    def list_all(self) -> Sequence[CalendarEvent]:
        raise NotImplementedError

    def list_by_type(self, event_type: EventType) -> Sequence[CalendarEvent]:
        raise NotImplementedError

    def find(self, *, event_date: date, event_type: EventType) -> Optional[CalendarEvent]:
        raise NotImplementedError

    def add(self, event: CalendarEvent) -> CalendarEvent:
        raise NotImplementedError


class InMemoryEventRepository(EventRepository):
    def __init__(self, events: Sequence[CalendarEvent] = ()):
        self._events: list[CalendarEvent] = list(events)

    def list_all(self) -> Sequence[CalendarEvent]:
        return sorted(self._events, key=lambda e: e.event_date)

    def list_by_type(self, event_type: EventType) -> Sequence[CalendarEvent]:
        return [e for e in self.list_all() if e.event_type == event_type]

    def find(self, *, event_date: date, event_type: EventType) -> Optional[CalendarEvent]:
        for e in self._events:
            if e.event_date == event_date and e.event_type == event_type:
                return e
        return None

    def add(self, event: CalendarEvent) -> CalendarEvent:
        self._events.append(event)
        return event
