"""Attendance state machine for one user's day.

States: NoRecord -> Working -> {OnBreak, InMeeting} -> Working -> Completed.

Every transition takes the record as it is and returns a new one; nothing
is mutated in place, so a rejected transition leaves the stored record
untouched. Times are wall-clock HH:MM and are compared as minutes since
midnight; a day's segments never cross midnight.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import to_minutes
from ..core.enums import ActivityType, AttendanceStatus
from ..core.exceptions import ValidationError
from .model import ActivitySegment, AttendanceRecord, DailyStats
from .strategies.base import AttendanceStrategy

STATE_COMPLETED = "Completed"
STATE_IDLE = "Idle"


def start_day(*, record_id: str, user_id: str, work_date: date, now: time) -> AttendanceRecord:
    """Punch-in: check-in at ``now`` with one open Work segment."""
    return AttendanceRecord(
        record_id=record_id,
        user_id=user_id,
        work_date=work_date,
        check_in=now,
        check_out=None,
        # placeholder until punch-out decides
        status=AttendanceStatus.PRESENT,
        segments=(ActivitySegment(ActivityType.WORK, now),),
    )


def _close_open(segments: tuple[ActivitySegment, ...], now: time) -> tuple[ActivitySegment, ...]:
    if segments and segments[-1].is_open:
        return segments[:-1] + (replace(segments[-1], end=now),)
    return segments


def _backfill(record: AttendanceRecord, now: time) -> tuple[ActivitySegment, ...]:
    """Records checked in without any segment get a closed Work span [check_in, now)."""
    if not record.segments and record.check_in is not None:
        return (ActivitySegment(ActivityType.WORK, record.check_in, now),)
    return record.segments


def change_activity(record: AttendanceRecord, activity: ActivityType, now: time) -> AttendanceRecord:
    """Switch to Bio Break / Lunch Break / Meeting, or resume Work.

    Closes the open segment at ``now`` and opens ``activity`` at ``now``.
    """
    if record.is_completed:
        raise ValidationError("You have already punched out today")

    segments = _close_open(_backfill(record, now), now)
    return replace(record, segments=segments + (ActivitySegment(activity, now),))


def finish_day(record: AttendanceRecord, now: time, strategy: AttendanceStrategy) -> AttendanceRecord:
    """Punch-out: close the open segment, stamp check-out and derive the final status."""
    if record.is_completed:
        raise ValidationError("You have already punched out today")

    closed = replace(record, segments=_close_open(record.segments, now), check_out=now)
    decision = strategy.decide_checkout(record=closed, stats=compute_stats(closed, open_until=now))
    return replace(closed, status=decision.status, note=decision.note or record.note)


def segment_minutes(segment: ActivitySegment, open_until: Optional[time]) -> int:
    end = segment.end if segment.end is not None else open_until
    if end is None:
        return 0
    return max(0, to_minutes(end) - to_minutes(segment.start))


def compute_stats(record: Optional[AttendanceRecord], *, open_until: Optional[time]) -> DailyStats:
    """Sum Work minutes and break minutes (every other activity type).

    ``open_until`` is the implicit end of a still-open segment: the current
    time for live figures, the check-out for history, or None to count
    closed segments only.
    """
    if record is None:
        return DailyStats(work_minutes=0, break_minutes=0)

    work = 0
    breaks = 0
    for segment in record.segments:
        minutes = segment_minutes(segment, open_until)
        if segment.activity == ActivityType.WORK:
            work += minutes
        else:
            breaks += minutes
    return DailyStats(work_minutes=work, break_minutes=breaks)


def current_state(record: Optional[AttendanceRecord]) -> Optional[str]:
    """None before punch-in; ``Completed`` after punch-out; otherwise the open activity."""
    if record is None:
        return None
    if record.is_completed:
        return STATE_COMPLETED
    if not record.segments:
        return ActivityType.WORK.value
    last = record.segments[-1]
    return last.activity.value if last.is_open else STATE_IDLE
