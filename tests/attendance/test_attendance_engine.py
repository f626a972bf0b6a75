from datetime import date, time

import pytest

from hr_panel.attendance import engine
from hr_panel.attendance.model import AttendanceRecord
from hr_panel.attendance.strategies.work_hours_strategy import WorkHoursStrategy
from hr_panel.core.enums import ActivityType, AttendanceStatus
from hr_panel.core.exceptions import ValidationError

DAY = date(2025, 1, 15)


def _start(at: time) -> AttendanceRecord:
    return engine.start_day(record_id="a1", user_id="u6", work_date=DAY, now=at)


def test_start_day_opens_one_work_segment():
    record = _start(time(9, 0))

    assert record.check_in == time(9, 0)
    assert record.check_out is None
    assert len(record.segments) == 1
    assert record.segments[0].activity == ActivityType.WORK
    assert record.segments[0].is_open
    assert engine.current_state(record) == "Work"


def test_lunch_day_is_half_day():
    record = _start(time(9, 0))
    record = engine.change_activity(record, ActivityType.LUNCH_BREAK, time(12, 0))
    record = engine.change_activity(record, ActivityType.WORK, time(13, 0))
    record = engine.finish_day(record, time(18, 30), WorkHoursStrategy())

    stats = engine.compute_stats(record, open_until=record.check_out)
    assert stats.work_hours == pytest.approx(8.5)
    assert stats.break_hours == pytest.approx(1.0)
    assert record.status == AttendanceStatus.HALF_DAY
    assert record.check_out == time(18, 30)


def test_long_day_is_present_with_overtime():
    record = engine.finish_day(_start(time(9, 0)), time(18, 10), WorkHoursStrategy())

    stats = engine.compute_stats(record, open_until=None)
    assert stats.work_hours == pytest.approx(9.1667, abs=1e-3)
    assert record.status == AttendanceStatus.PRESENT
    assert stats.overtime_hours == pytest.approx(0.1667, abs=1e-3)
    assert stats.as_dict()["overtime_hours"] == 0.17


def test_short_day_is_absent():
    record = engine.finish_day(_start(time(9, 0)), time(13, 30), WorkHoursStrategy())

    assert engine.compute_stats(record, open_until=None).work_hours == pytest.approx(4.5)
    assert record.status == AttendanceStatus.ABSENT


def test_at_most_one_open_segment_and_close_uses_call_time():
    record = _start(time(9, 0))
    transitions = [
        (ActivityType.BIO_BREAK, time(10, 5)),
        (ActivityType.WORK, time(10, 15)),
        (ActivityType.MEETING, time(11, 0)),
        (ActivityType.LUNCH_BREAK, time(12, 30)),
        (ActivityType.WORK, time(13, 10)),
    ]
    for activity, at in transitions:
        previous_open = record.open_segment
        record = engine.change_activity(record, activity, at)

        assert sum(1 for s in record.segments if s.is_open) == 1
        closed = record.segments[-2]
        assert closed.start == previous_open.start
        assert closed.end == at
        assert record.segments[-1] == record.open_segment
        assert record.open_segment.start == at

    record = engine.finish_day(record, time(18, 0), WorkHoursStrategy())
    assert all(not s.is_open for s in record.segments)
    assert engine.current_state(record) == "Completed"


def test_meeting_counts_as_break_time():
    record = _start(time(9, 0))
    record = engine.change_activity(record, ActivityType.MEETING, time(10, 0))
    record = engine.change_activity(record, ActivityType.WORK, time(11, 0))

    stats = engine.compute_stats(record, open_until=time(12, 0))
    assert stats.work_minutes == 120
    assert stats.break_minutes == 60
    assert stats.total_login_hours == pytest.approx(3.0)


def test_missing_segments_are_backfilled_with_work():
    record = AttendanceRecord(
        record_id="a1",
        user_id="u6",
        work_date=DAY,
        check_in=time(9, 0),
        check_out=None,
        status=AttendanceStatus.PRESENT,
    )
    updated = engine.change_activity(record, ActivityType.LUNCH_BREAK, time(11, 0))

    assert [(s.activity, s.start, s.end) for s in updated.segments] == [
        (ActivityType.WORK, time(9, 0), time(11, 0)),
        (ActivityType.LUNCH_BREAK, time(11, 0), None),
    ]


def test_transitions_after_punch_out_are_rejected():
    record = engine.finish_day(_start(time(9, 0)), time(18, 0), WorkHoursStrategy())

    with pytest.raises(ValidationError):
        engine.change_activity(record, ActivityType.WORK, time(18, 30))
    with pytest.raises(ValidationError):
        engine.finish_day(record, time(19, 0), WorkHoursStrategy())


def test_open_segment_counts_only_with_open_until():
    record = _start(time(9, 0))

    assert engine.compute_stats(record, open_until=None).work_minutes == 0
    assert engine.compute_stats(record, open_until=time(9, 45)).work_minutes == 45


def test_current_state_without_record():
    assert engine.current_state(None) is None
    assert engine.compute_stats(None, open_until=time(12, 0)).work_minutes == 0
