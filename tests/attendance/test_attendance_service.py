from __future__ import annotations

import csv
import io
from datetime import date, datetime

import pytest

from hr_panel.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from hr_panel.attendance.service import AttendanceService
from hr_panel.core.enums import ActivityType, AttendanceStatus
from hr_panel.core.exceptions import AuthorizationError, ValidationError

DAY = date(2025, 1, 15)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, 15, hour, minute)


@pytest.fixture
def service(users_repo) -> AttendanceService:
    return AttendanceService(InMemoryAttendanceRepository(), users_repo)


def test_punch_in_creates_record_once(service, people):
    record = service.punch_in(people["exec_a"], now=at(9, 2))

    assert record.work_date == DAY
    assert record.check_in.strftime("%H:%M") == "09:02"

    with pytest.raises(ValidationError, match="already punched in"):
        service.punch_in(people["exec_a"], now=at(9, 30))


def test_ceo_has_no_punch_card(service, people):
    with pytest.raises(AuthorizationError):
        service.punch_in(people["ceo"], now=at(9))

    today = service.get_today(people["ceo"], now=at(9))
    assert today["has_punch_card"] is False
    assert today["state"] is None


def test_state_change_requires_punch_in(service, people):
    with pytest.raises(ValidationError, match="not punched in"):
        service.change_state(people["exec_a"], ActivityType.LUNCH_BREAK, now=at(12))
    with pytest.raises(ValidationError, match="not punched in"):
        service.punch_out(people["exec_a"], now=at(18))


def test_full_day_flow(service, people):
    actor = people["exec_a"]
    service.punch_in(actor, now=at(9))
    service.change_state(actor, ActivityType.LUNCH_BREAK, now=at(12))
    service.change_state(actor, ActivityType.WORK, now=at(13))
    record = service.punch_out(actor, now=at(18, 30))

    assert record.status == AttendanceStatus.HALF_DAY

    today = service.get_today(actor, now=at(19))
    assert today["state"] == "Completed"
    assert today["stats"]["work_hours"] == 8.5
    assert today["stats"]["break_hours"] == 1.0
    assert today["record"]["check_out"] == "18:30"


def test_live_stats_flag_long_breaks(service, people):
    actor = people["exec_a"]
    service.punch_in(actor, now=at(9))
    service.change_state(actor, ActivityType.LUNCH_BREAK, now=at(10))

    today = service.get_today(actor, now=at(12, 30))
    assert today["state"] == ActivityType.LUNCH_BREAK.value
    assert today["stats"]["work_hours"] == 1.0
    assert today["stats"]["break_hours"] == 2.5
    assert today["break_over_limit"] is True


def test_manual_override_sets_late(service, people):
    service.punch_in(people["exec_a"], now=at(10, 45))

    record = service.set_status(
        people["manager"],
        user_id="u6",
        work_date=DAY,
        status=AttendanceStatus.LATE,
        note="Arrived after standup",
    )
    assert record.status == AttendanceStatus.LATE
    assert record.note == "Arrived after standup"


def test_override_denied_for_non_management(service, people):
    service.punch_in(people["exec_a"], now=at(9))

    with pytest.raises(AuthorizationError):
        service.set_status(people["tl"], user_id="u6", work_date=DAY, status=AttendanceStatus.LATE)


def test_history_is_role_filtered(service, people):
    service.punch_in(people["exec_a"], now=at(9))
    service.punch_in(people["exec_b"], now=at(9, 5))

    assert {r.user_id for r in service.list_visible(people["hr"])} == {"u6", "u7"}
    assert {r.user_id for r in service.list_visible(people["exec_b"])} == {"u7"}


def test_csv_export(service, people):
    service.punch_in(people["exec_a"], now=at(9))
    service.change_state(people["exec_a"], ActivityType.LUNCH_BREAK, now=at(12))
    service.change_state(people["exec_a"], ActivityType.WORK, now=at(13))
    service.punch_out(people["exec_a"], now=at(18))
    service.punch_in(people["exec_b"], now=at(9, 30))

    rows = list(csv.reader(io.StringIO(service.export_csv(people["manager"]))))

    assert rows[0] == [
        "Employee Name",
        "Date",
        "Check In",
        "Check Out",
        "Status",
        "Work Duration (Hours)",
        "Break Duration (Hours)",
    ]
    by_name = {row[0]: row for row in rows[1:]}
    assert by_name["Eve Exec"] == ["Eve Exec", "2025-01-15", "09:00", "18:00", "Half-Day", "8.00", "1.00"]
    # Still working: the open segment is not reported.
    assert by_name["Eli Exec"] == ["Eli Exec", "2025-01-15", "09:30", "N/A", "Present", "0.00", "0.00"]


def test_csv_export_for_employee_has_only_own_rows(service, people):
    service.punch_in(people["exec_a"], now=at(9))
    service.punch_in(people["exec_b"], now=at(9))

    rows = list(csv.reader(io.StringIO(service.export_csv(people["exec_a"]))))
    assert [row[0] for row in rows[1:]] == ["Eve Exec"]
