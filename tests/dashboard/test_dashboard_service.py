from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

import httpx
import pytest

from hr_panel.ai.client import GeminiClient
from hr_panel.attendance import engine
from hr_panel.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from hr_panel.attendance.strategies.work_hours_strategy import WorkHoursStrategy
from hr_panel.calendar.repository import InMemoryEventRepository
from hr_panel.company.repository import InMemoryCompanyRepository
from hr_panel.core.enums import LeaveType, Role
from hr_panel.dashboard.navigation import nav_items_for
from hr_panel.dashboard.service import NO_INSIGHT_DATA, DashboardService
from hr_panel.leads.repository import InMemoryLeadRepository
from hr_panel.leads.service import LeadService
from hr_panel.leave.memory_leave_repository import InMemoryLeaveRepository
from hr_panel.leave.service import LeaveService
from hr_panel.payroll.repository import InMemoryPayrollRepository
from hr_panel.payroll.service import PayrollService

TODAY = date(2025, 1, 15)


def _insight_client(calls: list) -> GeminiClient:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "Looks good."}]}}]})

    return GeminiClient("k", http_client=httpx.Client(transport=httpx.MockTransport(handler)))


@pytest.fixture
def parts(users_repo):
    attendance = InMemoryAttendanceRepository()
    leads = InMemoryLeadRepository()
    leave_service = LeaveService(InMemoryLeaveRepository(), InMemoryEventRepository())
    payroll_service = PayrollService(InMemoryPayrollRepository(), users_repo, InMemoryCompanyRepository())
    calls: list = []
    dashboard = DashboardService(
        users=users_repo,
        attendance=attendance,
        leads=leads,
        leave_service=leave_service,
        payroll_service=payroll_service,
        ai=_insight_client(calls),
    )
    return {
        "dashboard": dashboard,
        "attendance": attendance,
        "leads": LeadService(leads, users_repo),
        "leave": leave_service,
        "payroll": payroll_service,
        "calls": calls,
    }


def _work(attendance, user_id: str, day: date, start: time, end: Optional[time]):
    record = engine.start_day(record_id=attendance.next_id(), user_id=user_id, work_date=day, now=start)
    if end is not None:
        record = engine.finish_day(record, end, WorkHoursStrategy())
    attendance.add(record)
    return record


def test_no_data_means_no_ai_call(parts, people):
    data = parts["dashboard"].overview(actor=people["ceo"], today=TODAY)

    assert data["view"] == "management"
    assert data["total_employees"] == 7
    assert data["insight"] == NO_INSIGHT_DATA
    assert parts["calls"] == []


def test_management_overview(parts, people):
    _work(parts["attendance"], "u6", TODAY, time(9, 0), None)
    _work(parts["attendance"], "u7", TODAY - timedelta(days=1), time(9, 0), time(15, 0))
    parts["payroll"].submit(actor=people["hr"], user_id="u6", month="2025-01", base_salary=1000)
    parts["leave"].create_leave(
        actor=people["exec_a"],
        leave_type=LeaveType.SICK,
        start_date=TODAY,
        end_date=TODAY,
        reason="Fever",
        now=datetime(2025, 1, 15, 8, 0),
    )

    data = parts["dashboard"].overview(actor=people["manager"], today=TODAY)

    assert data["present_today"] == 1
    assert data["pending_leaves"] == 1
    assert data["total_payroll"] == 1000
    assert data["payroll_by_department"] == [{"name": "Sales", "value": 1000}]
    assert data["insight"] == "Looks good."
    assert len(parts["calls"]) == 1

    week = data["weekly_attendance"]
    assert [d["date"] for d in week] == ["2025-01-11", "2025-01-12", "2025-01-13", "2025-01-14", "2025-01-15"]
    # Half-Day counts as present.
    assert week[3]["present"] == 1
    assert week[3]["absent"] == 6
    assert week[4]["name"] == "Wed"


def test_personal_overview(parts, people):
    data = parts["dashboard"].overview(actor=people["exec_a"], today=TODAY)
    assert data == {"view": "personal", "today_status": "Absent", "pending_leaves": 0, "recent_attendance": []}

    for offset in range(7):
        _work(parts["attendance"], "u6", date(2025, 1, 1 + offset), time(9, 0), time(18, 0))
    data = parts["dashboard"].overview(actor=people["exec_a"], today=date(2025, 1, 7))

    assert data["today_status"] == "Present"
    assert len(data["recent_attendance"]) == 5
    assert data["recent_attendance"][0]["date"] == "2025-01-07"


def test_navigation_by_role(parts, people):
    ceo_ids = [item["id"] for item in parts["dashboard"].navigation(actor=people["ceo"])]
    exec_ids = [item.item_id for item in nav_items_for(Role.EXECUTIVE)]

    assert "roles" in ceo_ids
    assert "roles" not in exec_ids
    assert len(ceo_ids) == 10


def test_search_covers_pages_users_and_leads(parts, people):
    parts["leads"].distribute_text(actor=people["ceo"], text="Evergreen Corp, info@evergreen.test", today=TODAY)

    results = parts["dashboard"].search(actor=people["exec_a"], query="eve")
    kinds = [(r["type"], r["title"]) for r in results]

    assert ("User", "Eve Exec") in kinds
    assert ("Lead", "Evergreen Corp") in kinds
    assert parts["dashboard"].search(actor=people["exec_a"], query="  ") == []


def test_search_caps_results(parts, people):
    text = "\n".join(f"Example Lead {i}" for i in range(20))
    parts["leads"].distribute_text(actor=people["ceo"], text=text, today=TODAY)

    assert len(parts["dashboard"].search(actor=people["ceo"], query="example")) == 8


def test_search_pages_respect_role(parts, people):
    assert parts["dashboard"].search(actor=people["exec_a"], query="user roles") == []
    assert parts["dashboard"].search(actor=people["hr"], query="user roles")[0]["id"] == "roles"
