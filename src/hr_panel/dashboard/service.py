from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from ..access import policy
from ..ai.client import GeminiClient
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import fmt_hhmm, now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, SEARCH_RESULT_LIMIT, WEEKLY_ATTENDANCE_DAYS
from ..core.enums import AttendanceStatus
from ..leads.repository import LeadRepository
from ..leave.service import LeaveService
from ..payroll.service import PayrollService
from ..users.model import User
from ..users.repository import UserRepository
from .navigation import nav_items_for

logger = logging.getLogger(__name__)

NO_INSIGHT_DATA = "Not enough data generated for AI insights."

_PRESENT_LIKE = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.HALF_DAY})


class DashboardService:
    """Landing page figures, the sidebar and the header search box."""

    def __init__(
        self,
        *,
        users: UserRepository,
        attendance: AttendanceRepository,
        leads: LeadRepository,
        leave_service: LeaveService,
        payroll_service: PayrollService,
        ai: GeminiClient,
    ):
        self._users = users
        self._attendance = attendance
        self._leads = leads
        self._leave = leave_service
        self._payroll = payroll_service
        self._ai = ai

    def overview(self, *, actor: User, today: Optional[date] = None, with_insight: bool = True) -> dict:
        today = today or now_local().date()
        if policy.is_management(actor.role):
            return self._management_overview(today, with_insight=with_insight)
        return self._personal_overview(actor, today)

    def _management_overview(self, today: date, *, with_insight: bool) -> dict:
        total_payroll = self._payroll.total_net()
        present_today = sum(1 for r in self._attendance.list_for_date(today) if r.status == AttendanceStatus.PRESENT)

        data = {
            "view": "management",
            "total_employees": len(self._users.list_all()),
            "total_payroll": round(total_payroll, 2),
            "present_today": present_today,
            "pending_leaves": self._leave.count_pending(),
            "weekly_attendance": self.weekly_attendance(today),
            "payroll_by_department": [
                {"name": dept, "value": round(value, 2)} for dept, value in self._payroll.by_department().items()
            ],
            "insight": NO_INSIGHT_DATA,
        }

        if with_insight and (present_today > 0 or total_payroll > 0):
            attendance_summary = (
                f"Avg attendance calculated from {len(self._attendance.list_all())} records. "
                f"{present_today} present today."
            )
            payroll_summary = f"Total monthly payroll ₹{total_payroll:g}."
            data["insight"] = self._ai.get_dashboard_insights(attendance_summary, payroll_summary)
        return data

    def _personal_overview(self, actor: User, today: date) -> dict:
        record = self._attendance.get_for_user_and_date(actor.user_id, today)
        recent = self._attendance.get_recent_for_user(actor.user_id, DEFAULT_HISTORY_LIMIT)
        return {
            "view": "personal",
            "today_status": record.status.value if record else AttendanceStatus.ABSENT.value,
            "pending_leaves": self._leave.count_pending(user_id=actor.user_id),
            "recent_attendance": [
                {
                    "date": r.work_date.strftime("%Y-%m-%d"),
                    "check_in": fmt_hhmm(r.check_in),
                    "check_out": fmt_hhmm(r.check_out),
                    "status": r.status.value,
                }
                for r in recent
            ],
        }

    def weekly_attendance(self, today: date) -> list[dict]:
        """Present vs. absent for the last few calendar days, oldest first."""
        headcount = len(self._users.list_all())
        out = []
        for offset in range(WEEKLY_ATTENDANCE_DAYS - 1, -1, -1):
            day = today - timedelta(days=offset)
            present = sum(1 for r in self._attendance.list_for_date(day) if r.status in _PRESENT_LIKE)
            out.append(
                {
                    "name": day.strftime("%a"),
                    "date": day.strftime("%Y-%m-%d"),
                    "present": present,
                    "absent": max(0, headcount - present),
                }
            )
        return out

    def navigation(self, *, actor: User) -> list[dict]:
        return [{"id": item.item_id, "label": item.label} for item in nav_items_for(actor.role)]

    def search(self, *, actor: User, query: str) -> list[dict]:
        query = (query or "").strip().lower()
        if not query:
            return []

        results = [
            {"type": "Page", "id": item.item_id, "title": item.label, "sub": "Navigation"}
            for item in nav_items_for(actor.role)
            if query in item.label.lower()
        ]
        results += [
            {"type": "User", "id": u.user_id, "title": u.name, "sub": u.role.value}
            for u in self._users.list_all()
            if query in u.name.lower() or query in u.email.lower()
        ]
        results += [
            {"type": "Lead", "id": lead.lead_id, "title": lead.name, "sub": lead.status.value}
            for lead in self._leads.list_all()
            if query in lead.name.lower() or query in lead.email.lower()
        ]
        return results[:SEARCH_RESULT_LIMIT]
