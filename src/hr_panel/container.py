from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from .ai.client import GeminiClient
from .announcements.repository import InMemoryAnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.service import AttendanceService
from .calendar.repository import InMemoryEventRepository
from .calendar.service import CalendarService
from .chat.repository import InMemoryChatRepository
from .chat.service import ChatService
from .company.model import CompanyProfile
from .company.repository import InMemoryCompanyRepository
from .company.service import CompanyService
from .core.constants import DEFAULT_COMPANY_NAME
from .dashboard.service import DashboardService
from .leads.repository import InMemoryLeadRepository
from .leads.service import LeadService
from .leave.memory_leave_repository import InMemoryLeaveRepository
from .leave.service import LeaveService
from .payroll.repository import InMemoryPayrollRepository
from .payroll.service import PayrollService
from .seed import ensure_admin_account, ensure_demo_users
from .users.memory_user_repository import InMemoryUserRepository
from .users.security import PasswordHasher
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    """Application state: every repository and the services built on top of them."""

    users_repo: InMemoryUserRepository
    attendance_repo: InMemoryAttendanceRepository
    leave_repo: InMemoryLeaveRepository
    events_repo: InMemoryEventRepository
    payroll_repo: InMemoryPayrollRepository
    leads_repo: InMemoryLeadRepository
    chat_repo: InMemoryChatRepository
    announcements_repo: InMemoryAnnouncementRepository
    company_repo: InMemoryCompanyRepository

    ai_client: GeminiClient

    auth_service: AuthService
    user_service: UserService
    company_service: CompanyService
    attendance_service: AttendanceService
    calendar_service: CalendarService
    leave_service: LeaveService
    payroll_service: PayrollService
    lead_service: LeadService
    chat_service: ChatService
    announcement_service: AnnouncementService
    dashboard_service: DashboardService


def build_container(
    *,
    gemini_api_key: str = "",
    gemini_model: str = "gemini-2.5-flash",
    ai_timeout: float = 30.0,
    company_name: str = DEFAULT_COMPANY_NAME,
    seed_demo_data: bool = False,
    http_client: Optional[httpx.Client] = None,
) -> Container:
    hasher = PasswordHasher()

    users_repo = InMemoryUserRepository()
    attendance_repo = InMemoryAttendanceRepository()
    leave_repo = InMemoryLeaveRepository()
    events_repo = InMemoryEventRepository()
    payroll_repo = InMemoryPayrollRepository()
    leads_repo = InMemoryLeadRepository()
    chat_repo = InMemoryChatRepository()
    announcements_repo = InMemoryAnnouncementRepository()
    company_repo = InMemoryCompanyRepository(CompanyProfile(name=company_name or DEFAULT_COMPANY_NAME))

    ensure_admin_account(users_repo, hasher)
    if seed_demo_data:
        ensure_demo_users(users_repo, hasher)

    ai_client = GeminiClient(gemini_api_key, model=gemini_model, timeout=ai_timeout, http_client=http_client)

    auth_service = AuthService(users_repo, hasher)
    user_service = UserService(users_repo, hasher)
    company_service = CompanyService(company_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        strategy_factory=AttendanceStrategyFactory(),
    )
    leave_service = LeaveService(leave_repo, events_repo)
    calendar_service = CalendarService(attendance_repo, leave_repo, events_repo, users_repo)
    payroll_service = PayrollService(payroll_repo, users_repo, company_repo)
    lead_service = LeadService(leads_repo, users_repo)
    chat_service = ChatService(chat_repo, users_repo)
    announcement_service = AnnouncementService(announcements_repo, ai_client)
    dashboard_service = DashboardService(
        users=users_repo,
        attendance=attendance_repo,
        leads=leads_repo,
        leave_service=leave_service,
        payroll_service=payroll_service,
        ai=ai_client,
    )

    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        events_repo=events_repo,
        payroll_repo=payroll_repo,
        leads_repo=leads_repo,
        chat_repo=chat_repo,
        announcements_repo=announcements_repo,
        company_repo=company_repo,
        ai_client=ai_client,
        auth_service=auth_service,
        user_service=user_service,
        company_service=company_service,
        attendance_service=attendance_service,
        calendar_service=calendar_service,
        leave_service=leave_service,
        payroll_service=payroll_service,
        lead_service=lead_service,
        chat_service=chat_service,
        announcement_service=announcement_service,
        dashboard_service=dashboard_service,
    )
