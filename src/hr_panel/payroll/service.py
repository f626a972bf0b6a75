from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..access import policy
from ..company.repository import CompanyRepository
from ..common.datetime_utils import now_local, parse_month
from ..common.validators import require_non_negative
from ..core.enums import PayrollStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .model import PayrollEntry, PayslipDocument
from .payslip import render_payslip
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayslipDownload:
    file_name: str
    content: bytes
    content_type: str


class PayrollService:
    def __init__(self, payroll: PayrollRepository, users: UserRepository, company: CompanyRepository):
        self._payroll = payroll
        self._users = users
        self._company = company

    def submit(
        self,
        *,
        actor: User,
        user_id: str,
        month: str,
        base_salary,
        bonus=0,
        deductions=0,
        document: Optional[PayslipDocument] = None,
        remove_document: bool = False,
    ) -> PayrollEntry:
        """Create or overwrite the payroll entry for (user, month).

        An edit without a new file keeps the payslip uploaded earlier;
        pass ``remove_document`` to drop it.
        """
        if not policy.can_manage_payroll(actor.role):
            raise AuthorizationError("Access denied")

        employee = self._users.get_by_id(user_id)
        if not employee:
            raise ValidationError("Employee not found")
        if employee.role == Role.CEO:
            raise ValidationError("CEO payroll is not managed from this panel")

        try:
            month = parse_month(month)
        except ValueError:
            raise ValidationError("Month must be YYYY-MM")

        existing = self._payroll.get_for_user_and_month(user_id, month)
        if document is None and existing and not remove_document:
            document = existing.document

        entry = PayrollEntry(
            entry_id=existing.entry_id if existing else self._payroll.next_id(),
            user_id=user_id,
            month=month,
            base_salary=require_non_negative(base_salary, "Base salary"),
            bonus=require_non_negative(bonus, "Bonus"),
            deductions=require_non_negative(deductions, "Deductions"),
            status=PayrollStatus.PAID,
            document=document,
        )
        self._payroll.upsert(entry)
        logger.info("payroll %s %s for %s by %s", "updated" if existing else "created", month, user_id, actor.user_id)
        return entry

    def list_visible(self, *, actor: User, search: str = "") -> list[PayrollEntry]:
        entries = policy.visible_records(
            actor_id=actor.user_id,
            actor_role=actor.role,
            records=self._payroll.list_all(),
        )
        query = (search or "").strip().lower()
        if query and policy.can_manage_payroll(actor.role):
            entries = [e for e in entries if query in self._user_name(e.user_id).lower()]
        return entries

    def total_net(self) -> float:
        return sum(e.net_salary for e in self._payroll.list_all())

    def by_department(self) -> dict[str, float]:
        totals: dict[str, float] = {}
        for e in self._payroll.list_all():
            user = self._users.get_by_id(e.user_id)
            if user and user.department:
                totals[user.department] = totals.get(user.department, 0.0) + e.net_salary
        return totals

    def download_payslip(self, *, actor: User, entry_id: str, today: Optional[date] = None) -> PayslipDownload:
        entry = self._payroll.get(entry_id)
        if not entry or not policy.can_view_user_records(
            actor_id=actor.user_id, actor_role=actor.role, target_user_id=entry.user_id
        ):
            # Same answer for "missing" and "not yours".
            raise ValidationError("Payslip not found")

        if entry.document:
            return PayslipDownload(
                file_name=entry.document.file_name or f"Payslip_{entry.month}.pdf",
                content=entry.document.content,
                content_type=entry.document.content_type,
            )

        user = self._users.get_by_id(entry.user_id)
        if not user:
            raise ValidationError("Employee not found")
        html = render_payslip(
            entry=entry,
            user=user,
            company_name=self._company.get().name,
            pay_date=today or now_local().date(),
        )
        return PayslipDownload(
            file_name=f"Payslip_{user.name.replace(' ', '_')}_{entry.month}.html",
            content=html.encode("utf-8"),
            content_type="text/html",
        )

    def _user_name(self, user_id: str) -> str:
        user = self._users.get_by_id(user_id)
        return user.name if user else "Unknown"
