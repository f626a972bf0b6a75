from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..access import policy
from ..common.datetime_utils import now_local
from ..core.enums import LeadStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from . import importer
from .distribution import round_robin
from .model import Lead, LeadInput
from .repository import LeadRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistributionResult:
    leads: list[Lead]
    assignee_count: int

    @property
    def message(self) -> str:
        return f"Successfully distributed {len(self.leads)} leads among {self.assignee_count} executives."


class LeadService:
    def __init__(self, leads: LeadRepository, users: UserRepository):
        self._leads = leads
        self._users = users

    def distribute(self, *, actor: User, rows: Sequence[LeadInput], today: Optional[date] = None) -> DistributionResult:
        """Round-robin over every lowest-rank user, restarting at the first one each batch."""
        if not policy.can_distribute_leads(actor.role):
            raise AuthorizationError("Access denied")

        assignees = self._users.list_by_role(policy.LEAD_ASSIGNEE_ROLE)
        if not assignees:
            raise ValidationError("No executives found to distribute leads to.")

        rows = [r for r in rows if r.name and r.name.strip()]
        if not rows:
            raise ValidationError("No valid leads found in the input.")

        created_at = today or now_local().date()
        leads = [
            Lead(
                lead_id=self._leads.next_id(),
                name=row.name.strip(),
                email=row.email or "",
                phone=row.phone or "",
                status=LeadStatus.NEW,
                assigned_to=assignee.user_id,
                created_at=created_at,
            )
            for row, assignee in round_robin(rows, assignees)
        ]
        self._leads.add_many(leads)
        logger.info("user %s distributed %d leads among %d users", actor.user_id, len(leads), len(assignees))
        return DistributionResult(leads=leads, assignee_count=len(assignees))

    def distribute_text(self, *, actor: User, text: str, today: Optional[date] = None) -> DistributionResult:
        if not (text or "").strip():
            raise ValidationError("Please enter lead data.")
        return self.distribute(actor=actor, rows=importer.parse_text(text), today=today)

    def distribute_file(
        self,
        *,
        actor: User,
        file_name: str,
        content: bytes,
        today: Optional[date] = None,
    ) -> DistributionResult:
        if not content:
            raise ValidationError("Please select a file first.")
        if not policy.can_distribute_leads(actor.role):
            raise AuthorizationError("Access denied")
        return self.distribute(actor=actor, rows=importer.parse_spreadsheet(file_name, content), today=today)

    def list_visible(self, *, actor: User) -> list[Lead]:
        leads = self._leads.list_all()
        if policy.can_view_all_leads(actor.role):
            return list(leads)
        return [lead for lead in leads if lead.assigned_to == actor.user_id]

    def summary(self, *, actor: User) -> dict:
        leads = self.list_visible(actor=actor)
        return {
            "total": len(leads),
            "new": sum(1 for lead in leads if lead.status == LeadStatus.NEW),
            "converted": sum(1 for lead in leads if lead.status == LeadStatus.CONVERTED),
            "in_progress": sum(1 for lead in leads if lead.status in {LeadStatus.CONTACTED, LeadStatus.IN_PROGRESS}),
        }

    def change_status(self, *, actor: User, lead_id: str, status: LeadStatus) -> Lead:
        lead = self._leads.get(lead_id)
        if not lead or lead not in self.list_visible(actor=actor):
            raise ValidationError("Lead not found")
        self._leads.set_status(lead_id, status)
        return self._leads.get(lead_id)
