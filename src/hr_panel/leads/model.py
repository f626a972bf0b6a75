from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import LeadStatus


@dataclass(frozen=True)
class LeadInput:
    """A parsed row before it is assigned to anybody."""

    name: str
    email: str = ""
    phone: str = ""


@dataclass(frozen=True)
class Lead:
    lead_id: str
    name: str
    email: str
    phone: str
    status: LeadStatus
    assigned_to: str
    created_at: date
    notes: str = ""

    def as_dict(self) -> dict:
        return {
            "lead_id": self.lead_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "status": self.status.value,
            "assigned_to": self.assigned_to,
            "created_at": self.created_at.strftime("%Y-%m-%d"),
            "notes": self.notes,
        }
