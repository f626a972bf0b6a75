from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..access import policy
from ..common.validators import require_non_empty
from ..core.constants import THEMES
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from .model import CompanyProfile
from .repository import CompanyRepository


class CompanyService:
    """Company branding shown across the panel (name and colour theme)."""

    def __init__(self, company: CompanyRepository):
        self._company = company

    def get(self) -> CompanyProfile:
        return self._company.get()

    def update_branding(self, *, actor: User, name: Optional[str] = None, theme: Optional[str] = None) -> CompanyProfile:
        if not policy.can_edit_company_branding(actor.role):
            raise AuthorizationError("Only the CEO can change company branding")

        profile = self._company.get()
        if name is not None:
            profile = replace(profile, name=require_non_empty(name, "Company name"))
        if theme is not None:
            if theme not in THEMES:
                raise ValidationError("Unknown theme")
            profile = replace(profile, theme=theme)
        self._company.save(profile)
        return profile
