from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_COMPANY_NAME, DEFAULT_THEME


@dataclass(frozen=True)
class CompanyProfile:
    name: str = DEFAULT_COMPANY_NAME
    theme: str = DEFAULT_THEME
