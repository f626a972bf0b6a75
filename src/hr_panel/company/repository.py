from __future__ import annotations

from typing import Protocol

from .model import CompanyProfile


class CompanyRepository(Protocol):
    def get(self) -> CompanyProfile:
        raise NotImplementedError

    def save(self, profile: CompanyProfile) -> None:
        raise NotImplementedError


class InMemoryCompanyRepository(CompanyRepository):
    def __init__(self, profile: CompanyProfile | None = None):
        self._profile = profile or CompanyProfile()

    def get(self) -> CompanyProfile:
        return self._profile

    def save(self, profile: CompanyProfile) -> None:
        self._profile = profile
