from __future__ import annotations

from datetime import date

import httpx
import pytest

from hr_panel.ai.client import GeminiClient
from hr_panel.announcements.repository import InMemoryAnnouncementRepository
from hr_panel.announcements.service import AnnouncementService
from hr_panel.core.enums import AnnouncementTone, Priority
from hr_panel.core.exceptions import AuthorizationError, ValidationError


@pytest.fixture
def repo() -> InMemoryAnnouncementRepository:
    return InMemoryAnnouncementRepository()


@pytest.fixture
def service(repo) -> AnnouncementService:
    return AnnouncementService(repo, GeminiClient(""))


def test_post_signs_with_role_and_defaults_to_normal(service, people):
    posted = service.post(actor=people["hr"], title="Holiday", content="Office closed Friday", today=date(2025, 1, 15))

    assert posted.author == "HR"
    assert posted.priority == Priority.NORMAL
    assert posted.as_dict()["date"] == "2025-01-15"


def test_newest_first(service, people):
    service.post(actor=people["hr"], title="First", content="a")
    service.post(actor=people["manager"], title="Second", content="b")

    assert [a.title for a in service.list_all()] == ["Second", "First"]


def test_title_and_content_required(service, people):
    with pytest.raises(ValidationError):
        service.post(actor=people["hr"], title="", content="body")
    with pytest.raises(ValidationError):
        service.post(actor=people["hr"], title="Title", content="  ")


def test_employees_cannot_post_or_delete(service, people):
    posted = service.post(actor=people["ceo"], title="T", content="C")

    with pytest.raises(AuthorizationError):
        service.post(actor=people["tl"], title="T", content="C")
    with pytest.raises(AuthorizationError):
        service.delete(actor=people["exec_a"], announcement_id=posted.announcement_id)

    service.delete(actor=people["admin"], announcement_id=posted.announcement_id)
    assert service.list_all() == []


def test_draft_without_key_returns_fallback(service, people):
    assert service.generate_draft(actor=people["hr"], topic="Picnic", tone=AnnouncementTone.CASUAL) == "Error: API Key missing."


def test_draft_uses_ai_text(repo, people):
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "Draft body"}]}}]})
    )
    service = AnnouncementService(repo, GeminiClient("k", http_client=httpx.Client(transport=transport)))

    assert service.generate_draft(actor=people["manager"], topic="Picnic", tone="Formal") == "Draft body"
    with pytest.raises(ValidationError):
        service.generate_draft(actor=people["manager"], topic="Picnic", tone="Sarcastic")
