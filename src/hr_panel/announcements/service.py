from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..access import policy
from ..ai.client import GeminiClient
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import AnnouncementTone, Priority
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from .model import Announcement
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository, ai: GeminiClient):
        self._announcements = announcements
        self._ai = ai

    def list_all(self) -> list[Announcement]:
        return list(self._announcements.list_all())

    def post(
        self,
        *,
        actor: User,
        title: str,
        content: str,
        priority: Priority = Priority.NORMAL,
        today: Optional[date] = None,
    ) -> Announcement:
        if not policy.can_post_announcements(actor.role):
            raise AuthorizationError("Only management can post announcements")

        try:
            priority = Priority(priority)
        except (TypeError, ValueError):
            raise ValidationError("Unknown priority")

        announcement = Announcement(
            announcement_id=self._announcements.next_id(),
            title=require_non_empty(title, "Title"),
            content=require_non_empty(content, "Content"),
            date=today or now_local().date(),
            # Posts are signed with the poster's role, not their name.
            author=actor.role.value,
            priority=priority,
        )
        self._announcements.add(announcement)
        logger.info("announcement %s posted by %s", announcement.announcement_id, actor.user_id)
        return announcement

    def delete(self, *, actor: User, announcement_id: str) -> None:
        if not policy.can_post_announcements(actor.role):
            raise AuthorizationError("Only management can delete announcements")
        if not self._announcements.delete(announcement_id):
            raise ValidationError("Announcement not found")

    def generate_draft(self, *, actor: User, topic: str, tone: AnnouncementTone) -> str:
        """Ask the AI collaborator for a draft body; the result is not posted."""
        if not policy.can_post_announcements(actor.role):
            raise AuthorizationError("Only management can post announcements")
        topic = require_non_empty(topic, "Topic")
        try:
            tone = AnnouncementTone(tone)
        except (TypeError, ValueError):
            raise ValidationError("Unknown tone")
        return self._ai.generate_announcement(topic, tone)
