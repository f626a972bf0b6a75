from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import Priority


@dataclass(frozen=True)
class Announcement:
    announcement_id: str
    title: str
    content: str
    date: date
    author: str
    priority: Priority = Priority.NORMAL

    def as_dict(self) -> dict:
        return {
            "announcement_id": self.announcement_id,
            "title": self.title,
            "content": self.content,
            "date": self.date.strftime("%Y-%m-%d"),
            "author": self.author,
            "priority": self.priority.value,
        }
