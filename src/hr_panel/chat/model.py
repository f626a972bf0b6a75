from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import MessageKind


@dataclass(frozen=True)
class Group:
    group_id: str
    name: str
    members: tuple[str, ...]
    created_by: str
    avatar: str = ""

    def as_dict(self) -> dict:
        return {
            "group_id": self.group_id,
            "name": self.name,
            "members": list(self.members),
            "created_by": self.created_by,
            "avatar": self.avatar,
        }


@dataclass(frozen=True)
class Message:
    """``receiver_id`` is a user id for direct messages or a group id."""

    message_id: str
    sender_id: str
    receiver_id: str
    content: str
    timestamp: datetime
    kind: MessageKind = MessageKind.TEXT
    file_name: Optional[str] = None
    read: bool = False

    def as_dict(self) -> dict:
        return {
            "message_id": self.message_id,
            "sender_id": self.sender_id,
            "receiver_id": self.receiver_id,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
            "kind": self.kind.value,
            "file_name": self.file_name,
            "read": self.read,
        }
