from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence
from urllib.parse import quote

from ..access import policy
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import MessageKind
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .model import Group, Message
from .repository import ChatRepository

logger = logging.getLogger(__name__)


class ChatService:
    """Direct messages, group chats and the group permission rules."""

    def __init__(self, chat: ChatRepository, users: UserRepository):
        self._chat = chat
        self._users = users

    # --- Groups ---

    def _group(self, group_id: str) -> Group:
        group = self._chat.get_group(group_id)
        if not group:
            raise ValidationError("Group not found")
        return group

    def _role_of(self, user_id: str):
        user = self._users.get_by_id(user_id)
        return user.role if user else None

    def create_group(self, *, actor: User, name: str, member_ids: Sequence[str]) -> Group:
        if not policy.can_create_group(actor.role):
            raise AuthorizationError("You cannot create groups")
        if not (name or "").strip() or not member_ids:
            raise ValidationError("Enter group name and select members.")

        members = []
        for member_id in member_ids:
            if not self._users.get_by_id(member_id):
                raise ValidationError(f"Unknown user {member_id}")
            if member_id not in members and member_id != actor.user_id:
                members.append(member_id)
        members.append(actor.user_id)

        name = name.strip()
        group = Group(
            group_id=self._chat.next_group_id(),
            name=name,
            members=tuple(members),
            created_by=actor.user_id,
            avatar=f"https://ui-avatars.com/api/?name={quote(name)}&background=random&color=fff",
        )
        return self._chat.save_group(group)

    def can_delete_group(self, *, actor: User, group: Group) -> bool:
        return policy.can_delete_group(
            actor_id=actor.user_id,
            actor_role=actor.role,
            group=group,
            creator_role=self._role_of(group.created_by),
        )

    def delete_group(self, *, actor: User, group_id: str) -> None:
        group = self._group(group_id)
        if not self.can_delete_group(actor=actor, group=group):
            logger.info("user %s denied deleting group %s", actor.user_id, group_id)
            raise AuthorizationError("You do not have permission to delete this group.")
        self._chat.delete_group(group_id)
        self._chat.delete_messages(lambda m: m.receiver_id == group_id)

    def add_member(self, *, actor: User, group_id: str, member_id: str) -> Group:
        group = self._group(group_id)
        if not policy.can_manage_members(actor_id=actor.user_id, actor_role=actor.role, group=group):
            raise AuthorizationError("You cannot manage this group's members")
        if not self._users.get_by_id(member_id):
            raise ValidationError("User not found")
        if member_id in group.members:
            return group
        return self._chat.save_group(_with_members(group, group.members + (member_id,)))

    def remove_member(self, *, actor: User, group_id: str, member_id: str) -> Group:
        group = self._group(group_id)
        if member_id == actor.user_id:
            raise ValidationError("You cannot remove yourself")
        if member_id not in group.members:
            raise ValidationError("User is not a member of this group")

        allowed = policy.can_manage_members(
            actor_id=actor.user_id, actor_role=actor.role, group=group
        ) and policy.can_remove_member(
            actor_id=actor.user_id,
            actor_role=actor.role,
            group=group,
            member_role=self._role_of(member_id),
        )
        if not allowed:
            raise AuthorizationError("You cannot remove this member")
        return self._chat.save_group(_with_members(group, tuple(m for m in group.members if m != member_id)))

    def list_groups(self, *, actor: User, search: str = "") -> list[dict]:
        query = (search or "").strip().lower()
        out = []
        for group in self._chat.list_groups():
            if actor.user_id not in group.members or query not in group.name.lower():
                continue
            out.append(
                {
                    **group.as_dict(),
                    "can_delete": self.can_delete_group(actor=actor, group=group),
                    "can_manage_members": policy.can_manage_members(
                        actor_id=actor.user_id, actor_role=actor.role, group=group
                    ),
                }
            )
        return out

    # --- Messages ---

    def _is_blocked(self, a: str, b: str) -> bool:
        return b in self._chat.blocked_by(a) or a in self._chat.blocked_by(b)

    def send_message(
        self,
        *,
        actor: User,
        receiver_id: str,
        content: str,
        kind: MessageKind = MessageKind.TEXT,
        file_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Message:
        group = self._chat.get_group(receiver_id)
        if group:
            if actor.user_id not in group.members:
                raise AuthorizationError("You are not a member of this group")
        else:
            if not self._users.get_by_id(receiver_id):
                raise ValidationError("Recipient not found")
            if self._is_blocked(actor.user_id, receiver_id):
                raise ValidationError("Messaging is blocked between you and this user")

        if kind == MessageKind.TEXT:
            content = require_non_empty(content, "Message")
        elif not file_name:
            raise ValidationError("Attachment is missing")

        message = Message(
            message_id=self._chat.next_message_id(),
            sender_id=actor.user_id,
            receiver_id=receiver_id,
            content=content or "",
            timestamp=now or now_local(),
            kind=kind,
            file_name=file_name,
        )
        return self._chat.add_message(message)

    def conversation(self, *, actor: User, chat_id: str) -> list[Message]:
        group = self._chat.get_group(chat_id)
        if group:
            if actor.user_id not in group.members:
                raise AuthorizationError("You are not a member of this group")
            return [m for m in self._chat.list_messages() if m.receiver_id == chat_id]
        return [m for m in self._chat.list_messages() if _is_between(m, actor.user_id, chat_id)]

    def clear_chat(self, *, actor: User, chat_id: str) -> int:
        group = self._chat.get_group(chat_id)
        if group:
            if actor.user_id not in group.members:
                raise AuthorizationError("You are not a member of this group")
            return self._chat.delete_messages(lambda m: m.receiver_id == chat_id)
        return self._chat.delete_messages(lambda m: _is_between(m, actor.user_id, chat_id))

    def toggle_block(self, *, actor: User, user_id: str) -> bool:
        """Returns True when the user is now blocked."""
        if self._chat.get_group(user_id):
            raise ValidationError("Groups cannot be blocked")
        if not self._users.get_by_id(user_id) or user_id == actor.user_id:
            raise ValidationError("User not found")

        blocked = user_id not in self._chat.blocked_by(actor.user_id)
        self._chat.set_blocked(actor.user_id, user_id, blocked)
        return blocked

    def blocked_users(self, *, actor: User) -> list[str]:
        return sorted(self._chat.blocked_by(actor.user_id))


def _with_members(group: Group, members: tuple[str, ...]) -> Group:
    return Group(
        group_id=group.group_id,
        name=group.name,
        members=members,
        created_by=group.created_by,
        avatar=group.avatar,
    )


def _is_between(message: Message, a: str, b: str) -> bool:
    return (message.sender_id == a and message.receiver_id == b) or (
        message.sender_id == b and message.receiver_id == a
    )
