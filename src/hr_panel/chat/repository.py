from __future__ import annotations

from itertools import count
from typing import Callable, Optional, Protocol, Sequence

from .model import Group, Message


class ChatRepository(Protocol):
    def list_groups(self) -> Sequence[Group]:
        raise NotImplementedError

    def get_group(self, group_id: str) -> Optional[Group]:
        raise NotImplementedError

    def save_group(self, group: Group) -> Group:
        raise NotImplementedError

    def delete_group(self, group_id: str) -> bool:
        raise NotImplementedError

    def add_message(self, message: Message) -> Message:
        raise NotImplementedError

    def list_messages(self) -> Sequence[Message]:
        raise NotImplementedError

    def delete_messages(self, predicate: Callable[[Message], bool]) -> int:
        raise NotImplementedError

    def blocked_by(self, user_id: str) -> set[str]:
        raise NotImplementedError

    def set_blocked(self, user_id: str, other_id: str, blocked: bool) -> None:
        raise NotImplementedError

    def next_group_id(self) -> str:
        raise NotImplementedError

    def next_message_id(self) -> str:
        raise NotImplementedError


class InMemoryChatRepository(ChatRepository):
    def __init__(self, groups: Sequence[Group] = (), messages: Sequence[Message] = ()):
        self._groups: dict[str, Group] = {g.group_id: g for g in groups}
        self._messages: list[Message] = list(messages)
        self._blocks: dict[str, set[str]] = {}
        self._group_ids = count(len(self._groups) + 1)
        self._message_ids = count(len(self._messages) + 1)

    def list_groups(self) -> Sequence[Group]:
        return list(self._groups.values())

    def get_group(self, group_id: str) -> Optional[Group]:
        return self._groups.get(group_id)

    def save_group(self, group: Group) -> Group:
        self._groups[group.group_id] = group
        return group

    def delete_group(self, group_id: str) -> bool:
        return self._groups.pop(group_id, None) is not None

    def add_message(self, message: Message) -> Message:
        self._messages.append(message)
        return message

    def list_messages(self) -> Sequence[Message]:
        return list(self._messages)

    def delete_messages(self, predicate: Callable[[Message], bool]) -> int:
        before = len(self._messages)
        self._messages = [m for m in self._messages if not predicate(m)]
        return before - len(self._messages)

    def blocked_by(self, user_id: str) -> set[str]:
        return set(self._blocks.get(user_id, ()))

    def set_blocked(self, user_id: str, other_id: str, blocked: bool) -> None:
        targets = self._blocks.setdefault(user_id, set())
        if blocked:
            targets.add(other_id)
        else:
            targets.discard(other_id)

    def next_group_id(self) -> str:
        return f"g{next(self._group_ids)}"

    def next_message_id(self) -> str:
        return f"m{next(self._message_ids)}"
