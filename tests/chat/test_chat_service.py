from __future__ import annotations

from datetime import datetime

import pytest

from hr_panel.chat.repository import InMemoryChatRepository
from hr_panel.chat.service import ChatService
from hr_panel.core.enums import MessageKind
from hr_panel.core.exceptions import AuthorizationError, ValidationError

NOW = datetime(2025, 1, 15, 10, 0)


@pytest.fixture
def chat_repo() -> InMemoryChatRepository:
    return InMemoryChatRepository()


@pytest.fixture
def service(chat_repo, users_repo) -> ChatService:
    return ChatService(chat_repo, users_repo)


def test_create_group_adds_creator(service, people):
    group = service.create_group(actor=people["admin"], name=" Sales Floor ", member_ids=["u6", "u7", "u6"])

    assert group.name == "Sales Floor"
    assert group.members == ("u6", "u7", "u2")
    assert group.created_by == "u2"
    assert group.avatar.startswith("https://ui-avatars.com/api/?name=Sales%20Floor")


def test_create_group_validation(service, people):
    with pytest.raises(ValidationError, match="Enter group name and select members."):
        service.create_group(actor=people["manager"], name="", member_ids=[])
    with pytest.raises(ValidationError):
        service.create_group(actor=people["manager"], name="Team", member_ids=[])


def test_create_group_is_gated(service, people):
    with pytest.raises(AuthorizationError):
        service.create_group(actor=people["hr"], name="HR only", member_ids=["u6"])


def test_admin_cannot_delete_managers_group(service, people, chat_repo):
    group = service.create_group(actor=people["manager"], name="Mgmt", member_ids=["u2"])

    with pytest.raises(AuthorizationError):
        service.delete_group(actor=people["admin"], group_id=group.group_id)
    assert chat_repo.get_group(group.group_id) is not None


def test_ceo_deletes_any_group_and_its_messages(service, people, chat_repo):
    group = service.create_group(actor=people["admin"], name="Ops", member_ids=["u6"])
    service.send_message(actor=people["exec_a"], receiver_id=group.group_id, content="hi", now=NOW)

    service.delete_group(actor=people["ceo"], group_id=group.group_id)

    assert chat_repo.get_group(group.group_id) is None
    assert chat_repo.list_messages() == []


def test_remove_member_rules(service, people):
    group = service.create_group(actor=people["admin"], name="Ops", member_ids=["u1", "u6"])

    with pytest.raises(AuthorizationError):
        service.remove_member(actor=people["admin"], group_id=group.group_id, member_id="u1")
    with pytest.raises(ValidationError):
        service.remove_member(actor=people["admin"], group_id=group.group_id, member_id="u2")

    updated = service.remove_member(actor=people["admin"], group_id=group.group_id, member_id="u6")
    assert updated.members == ("u1", "u2")


def test_non_creator_cannot_add_members(service, people):
    group = service.create_group(actor=people["admin"], name="Ops", member_ids=["u6"])

    with pytest.raises(AuthorizationError):
        service.add_member(actor=people["exec_a"], group_id=group.group_id, member_id="u7")

    updated = service.add_member(actor=people["manager"], group_id=group.group_id, member_id="u7")
    assert "u7" in updated.members


def test_list_groups_only_for_members(service, people):
    service.create_group(actor=people["admin"], name="Ops", member_ids=["u6"])

    assert [g["name"] for g in service.list_groups(actor=people["exec_a"])] == ["Ops"]
    assert service.list_groups(actor=people["exec_b"]) == []
    row = service.list_groups(actor=people["admin"])[0]
    assert row["can_delete"] is True
    assert row["can_manage_members"] is True


def test_direct_conversation(service, people):
    service.send_message(actor=people["exec_a"], receiver_id="u7", content="lunch?", now=NOW)
    service.send_message(actor=people["exec_b"], receiver_id="u6", content="sure", now=NOW)
    service.send_message(actor=people["exec_b"], receiver_id="u5", content="unrelated", now=NOW)

    convo = service.conversation(actor=people["exec_a"], chat_id="u7")
    assert [m.content for m in convo] == ["lunch?", "sure"]


def test_empty_text_message_rejected(service, people):
    with pytest.raises(ValidationError):
        service.send_message(actor=people["exec_a"], receiver_id="u7", content="  ", now=NOW)


def test_attachment_message(service, people):
    msg = service.send_message(
        actor=people["exec_a"],
        receiver_id="u7",
        content="data:application/pdf;base64,AAAA",
        kind=MessageKind.FILE,
        file_name="report.pdf",
        now=NOW,
    )
    assert msg.as_dict()["file_name"] == "report.pdf"


def test_non_member_cannot_post_to_group(service, people):
    group = service.create_group(actor=people["admin"], name="Ops", member_ids=["u6"])

    with pytest.raises(AuthorizationError):
        service.send_message(actor=people["exec_b"], receiver_id=group.group_id, content="let me in", now=NOW)


def test_blocking_stops_messages_both_ways(service, people):
    assert service.toggle_block(actor=people["exec_a"], user_id="u7") is True
    assert service.blocked_users(actor=people["exec_a"]) == ["u7"]

    with pytest.raises(ValidationError):
        service.send_message(actor=people["exec_a"], receiver_id="u7", content="hey", now=NOW)
    with pytest.raises(ValidationError):
        service.send_message(actor=people["exec_b"], receiver_id="u6", content="hey", now=NOW)

    assert service.toggle_block(actor=people["exec_a"], user_id="u7") is False
    service.send_message(actor=people["exec_a"], receiver_id="u7", content="hey", now=NOW)


def test_clear_chat_only_removes_that_conversation(service, people, chat_repo):
    service.send_message(actor=people["exec_a"], receiver_id="u7", content="one", now=NOW)
    service.send_message(actor=people["exec_b"], receiver_id="u6", content="two", now=NOW)
    service.send_message(actor=people["exec_a"], receiver_id="u5", content="keep", now=NOW)

    assert service.clear_chat(actor=people["exec_a"], chat_id="u7") == 2
    assert [m.content for m in chat_repo.list_messages()] == ["keep"]
