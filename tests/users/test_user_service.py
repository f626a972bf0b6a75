from __future__ import annotations

import pytest

from hr_panel.core.enums import Role
from hr_panel.core.exceptions import AuthenticationError, AuthorizationError, DataIntegrityError, ValidationError
from hr_panel.users.memory_user_repository import InMemoryUserRepository
from hr_panel.users.security import PasswordHasher
from hr_panel.users.service import AuthService, UserService


@pytest.fixture
def service(users_repo) -> UserService:
    return UserService(users_repo, PasswordHasher())


def test_login_is_case_insensitive_on_email(users_repo, people):
    hasher = PasswordHasher()
    service = UserService(users_repo, hasher)
    created = service.create_user(
        actor=people["ceo"],
        name="New Hire",
        email="New.Hire@Example.com",
        role=Role.EXECUTIVE,
    )

    auth = AuthService(users_repo, hasher)
    session_user = auth.authenticate("  new.hire@example.com ", "password")
    assert session_user.user_id == created.user_id
    assert session_user.role == Role.EXECUTIVE


def test_login_failure_is_uniform(users_repo):
    auth = AuthService(users_repo, PasswordHasher())

    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        auth.authenticate("nobody@example.com", "password")
    # Seeded fixture users carry an unusable hash.
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        auth.authenticate("eve.exec@example.com", "password")


def test_password_is_never_stored_in_plain_text(service, people, users_repo):
    user = service.create_user(
        actor=people["admin"], name="Sam", email="sam@example.com", role=Role.HR, password="s3cret"
    )
    stored = users_repo.get_by_id(user.user_id)
    assert stored.password_hash != "s3cret"
    assert PasswordHasher().verify(stored.password_hash, "s3cret")


def test_hr_cannot_create_admin(service, people):
    with pytest.raises(AuthorizationError):
        service.create_user(actor=people["hr"], name="X", email="x@example.com", role=Role.ADMIN)


def test_duplicate_email_rejected(service, people):
    with pytest.raises(ValidationError, match="Email already in use"):
        service.create_user(actor=people["ceo"], name="Dup", email="EVE.EXEC@example.com", role=Role.EXECUTIVE)


def test_name_required(service, people):
    with pytest.raises(ValidationError):
        service.create_user(actor=people["ceo"], name="  ", email="blank@example.com", role=Role.EXECUTIVE)


def test_edit_with_empty_password_keeps_old_hash(service, people, users_repo):
    before = users_repo.get_by_id("u6").password_hash
    updated = service.update_user(
        actor=people["hr"],
        user_id="u6",
        name="Eve Senior",
        email="eve.exec@example.com",
        role=Role.TEAM_LEADER,
        password="",
    )
    assert updated.name == "Eve Senior"
    assert updated.role == Role.TEAM_LEADER
    assert users_repo.get_by_id("u6").password_hash == before


def test_admin_cannot_delete_ceo(service, people, users_repo):
    with pytest.raises(AuthorizationError):
        service.delete_user(actor=people["admin"], user_id="u1")
    assert users_repo.get_by_id("u1") is not None


def test_only_ceo_cannot_be_deleted(service, people, users_repo):
    before = [u.user_id for u in users_repo.list_all()]

    with pytest.raises(DataIntegrityError):
        service.delete_user(actor=people["ceo"], user_id="u1")
    assert [u.user_id for u in users_repo.list_all()] == before


def test_second_ceo_can_be_deleted(people):
    repo = InMemoryUserRepository(list(people.values()))
    service = UserService(repo, PasswordHasher())
    second = service.create_user(actor=people["ceo"], name="Co Chief", email="co@example.com", role=Role.CEO)

    service.delete_user(actor=people["ceo"], user_id=second.user_id)
    assert repo.get_by_id(second.user_id) is None


def test_last_ceo_role_cannot_be_changed(service, people):
    with pytest.raises(DataIntegrityError):
        service.update_user(
            actor=people["ceo"],
            user_id="u1",
            name="Chief Boss",
            email="chief.boss@example.com",
            role=Role.ADMIN,
        )


def test_role_management_rows(service, people):
    rows = {row["user_id"]: row for row in service.list_manageable(actor=people["admin"])}

    assert rows["u1"]["can_manage"] is False
    assert rows["u6"]["can_manage"] is True
    assert "password_hash" not in rows["u6"]

    ceo_rows = {row["user_id"]: row for row in service.list_manageable(actor=people["ceo"])}
    assert ceo_rows["u1"]["can_manage"] is True
    assert ceo_rows["u1"]["can_delete"] is False


def test_role_management_page_denied_for_manager(service, people):
    with pytest.raises(AuthorizationError):
        service.list_manageable(actor=people["manager"])


def test_profile_edit_locked_for_executive(service, people):
    with pytest.raises(AuthorizationError):
        service.update_profile(actor=people["exec_a"], name="Renamed")

    updated = service.update_profile(actor=people["hr"], name="Hana H.", avatar="https://img/h.png")
    assert updated.name == "Hana H."
    assert updated.avatar == "https://img/h.png"


def test_reset_password(service, people, users_repo):
    service.reset_password(actor=people["hr"], user_id="u7", new_password="newpass")
    assert PasswordHasher().verify(users_repo.get_by_id("u7").password_hash, "newpass")

    with pytest.raises(AuthorizationError):
        service.reset_password(actor=people["hr"], user_id="u2", new_password="x")
