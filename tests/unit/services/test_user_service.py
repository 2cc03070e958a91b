"""
Unit tests for the user service.

Covers every controller operation, the profile update rules (current
password proof, OAuth accounts, email uniqueness) and the guarantee that a
failing check never writes.
"""

import pytest

from app.core.result import AppError, ErrorKind, Ok
from app.core.security import verify_password
from app.schemas.user import ProfileUpdate, UserCreate, UserResponse, UserUpdate
from app.services.user_service import UserService

PASSWORD = "longenough1"


@pytest.fixture
def service(session):
    return UserService(session)


def _error(result, kind: ErrorKind, message: str) -> None:
    assert isinstance(result, AppError)
    assert result.kind == kind
    assert result.message == message


# ======================================================================
# create
# ======================================================================


class TestCreate:

    def test_creates_with_hash_and_default_role(self, service, session):
        result = service.create(UserCreate(email="a@x.com", password=PASSWORD))

        assert isinstance(result, Ok)
        assert result.status_code == 201
        assert result.value.email == "a@x.com"
        assert result.value.role == "user"
        assert "password" not in result.value.model_dump()

        stored = service.repository.get_by_id(result.value.id)
        assert stored.password != PASSWORD
        assert verify_password(PASSWORD, stored.password)

    def test_explicit_role(self, service):
        result = service.create(UserCreate(email="a@x.com", password=PASSWORD, role="admin"))
        assert result.value.role == "admin"

    @pytest.mark.parametrize("data", [
        UserCreate(),
        UserCreate(email="a@x.com"),
        UserCreate(password=PASSWORD),
        UserCreate(email="", password=PASSWORD),
    ])
    def test_missing_fields(self, service, data):
        _error(service.create(data), ErrorKind.VALIDATION, "Email and password are required")

    def test_malformed_email(self, service):
        _error(service.create(UserCreate(email="not-an-email", password=PASSWORD)),
               ErrorKind.VALIDATION, "Invalid email format")

    def test_short_password(self, service):
        _error(service.create(UserCreate(email="a@x.com", password="short")),
               ErrorKind.VALIDATION, "Password must be at least 8 characters long")

    def test_unknown_role(self, service):
        _error(service.create(UserCreate(email="a@x.com", password=PASSWORD, role="root")),
               ErrorKind.VALIDATION, "Invalid role")

    def test_duplicate_email(self, service, make_user):
        make_user("a@x.com")
        _error(service.create(UserCreate(email="a@x.com", password=PASSWORD)),
               ErrorKind.CONFLICT, "Email is already in use")


# ======================================================================
# reads and delete
# ======================================================================


class TestReadAndDelete:

    def test_list_users_is_stripped(self, service, make_user):
        make_user("a@x.com")
        make_user("b@x.com", password=None)
        result = service.list_users()
        assert len(result.value) == 2
        assert all(isinstance(u, UserResponse) for u in result.value)
        assert all("password" not in u.model_dump() for u in result.value)

    def test_get_by_id(self, service, make_user):
        user = make_user()
        assert service.get_by_id(user.id).value.email == user.email

    def test_get_by_id_unknown(self, service):
        _error(service.get_by_id("missing"), ErrorKind.NOT_FOUND, "User not found")

    def test_get_by_id_required(self, service):
        _error(service.get_by_id(""), ErrorKind.VALIDATION, "User ID is required")

    def test_get_by_email(self, service, make_user):
        user = make_user()
        assert service.get_by_email("a@x.com").value.id == user.id

    def test_get_by_email_unknown(self, service):
        _error(service.get_by_email("nobody@x.com"), ErrorKind.NOT_FOUND, "User not found")

    def test_get_by_email_required(self, service):
        _error(service.get_by_email(None), ErrorKind.VALIDATION, "Email is required")

    def test_delete_then_read_is_not_found(self, service, make_user):
        user = make_user()
        result = service.delete(user.id)
        assert isinstance(result, Ok)
        assert result.status_code == 204
        _error(service.get_by_id(user.id), ErrorKind.NOT_FOUND, "User not found")

    def test_delete_unknown(self, service):
        _error(service.delete("missing"), ErrorKind.NOT_FOUND, "User not found")


# ======================================================================
# update (admin path)
# ======================================================================


class TestAdminUpdate:

    def test_overwrites_supplied_fields(self, service, make_user):
        user = make_user()
        result = service.update(user.id, UserUpdate(email="new@x.com", password="brandnew123", role="admin"))

        assert result.value.email == "new@x.com"
        assert result.value.role == "admin"
        assert verify_password("brandnew123", service.repository.get_by_id(user.id).password)

    def test_empty_update_keeps_record(self, service, make_user):
        user = make_user()
        result = service.update(user.id, UserUpdate())
        assert result.value.email == "a@x.com"
        assert result.value.role == "user"

    def test_unknown_user(self, service):
        _error(service.update("missing", UserUpdate(role="admin")), ErrorKind.NOT_FOUND, "User not found")

    def test_malformed_email(self, service, make_user):
        user = make_user()
        _error(service.update(user.id, UserUpdate(email="nope")), ErrorKind.VALIDATION, "Invalid email format")

    def test_short_password(self, service, make_user):
        user = make_user()
        _error(service.update(user.id, UserUpdate(password="short")),
               ErrorKind.VALIDATION, "Password must be at least 8 characters long")

    def test_unknown_role(self, service, make_user):
        user = make_user()
        _error(service.update(user.id, UserUpdate(role="superuser")), ErrorKind.VALIDATION, "Invalid role")

    def test_email_taken_by_other_user(self, service, make_user):
        make_user("b@x.com")
        user = make_user("a@x.com")
        _error(service.update(user.id, UserUpdate(email="b@x.com")), ErrorKind.CONFLICT, "Email is already in use")


# ======================================================================
# update_profile (self-service path)
# ======================================================================


class TestUpdateProfile:

    def test_password_change_with_correct_current_password(self, service, make_user):
        user = make_user()
        result = service.update_profile(user.id, ProfileUpdate(password="brandnew123", current_password=PASSWORD))

        assert result.value.message == "Profile updated successfully"
        stored = service.repository.get_by_id(user.id).password
        assert verify_password("brandnew123", stored)
        assert not verify_password(PASSWORD, stored)

    def test_wrong_current_password_keeps_hash(self, service, make_user):
        user = make_user()
        before = user.password
        result = service.update_profile(user.id, ProfileUpdate(password="brandnew123", current_password="wrongpass"))

        _error(result, ErrorKind.AUTHENTICATION, "Current password is incorrect")
        assert result.status_code == 401
        assert service.repository.get_by_id(user.id).password == before

    def test_current_password_required(self, service, make_user):
        user = make_user()
        _error(service.update_profile(user.id, ProfileUpdate(password="brandnew123")),
               ErrorKind.VALIDATION, "Current password is required to change password")

    def test_short_new_password(self, service, make_user):
        user = make_user()
        _error(service.update_profile(user.id, ProfileUpdate(password="short", current_password=PASSWORD)),
               ErrorKind.VALIDATION, "New password must be at least 8 characters long")

    def test_oauth_account_cannot_set_password(self, service, make_user):
        user = make_user(password=None)
        result = service.update_profile(
            user.id, ProfileUpdate(email="new@x.com", password="brandnew123", current_password="anything"))

        _error(result, ErrorKind.VALIDATION, "Cannot change password for OAuth accounts")
        stored = service.repository.get_by_id(user.id)
        assert stored.password is None
        assert stored.email == "a@x.com"

    def test_oauth_account_can_change_email(self, service, make_user):
        user = make_user(password=None)
        result = service.update_profile(user.id, ProfileUpdate(email="new@x.com"))
        assert result.value.user.email == "new@x.com"

    def test_email_change(self, service, make_user):
        user = make_user()
        result = service.update_profile(user.id, ProfileUpdate(email="new@x.com"))

        assert result.value.message == "Profile updated successfully"
        assert result.value.user.email == "new@x.com"
        assert service.repository.get_by_email("a@x.com") is None

    def test_email_taken_by_other_user(self, service, make_user):
        make_user("b@x.com")
        user = make_user("a@x.com")
        _error(service.update_profile(user.id, ProfileUpdate(email="b@x.com")),
               ErrorKind.CONFLICT, "Email is already in use")
        assert service.repository.get_by_id(user.id).email == "a@x.com"

    def test_own_email_is_no_change(self, service, make_user):
        user = make_user()
        result = service.update_profile(user.id, ProfileUpdate(email="a@x.com"))

        assert result.value.message == "No changes detected"
        assert result.value.user.email == "a@x.com"

    def test_empty_body_is_no_change(self, service, make_user):
        user = make_user()
        assert service.update_profile(user.id, ProfileUpdate()).value.message == "No changes detected"

    def test_malformed_email(self, service, make_user):
        user = make_user()
        _error(service.update_profile(user.id, ProfileUpdate(email="bad-email")),
               ErrorKind.VALIDATION, "Invalid email format")

    def test_failed_password_check_blocks_email_change(self, service, make_user):
        user = make_user()
        service.update_profile(user.id, ProfileUpdate(email="new@x.com", password="brandnew123",
                                                      current_password="wrongpass"))
        assert service.repository.get_by_id(user.id).email == "a@x.com"

    def test_unknown_user(self, service):
        _error(service.update_profile("missing", ProfileUpdate(email="new@x.com")),
               ErrorKind.NOT_FOUND, "User not found")

    def test_concurrent_email_claim_reports_conflict(self, service, make_user, monkeypatch):
        make_user("b@x.com")
        user = make_user("a@x.com")
        # another writer claims the email between the check and the write
        monkeypatch.setattr(service.repository, "get_by_email_excluding", lambda email, user_id: None)

        _error(service.update_profile(user.id, ProfileUpdate(email="b@x.com")),
               ErrorKind.CONFLICT, "Email is already in use")
        assert service.repository.get_by_id(user.id).email == "a@x.com"
