import pytest

from usersvc.errors import (
    AlreadyExistsError,
    DomainError,
    InvalidIdentifierError,
    NotFoundError,
    RoleConflictError,
    RoleNotFoundError,
    StaffNotFoundError,
    UserNotFoundError,
    UserRoleNotFoundError,
)


@pytest.mark.parametrize(
    ("error_cls", "message"),
    [
        (UserNotFoundError, "user not found"),
        (StaffNotFoundError, "staff not found"),
        (RoleNotFoundError, "role not found"),
        (UserRoleNotFoundError, "user role not found"),
        (InvalidIdentifierError, "no identifier provided"),
    ],
)
def test_default_messages(error_cls, message):
    assert str(error_cls()) == message


def test_custom_message_replaces_default():
    err = AlreadyExistsError("user with email a@example.com already exists")
    assert str(err) == "user with email a@example.com already exists"


@pytest.mark.parametrize(
    "error_cls",
    [UserNotFoundError, StaffNotFoundError, RoleNotFoundError, UserRoleNotFoundError],
)
def test_not_found_errors_are_lookup_errors(error_cls):
    err = error_cls()
    assert str(err).endswith("not found")
    assert isinstance(err, LookupError)
    assert isinstance(err, NotFoundError)
    assert isinstance(err, DomainError)


def test_invalid_identifier_is_value_error():
    err = InvalidIdentifierError()
    assert str(err) == "no identifier provided"
    assert isinstance(err, ValueError)


def test_role_conflict_carries_message():
    err = RoleConflictError("user already has this role")
    assert str(err) == "user already has this role"
    assert isinstance(err, DomainError)