"""Application-level operations on customer accounts."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from usersvc.errors import InvalidIdentifierError
from usersvc.models import User
from usersvc.services import UserService


def _parse_uuid(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidIdentifierError(f"invalid UUID {value!r}") from exc


@dataclass
class CreateUserRequest:
    """Request to create a user."""

    email: str
    phone: str
    full_name: str
    password: str = ""


@dataclass
class GetUserRequest:
    """Request to look a user up by identifier, e-mail or phone."""

    id: str | None = None
    email: str | None = None
    phone: str | None = None


@dataclass
class UpdateUserRequest:
    """Request to change a user; None leaves a field as it is."""

    id: str
    email: str | None = None
    phone: str | None = None
    full_name: str | None = None
    is_active: bool | None = None


@dataclass
class DeleteUserRequest:
    """Request to delete a user."""

    id: str


@dataclass
class ListUsersRequest:
    """Request for one page of users."""

    only_active: bool = False
    page: int = 0
    page_size: int = 0


@dataclass
class UserResponse:
    """A user as returned to callers."""

    id: str
    email: str
    phone: str
    full_name: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    roles: list[str] = field(default_factory=list)


@dataclass
class ListUsersResponse:
    """One page of users and the total count."""

    users: list[UserResponse] = field(default_factory=list)
    total_count: int = 0


def _to_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        email=user.email,
        phone=user.phone,
        full_name=user.full_name,
        is_active=user.is_active,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class UserAppService:
    """Translates requests and events into calls on the user domain service."""

    def __init__(self, user_service: UserService) -> None:
        self._users = user_service

    def create_user(self, req: CreateUserRequest) -> UserResponse:
        """Create a user."""
        return _to_response(self._users.create_user(req.email, req.phone, req.full_name))

    def handle_user_created_event(self, user_id: str, email: str, phone: str) -> None:
        """Create the user announced by an event unless the e-mail or phone is known."""
        for lookup, key in (
            (self._users.get_user_by_email, email),
            (self._users.get_user_by_phone, phone),
        ):
            try:
                lookup(key)
            except Exception:  # noqa: BLE001 - any lookup failure means "not known yet"
                continue
            return
        self._users.create_user(email, phone, "")

    def get_user(self, req: GetUserRequest) -> UserResponse:
        """Look a user up; later identifiers in the request take precedence.

        A failed e-mail or phone lookup yields no user rather than an error.
        """
        user: User | None = None
        if req.id is not None:
            user = self._users.get_user(_parse_uuid(req.id))
        if req.email is not None:
            try:
                user = self._users.get_user_by_email(req.email)
            except Exception:  # noqa: BLE001 - reported below as a missing user
                user = None
        if req.phone is not None:
            try:
                user = self._users.get_user_by_phone(req.phone)
            except Exception:  # noqa: BLE001 - reported below as a missing user
                user = None
        if user is None:
            raise InvalidIdentifierError()
        return _to_response(user)

    def update_user(self, req: UpdateUserRequest) -> UserResponse:
        """Update a user identified by UUID."""
        user_id = _parse_uuid(req.id)
        user = self._users.update_user(
            user_id, req.email or "", req.phone or "", req.full_name or "", req.is_active
        )
        return _to_response(user)

    def delete_user(self, req: DeleteUserRequest) -> None:
        """Delete a user identified by UUID."""
        self._users.delete_user(_parse_uuid(req.id))

    def list_users(self, req: ListUsersRequest) -> ListUsersResponse:
        """Return the requested page; pages are numbered from zero."""
        offset = req.page * req.page_size
        users, total = self._users.list_users(req.only_active, offset, req.page_size)
        return ListUsersResponse(users=[_to_response(u) for u in users], total_count=total)