"""Domain services for users, staff members and roles."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from typing import TypeVar

from usersvc.errors import (
    AlreadyExistsError,
    NotFoundError,
    RoleConflictError,
    StaffNotFoundError,
    UserNotFoundError,
    UserRoleNotFoundError,
)
from usersvc.models import Role, Staff, User, UserRole
from usersvc.repository import (
    RoleRepository,
    StaffRepository,
    UserRepository,
    UserRoleRepository,
)

_T = TypeVar("_T")


def _find(lookup: Callable[[str], _T | None], key: str) -> _T | None:
    """Run a uniqueness lookup, treating a not-found error as absence."""
    try:
        return lookup(key)
    except NotFoundError:
        return None


class UserService:
    """Business rules for customer accounts."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._repo = user_repo

    def create_user(self, email: str, phone: str, full_name: str) -> User:
        """Create and store a user whose e-mail and phone are not yet taken."""
        if _find(self._repo.get_by_email, email) is not None:
            raise AlreadyExistsError(f"user with email {email} already exists")
        if _find(self._repo.get_by_phone, phone) is not None:
            raise AlreadyExistsError(f"user with phone {phone} already exists")
        user = User.create(email, phone, full_name)
        self._repo.create(user)
        return user

    def get_user(self, user_id: uuid.UUID) -> User:
        """Return the user with this identifier."""
        user = self._repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    def get_user_by_email(self, email: str) -> User:
        """Return the user with this e-mail."""
        user = self._repo.get_by_email(email)
        if user is None:
            raise UserNotFoundError()
        return user

    def get_user_by_phone(self, phone: str) -> User:
        """Return the user with this phone number."""
        user = self._repo.get_by_phone(phone)
        if user is None:
            raise UserNotFoundError()
        return user

    def update_user(
        self,
        user_id: uuid.UUID,
        email: str,
        phone: str,
        full_name: str,
        is_active: bool | None,
    ) -> User:
        """Apply non-empty changes and an optional activation flag, then save."""
        user = self.get_user(user_id)
        user.update(email, phone, full_name)
        if is_active is not None:
            if is_active:
                user.activate()
            else:
                user.deactivate()
        self._repo.update(user)
        return user

    def delete_user(self, user_id: uuid.UUID) -> None:
        """Delete an existing user."""
        self.get_user(user_id)
        self._repo.delete(user_id)

    def list_users(self, only_active: bool, offset: int, limit: int) -> tuple[list[User], int]:
        """Return one page of users together with the total count."""
        users = self._repo.list(only_active, offset, limit)
        total = self._repo.count(only_active)
        return users, total


class StaffService:
    """Business rules for staff members."""

    def __init__(self, staff_repo: StaffRepository) -> None:
        self._repo = staff_repo

    def create_staff(self, work_email: str, work_phone: str, full_name: str, position: str) -> Staff:
        """Create and store a staff member whose work e-mail is not yet taken."""
        if _find(self._repo.get_by_work_email, work_email) is not None:
            raise AlreadyExistsError(f"staff with email {work_email} already exists")
        staff = Staff.create(work_email, work_phone, full_name, position)
        self._repo.create(staff)
        return staff

    def update_staff(
        self,
        staff_id: uuid.UUID,
        work_phone: str,
        position: str,
        is_active: bool | None,
    ) -> Staff:
        """Apply non-empty changes and an optional activation flag, then save."""
        staff = self._repo.get_by_id(staff_id)
        if staff is None:
            raise StaffNotFoundError()
        staff.update(work_phone, position)
        if is_active is not None:
            if is_active:
                staff.activate()
            else:
                staff.deactivate()
        self._repo.update(staff)
        return staff

    def list_staff(self, only_active: bool, offset: int, limit: int) -> tuple[list[Staff], int]:
        """Return one page of staff members together with the total count."""
        staff = self._repo.list(only_active, offset, limit)
        total = self._repo.count(only_active)
        return staff, total


class RoleService:
    """Business rules for granting and revoking roles."""

    def __init__(self, role_repo: RoleRepository, user_role_repo: UserRoleRepository) -> None:
        self._roles = role_repo
        self._user_roles = user_role_repo

    def assign_role(self, user_id: uuid.UUID, role_id: uuid.UUID) -> None:
        """Grant a role the user does not hold yet."""
        if self._user_roles.has_role(user_id, role_id):
            raise RoleConflictError("user already has this role")
        self._user_roles.assign_role(UserRole.create(user_id, role_id))

    def revoke_role(self, user_id: uuid.UUID, role_id: uuid.UUID) -> None:
        """Take away a role the user holds."""
        if not self._user_roles.has_role(user_id, role_id):
            raise UserRoleNotFoundError("user does not have this role")
        self._user_roles.revoke_role(user_id, role_id)

    def get_user_roles(self, user_id: uuid.UUID) -> list[Role]:
        """Return the roles granted to a user."""
        return self._user_roles.get_user_roles(user_id)