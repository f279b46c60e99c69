"""Storage interfaces the domain services depend on."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod

from usersvc.models import Role, Staff, User, UserRole


class RoleRepository(ABC):
    """Persistence of roles."""

    @abstractmethod
    def create(self, role: Role) -> None:
        """Store a new role."""

    @abstractmethod
    def get_by_id(self, role_id: uuid.UUID) -> Role | None:
        """Return the role with this identifier, or None."""

    @abstractmethod
    def get_by_name(self, name: str) -> Role | None:
        """Return the role with this name, or None."""

    @abstractmethod
    def update(self, role: Role) -> None:
        """Save changes to an existing role."""

    @abstractmethod
    def list(self) -> list[Role]:
        """Return every role."""


class UserRoleRepository(ABC):
    """Persistence of the roles granted to users."""

    @abstractmethod
    def assign_role(self, user_role: UserRole) -> None:
        """Store a role assignment."""

    @abstractmethod
    def revoke_role(self, user_id: uuid.UUID, role_id: uuid.UUID) -> None:
        """Remove a role assignment."""

    @abstractmethod
    def get_user_roles(self, user_id: uuid.UUID) -> list[Role]:
        """Return the roles granted to a user."""

    @abstractmethod
    def has_role(self, user_id: uuid.UUID, role_id: uuid.UUID) -> bool:
        """Tell whether the user holds the role."""


class StaffRepository(ABC):
    """Persistence of staff members."""

    @abstractmethod
    def create(self, staff: Staff) -> None:
        """Store a new staff member."""

    @abstractmethod
    def get_by_id(self, staff_id: uuid.UUID) -> Staff | None:
        """Return the staff member with this identifier, or None."""

    @abstractmethod
    def get_by_work_email(self, work_email: str) -> Staff | None:
        """Return the staff member with this work e-mail, or None."""

    @abstractmethod
    def update(self, staff: Staff) -> None:
        """Save changes to an existing staff member."""

    @abstractmethod
    def list(self, only_active: bool, offset: int, limit: int) -> list[Staff]:
        """Return one page of staff members."""

    @abstractmethod
    def count(self, only_active: bool) -> int:
        """Return the number of staff members."""


class UserRepository(ABC):
    """Persistence of users."""

    @abstractmethod
    def create(self, user: User) -> None:
        """Store a new user."""

    @abstractmethod
    def get_by_id(self, user_id: uuid.UUID) -> User | None:
        """Return the user with this identifier, or None."""

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Return the user with this e-mail, or None."""

    @abstractmethod
    def get_by_phone(self, phone: str) -> User | None:
        """Return the user with this phone number, or None."""

    @abstractmethod
    def update(self, user: User) -> None:
        """Save changes to an existing user."""

    @abstractmethod
    def delete(self, user_id: uuid.UUID) -> None:
        """Remove a user."""

    @abstractmethod
    def list(self, only_active: bool, offset: int, limit: int) -> list[User]:
        """Return one page of users."""

    @abstractmethod
    def count(self, only_active: bool) -> int:
        """Return the number of users."""