"""Domain models: users, staff members, roles and role assignments."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Role:
    """A named role that can be granted to users."""

    id: uuid.UUID
    name: str
    description: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(cls, name: str, description: str) -> Role:
        """Build a new role with a fresh identifier."""
        now = _now()
        return cls(
            id=uuid.uuid4(),
            name=name,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def update(self, name: str, description: str) -> None:
        """Replace the name and description."""
        self.name = name
        self.description = description
        self.updated_at = _now()


@dataclass
class UserRole:
    """The link between a user and a role granted to them."""

    id: uuid.UUID
    user_id: uuid.UUID
    role_id: uuid.UUID
    assigned_at: datetime

    @classmethod
    def create(cls, user_id: uuid.UUID, role_id: uuid.UUID) -> UserRole:
        """Build a new assignment dated now."""
        return cls(id=uuid.uuid4(), user_id=user_id, role_id=role_id, assigned_at=_now())


@dataclass
class Staff:
    """A staff member."""

    id: uuid.UUID
    work_email: str
    work_phone: str
    full_name: str
    position: str
    is_active: bool
    hire_date: datetime

    @classmethod
    def create(cls, work_email: str, work_phone: str, full_name: str, position: str) -> Staff:
        """Build a new, active staff member hired now."""
        return cls(
            id=uuid.uuid4(),
            work_email=work_email,
            work_phone=work_phone,
            full_name=full_name,
            position=position,
            is_active=True,
            hire_date=_now(),
        )

    def update(self, work_phone: str, position: str) -> None:
        """Change the phone and position; empty values are left alone."""
        if work_phone:
            self.work_phone = work_phone
        if position:
            self.position = position

    def deactivate(self) -> None:
        self.is_active = False

    def activate(self) -> None:
        self.is_active = True


@dataclass
class User:
    """A customer account."""

    id: uuid.UUID
    email: str
    phone: str
    full_name: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(cls, email: str, phone: str, full_name: str) -> User:
        """Build a new, active user."""
        now = _now()
        return cls(
            id=uuid.uuid4(),
            email=email,
            phone=phone,
            full_name=full_name,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    def update(self, email: str, phone: str, full_name: str) -> None:
        """Change contact details; empty values are left alone."""
        if email:
            self.email = email
        if phone:
            self.phone = phone
        if full_name:
            self.full_name = full_name
        self.updated_at = _now()

    def deactivate(self) -> None:
        self.is_active = False
        self.updated_at = _now()

    def activate(self) -> None:
        self.is_active = True
        self.updated_at = _now()