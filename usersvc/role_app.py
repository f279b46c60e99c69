"""Application-level operations on role assignments."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from usersvc.errors import InvalidIdentifierError
from usersvc.services import RoleService

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _parse_uuid(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidIdentifierError(f"invalid UUID {value!r}") from exc


def _format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


@dataclass
class AssignRoleRequest:
    """Request to grant a role to a user."""

    user_id: str
    role_id: str


@dataclass
class RevokeRoleRequest:
    """Request to take a role away from a user."""

    user_id: str
    role_id: str


@dataclass
class GetUserRolesRequest:
    """Request for the roles a user holds."""

    user_id: str


@dataclass
class RoleResponse:
    """A role as returned to callers."""

    id: str
    name: str
    description: str
    created_at: str
    updated_at: str


@dataclass
class GetUserRolesResponse:
    """The roles a user holds."""

    roles: list[RoleResponse] = field(default_factory=list)


class RoleAppService:
    """Validates requests and forwards them to the role domain service."""

    def __init__(self, role_service: RoleService) -> None:
        self._roles = role_service

    def assign_role(self, req: AssignRoleRequest) -> None:
        """Grant a role; identifiers must be valid UUIDs."""
        user_id = _parse_uuid(req.user_id)
        role_id = _parse_uuid(req.role_id)
        self._roles.assign_role(user_id, role_id)

    def revoke_role(self, req: RevokeRoleRequest) -> None:
        """Revoke a role; identifiers must be valid UUIDs."""
        user_id = _parse_uuid(req.user_id)
        role_id = _parse_uuid(req.role_id)
        self._roles.revoke_role(user_id, role_id)

    def get_user_roles(self, req: GetUserRolesRequest) -> GetUserRolesResponse:
        """Return the user's roles with timestamps rendered as text."""
        user_id = _parse_uuid(req.user_id)
        roles = self._roles.get_user_roles(user_id)
        return GetUserRolesResponse(
            roles=[
                RoleResponse(
                    id=str(role.id),
                    name=role.name,
                    description=role.description,
                    created_at=_format_timestamp(role.created_at),
                    updated_at=_format_timestamp(role.updated_at),
                )
                for role in roles
            ]
        )