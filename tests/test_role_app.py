import uuid
from datetime import datetime, timezone

import pytest

from usersvc.errors import InvalidIdentifierError, RoleConflictError, UserRoleNotFoundError
from usersvc.models import Role, UserRole
from usersvc.repository import RoleRepository, UserRoleRepository
from usersvc.role_app import (
    AssignRoleRequest,
    GetUserRolesRequest,
    RevokeRoleRequest,
    RoleAppService,
)
from usersvc.services import RoleService


class MemoryRoleRepository(RoleRepository):
    def __init__(self):
        self.roles = {}

    def create(self, role):
        self.roles[role.id] = role

    def get_by_id(self, role_id):
        return self.roles.get(role_id)

    def get_by_name(self, name):
        return next((r for r in self.roles.values() if r.name == name), None)

    def update(self, role):
        self.roles[role.id] = role

    def list(self):
        return list(self.roles.values())


class MemoryUserRoleRepository(UserRoleRepository):
    def __init__(self, roles):
        self.roles = roles
        self.assignments: list[UserRole] = []

    def assign_role(self, user_role):
        self.assignments.append(user_role)

    def revoke_role(self, user_id, role_id):
        self.assignments = [
            a for a in self.assignments if (a.user_id, a.role_id) != (user_id, role_id)
        ]

    def get_user_roles(self, user_id):
        return [self.roles.get_by_id(a.role_id) for a in self.assignments if a.user_id == user_id]

    def has_role(self, user_id, role_id):
        return any((a.user_id, a.role_id) == (user_id, role_id) for a in self.assignments)


@pytest.fixture
def setup():
    roles = MemoryRoleRepository()
    user_roles = MemoryUserRoleRepository(roles)
    app = RoleAppService(RoleService(roles, user_roles))
    role = Role.create("admin", "administrators")
    roles.create(role)
    return app, role, user_roles


def test_assign_and_list_roles(setup):
    app, role, _ = setup
    user_id = str(uuid.uuid4())
    app.assign_role(AssignRoleRequest(user_id=user_id, role_id=str(role.id)))
    resp = app.get_user_roles(GetUserRolesRequest(user_id=user_id))
    assert [r.id for r in resp.roles] == [str(role.id)]
    assert resp.roles[0].name == "admin"
    assert resp.roles[0].description == "administrators"


def test_assign_twice_conflicts(setup):
    app, role, _ = setup
    req = AssignRoleRequest(user_id=str(uuid.uuid4()), role_id=str(role.id))
    app.assign_role(req)
    with pytest.raises(RoleConflictError, match="user already has this role"):
        app.assign_role(req)


def test_revoke_removes_role(setup):
    app, role, user_roles = setup
    user_id = str(uuid.uuid4())
    app.assign_role(AssignRoleRequest(user_id=user_id, role_id=str(role.id)))
    app.revoke_role(RevokeRoleRequest(user_id=user_id, role_id=str(role.id)))
    assert app.get_user_roles(GetUserRolesRequest(user_id=user_id)).roles == []
    assert user_roles.assignments == []


def test_revoke_unheld_role_fails(setup):
    app, role, _ = setup
    with pytest.raises(UserRoleNotFoundError, match="user does not have this role"):
        app.revoke_role(RevokeRoleRequest(user_id=str(uuid.uuid4()), role_id=str(role.id)))


@pytest.mark.parametrize("user_id, role_id", [("bad", None), (None, "bad")])
def test_invalid_identifiers(setup, user_id, role_id):
    app, role, user_roles = setup
    req = AssignRoleRequest(
        user_id=user_id or str(uuid.uuid4()), role_id=role_id or str(role.id)
    )
    with pytest.raises(InvalidIdentifierError):
        app.assign_role(req)
    assert user_roles.assignments == []


def test_invalid_identifier_is_value_error(setup):
    app, _, _ = setup
    with pytest.raises(ValueError):
        app.get_user_roles(GetUserRolesRequest(user_id=""))


def test_timestamp_format(setup):
    app, role, _ = setup
    role.created_at = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    role.updated_at = role.created_at
    user_id = str(uuid.uuid4())
    app.assign_role(AssignRoleRequest(user_id=user_id, role_id=str(role.id)))
    resp = app.get_user_roles(GetUserRolesRequest(user_id=user_id))
    assert resp.roles[0].created_at == "2024-01-02T03:04:05Z"
    assert resp.roles[0].updated_at == resp.roles[0].created_at