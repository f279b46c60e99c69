"""Application-level operations on staff members."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from usersvc.errors import InvalidIdentifierError
from usersvc.models import Staff
from usersvc.services import StaffService


def _parse_uuid(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidIdentifierError(f"invalid UUID {value!r}") from exc


@dataclass
class CreateStaffRequest:
    """Request to create a staff member."""

    work_email: str
    work_phone: str
    full_name: str
    position: str
    password: str = ""


@dataclass
class UpdateStaffRequest:
    """Request to change a staff member; None leaves a field as it is."""

    id: str
    work_phone: str | None = None
    position: str | None = None
    is_active: bool | None = None


@dataclass
class ListStaffRequest:
    """Request for one page of staff members."""

    only_active: bool = False
    page: int = 0
    page_size: int = 0


@dataclass
class StaffResponse:
    """A staff member as returned to callers."""

    id: str
    work_email: str
    work_phone: str
    full_name: str
    position: str
    is_active: bool
    hire_date: datetime
    roles: list[str] = field(default_factory=list)


@dataclass
class ListStaffResponse:
    """One page of staff members and the total count."""

    staff: list[StaffResponse] = field(default_factory=list)
    total_count: int = 0


def _to_response(staff: Staff) -> StaffResponse:
    return StaffResponse(
        id=str(staff.id),
        work_email=staff.work_email,
        work_phone=staff.work_phone,
        full_name=staff.full_name,
        position=staff.position,
        is_active=staff.is_active,
        hire_date=staff.hire_date,
    )


class StaffAppService:
    """Translates requests into calls on the staff domain service."""

    def __init__(self, staff_service: StaffService) -> None:
        self._staff = staff_service

    def create_staff(self, req: CreateStaffRequest) -> StaffResponse:
        """Create a staff member."""
        staff = self._staff.create_staff(req.work_email, req.work_phone, req.full_name, req.position)
        return _to_response(staff)

    def update_staff(self, req: UpdateStaffRequest) -> StaffResponse:
        """Update a staff member identified by UUID."""
        staff_id = _parse_uuid(req.id)
        staff = self._staff.update_staff(
            staff_id, req.work_phone or "", req.position or "", req.is_active
        )
        return _to_response(staff)

    def list_staff(self, req: ListStaffRequest) -> ListStaffResponse:
        """Return the requested page; pages are numbered from zero."""
        offset = req.page * req.page_size
        staff, total = self._staff.list_staff(req.only_active, offset, req.page_size)
        return ListStaffResponse(staff=[_to_response(s) for s in staff], total_count=total)