"""Errors raised by the user service domain."""


class DomainError(Exception):
    """Base class for every error the domain layer raises."""

    default_message = "domain error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class NotFoundError(DomainError, LookupError):
    """A requested entity does not exist."""

    default_message = "not found"


class UserNotFoundError(NotFoundError):
    """No user matches the lookup."""

    default_message = "user not found"


class StaffNotFoundError(NotFoundError):
    """No staff member matches the lookup."""

    default_message = "staff not found"


class RoleNotFoundError(NotFoundError):
    """No role matches the lookup."""

    default_message = "role not found"


class UserRoleNotFoundError(NotFoundError):
    """The user does not hold the role in question."""

    default_message = "user role not found"


class AlreadyExistsError(DomainError):
    """An entity with the same unique attribute already exists."""

    default_message = "already exists"


class RoleConflictError(DomainError):
    """A role assignment conflicts with the roles a user already holds."""

    default_message = "role conflict"


class InvalidIdentifierError(DomainError, ValueError):
    """An identifier is missing or malformed."""

    default_message = "no identifier provided"