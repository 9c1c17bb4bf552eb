"""Errors raised while mapping rows or talking to storage."""

from calendars.domain.errors import DomainError, ErrorCode


class MapperError(DomainError):
    """A stored row could not be turned back into a domain entity."""


class InvalidIdError(MapperError):
    """Raised when a stored identifier is not a valid UUID."""

    def __init__(self, value: str) -> None:
        super().__init__(code=ErrorCode.INVALID_ID, message=f"Invalid ID: {value!r}")
        object.__setattr__(self, "value", value)


class InvalidDateError(MapperError):
    """Raised when a stored timestamp is not an offset-qualified ISO 8601 value."""

    def __init__(self, value: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_DATE, message=f"Invalid datetime: {value!r}"
        )
        object.__setattr__(self, "value", value)


class InvalidDataError(MapperError):
    """Raised when a stored row is structurally inconsistent."""

    def __init__(self, detail: str) -> None:
        super().__init__(code=ErrorCode.INVALID_DATA, message=f"Invalid data: {detail}")
        object.__setattr__(self, "detail", detail)


class MappedDomainError(MapperError):
    """A stored row violates a domain invariant; ``error`` is the original."""

    def __init__(self, error: DomainError) -> None:
        super().__init__(code=ErrorCode.MAPPED_DOMAIN_ERROR, message=error.message)
        object.__setattr__(self, "error", error)


class StoreError(DomainError):
    """Base class for storage failures."""


class NotFoundError(StoreError):
    """Raised when the requested record does not exist."""

    def __init__(self, record_id: str) -> None:
        super().__init__(code=ErrorCode.NOT_FOUND, message="Entity not found")
        object.__setattr__(self, "record_id", record_id)


class DatabaseError(StoreError):
    """Raised for any storage failure that is not a constraint violation."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.DATABASE_ERROR, message=f"Database error: {detail}"
        )
        object.__setattr__(self, "detail", detail)


class ConstraintViolationError(StoreError):
    """Raised when storage rejects a write because of an integrity constraint."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.CONSTRAINT_VIOLATION,
            message=f"Constraint violation: {detail}",
        )
        object.__setattr__(self, "detail", detail)
