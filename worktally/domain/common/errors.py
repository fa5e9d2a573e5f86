from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    ALREADY_FINISHED = "already_finished"
    ALREADY_ACTIVE = "already_active"
    NOT_ACTIVE = "not_active"
    INVALID_INPUT = "invalid_input"
    CONFLICT = "conflict"


class DomainError(Exception):
    """Base for errors the UI layer turns into a user-facing answer."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind.value)


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND


class ValidationError(DomainError):
    kind = ErrorKind.INVALID_INPUT


class ConflictError(DomainError):
    kind = ErrorKind.CONFLICT


class AlreadyFinishedError(ConflictError):
    kind = ErrorKind.ALREADY_FINISHED


class AlreadyActiveError(ConflictError):
    kind = ErrorKind.ALREADY_ACTIVE


class NotActiveError(ConflictError):
    kind = ErrorKind.NOT_ACTIVE


class StaleTaskError(ConflictError):
    """Task changed in storage after it was read."""


_BY_KIND = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.ALREADY_FINISHED: AlreadyFinishedError,
    ErrorKind.ALREADY_ACTIVE: AlreadyActiveError,
    ErrorKind.NOT_ACTIVE: NotActiveError,
    ErrorKind.INVALID_INPUT: ValidationError,
    ErrorKind.CONFLICT: ConflictError,
}


def error_for(kind: ErrorKind, message: str = "") -> DomainError:
    return _BY_KIND[kind](message)
