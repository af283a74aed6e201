"""Error taxonomy shared by every module.

Each error carries a machine-checkable :class:`ErrorKind` and a human readable
message. The HTTP layer maps kinds to status codes in one place
(:data:`HTTP_STATUS_BY_KIND`), so services never deal with status codes.
"""

from __future__ import annotations

from enum import Enum

from fastapi import status


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    INVALID_CREDENTIAL = "invalid_credential"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    PARTIAL_FAILURE = "partial_failure"


HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_CREDENTIAL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.STORAGE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.PARTIAL_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class DomainError(Exception):
    """Base class for all expected failures."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT
    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class InvalidInputError(DomainError):
    kind = ErrorKind.INVALID_INPUT
    default_message = "Invalid input"


class InvalidCredentialError(DomainError):
    kind = ErrorKind.INVALID_CREDENTIAL
    default_message = "Invalid password"


class UnauthenticatedError(DomainError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Unauthorized! No token provided."


class ForbiddenError(DomainError):
    kind = ErrorKind.FORBIDDEN
    default_message = "You are not allowed to perform this action"


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"


class ConflictError(DomainError):
    kind = ErrorKind.CONFLICT
    default_message = "Resource already exists"


class StorageUnavailableError(DomainError):
    """Repository or blob store failure. Safe to retry."""

    kind = ErrorKind.STORAGE_UNAVAILABLE
    default_message = "Storage is temporarily unavailable"


class PartialDeletionError(DomainError):
    """Only one side of a two-step deletion succeeded."""

    kind = ErrorKind.PARTIAL_FAILURE
    default_message = "Deletion only partially completed"


__all__ = [
    "ErrorKind",
    "HTTP_STATUS_BY_KIND",
    "DomainError",
    "InvalidInputError",
    "InvalidCredentialError",
    "UnauthenticatedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "StorageUnavailableError",
    "PartialDeletionError",
]
