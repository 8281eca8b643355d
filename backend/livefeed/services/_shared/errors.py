"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. Every error belongs to exactly one :class:`ErrorKind`, which fixes
its status code, its stable machine code and the shape of its payload.

The translation to the JSON error envelope is handled by
``livefeed/core/errors.py``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Closed set of failure kinds a caller can observe."""

    UNAUTHENTICATED = (401, "unauthenticated", "Not authenticated.")
    FORBIDDEN = (403, "forbidden", "Not authorized!")
    NOT_FOUND = (404, "not_found", "Resource not found.")
    CONFLICT = (409, "conflict", "Conflict.")
    INVALID_INPUT = (422, "invalid_input", "Validation failed; entered data is incorrect.")
    INTERNAL = (500, "internal", "An error occurred.")

    def __init__(self, status: int, code: str, default_message: str) -> None:
        self.status = status
        self.code = code
        self.default_message = default_message


# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    :param message: Human-readable summary, safe to show to clients.
    :type message: str | None
    :param data: Optional structured payload (only ``InvalidInput`` sets it).
    :type data: list[dict[str, Any]] | None

    Notes
    -----
    - These are *not* HTTP errors; ``kind`` carries the status to use.
    - They can be safely raised from repositories or domain logic.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str | None = None, *, data: list[dict[str, Any]] | None = None) -> None:
        self.message = message or self.kind.default_message
        self.data = data
        super().__init__(self.message)

    @property
    def status(self) -> int:
        return self.kind.status

    @property
    def code(self) -> str:
        return self.kind.code


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class Unauthenticated(ServiceError):
    """Raised when an operation needs an identity and the caller has none."""

    kind = ErrorKind.UNAUTHENTICATED


class Forbidden(ServiceError):
    """Raised when a valid identity does not own the targeted resource."""

    kind = ErrorKind.FORBIDDEN


class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Post").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, key: str | int, message: str | None = None) -> None:
        self.entity = entity
        self.key = key
        super().__init__(message or f"Could not find {entity.lower()}.")


class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    kind = ErrorKind.CONFLICT

    def __init__(self, entity: str, detail: str) -> None:
        self.entity = entity
        self.detail = detail
        super().__init__(detail)


class InvalidInput(ServiceError):
    """
    Raised when validation rejects a request.

    ``data`` always holds one ``{"field", "message"}`` entry per violated rule.
    """

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, violations: list[dict[str, Any]], message: str | None = None) -> None:
        super().__init__(message, data=list(violations))

    @property
    def violations(self) -> list[dict[str, Any]]:
        return self.data or []


class InternalError(ServiceError):
    """Raised when a collaborator (store, blob storage) fails unexpectedly."""

    kind = ErrorKind.INTERNAL


class InvalidToken(Exception):
    """
    Raised by token providers when a token cannot be trusted.

    Expiry, tampering and malformed input all collapse into this one type so
    callers cannot tell them apart. It never reaches clients: the guard turns
    it into an anonymous context.
    """
