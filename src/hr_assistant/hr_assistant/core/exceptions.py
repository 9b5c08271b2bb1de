from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``field_errors`` maps a form field name to its messages. Errors that are
    not tied to a single field go under ``"form"``.
    """

    def __init__(self, message: str, field_errors: Optional[dict[str, list[str]]] = None):
        super().__init__(message)
        self.field_errors = dict(field_errors or {})


class NotFoundError(DomainError):
    """Raised when a referenced employee/record does not exist."""


class ConflictError(DomainError):
    """Raised when a conditional write lost against a concurrent update."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
