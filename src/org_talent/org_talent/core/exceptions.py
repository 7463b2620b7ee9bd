from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or project does not exist."""


class ConflictError(DomainError):
    """Raised when a single-holder project role is already taken.

    Carries the incumbent so callers can build a human-readable message.
    """

    def __init__(self, message: str, *, incumbent_id: Optional[str] = None, incumbent_name: Optional[str] = None):
        super().__init__(message)
        self.incumbent_id = incumbent_id
        self.incumbent_name = incumbent_name
