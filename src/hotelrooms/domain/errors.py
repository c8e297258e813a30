"""Domain error taxonomy.

Services and repositories raise these; the API layer maps each kind to a
single HTTP status (see hotelrooms.api.errors).
"""

from __future__ import annotations

DUPLICATE_HOTEL_NAME = "A hotel with this name already exists."
DUPLICATE_HOTEL_TAX_ID = "A hotel with this tax ID already exists."
DUPLICATE_ROOM = "A room with the same type and accommodation already exists for this hotel."
UNKNOWN_HOTEL_REFERENCE = "hotel_id does not reference an existing hotel"


class DomainError(Exception):
    """Base class for errors raised by the service layer."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Raised when input is missing, malformed or references a missing row."""

    def __init__(self, message: str, fields: list[dict] | None = None) -> None:
        self.fields = fields or []
        super().__init__(message)


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness rule."""


class NotFoundError(DomainError):
    """Raised when an id lookup misses."""


class StorageError(DomainError):
    """Raised when the persistence layer fails for a reason not covered above."""
