"""Translation of psycopg2 errors into domain errors."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Mapping

import psycopg2
from psycopg2 import errors as pg_errors

from hotelrooms.domain.errors import (
    DUPLICATE_HOTEL_NAME,
    DUPLICATE_HOTEL_TAX_ID,
    DUPLICATE_ROOM,
    UNKNOWN_HOTEL_REFERENCE,
    ConflictError,
    StorageError,
    ValidationError,
)

# Constraint / index names from migrations/sql
UNIQUE_CONSTRAINT_MESSAGES: Mapping[str, str] = {
    "uq_hotels_name": DUPLICATE_HOTEL_NAME,
    "uq_hotels_tax_id": DUPLICATE_HOTEL_TAX_ID,
    "uq_rooms_hotel_type_accommodation": DUPLICATE_ROOM,
}

GENERIC_DUPLICATE = "Duplicate value violates a unique constraint"


def _constraint_name(exc: psycopg2.Error) -> str | None:
    diag = getattr(exc, "diag", None)
    return getattr(diag, "constraint_name", None)


@contextmanager
def translate_pg_errors() -> Iterator[None]:
    """Re-raise psycopg2 errors from the block as domain errors.

    UniqueViolation → ConflictError, ForeignKeyViolation → ValidationError,
    any other psycopg2.Error → StorageError.
    """
    try:
        yield
    except pg_errors.UniqueViolation as exc:
        message = UNIQUE_CONSTRAINT_MESSAGES.get(_constraint_name(exc) or "", GENERIC_DUPLICATE)
        raise ConflictError(message) from exc
    except pg_errors.ForeignKeyViolation as exc:
        raise ValidationError(UNKNOWN_HOTEL_REFERENCE) from exc
    except psycopg2.Error as exc:
        raise StorageError(str(exc).strip() or type(exc).__name__) from exc
