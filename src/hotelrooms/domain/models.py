"""Hotel and Room records plus the input schemas accepted by the services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError


class Status(str, Enum):
    """Lifecycle flag shared by hotels and rooms. DELETED is terminal."""

    ACTIVE = "ACTIVE"
    DELETED = "DELETED"


def _iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat() if hasattr(value, "isoformat") else str(value)


@dataclass(frozen=True)
class Hotel:
    id: int
    name: str
    address: str
    city: str
    tax_id: int
    tax_verification_digit: int
    room_count_declared: int
    status: Status
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "city": self.city,
            "tax_id": self.tax_id,
            "tax_verification_digit": self.tax_verification_digit,
            "room_count_declared": self.room_count_declared,
            "status": self.status.value,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass(frozen=True)
class Room:
    id: int
    hotel_id: int
    quantity: int
    room_type: str
    accommodation: str
    status: Status
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "hotel_id": self.hotel_id,
            "quantity": self.quantity,
            "room_type": self.room_type,
            "accommodation": self.accommodation,
            "status": self.status.value,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


# ── Input schemas ─────────────────────────────────────────────────────────────

# Column ranges: BIGINT for tax_id and hotel_id, INTEGER for the rest.
BIGINT_MAX = 2**63 - 1
INTEGER_MAX = 2**31 - 1


def _reject_bool(v: Any) -> Any:
    # JSON true/false would otherwise coerce to 1/0
    if isinstance(v, bool):
        raise ValueError("must be a number")
    return v


class HotelInput(BaseModel):
    """Mutable hotel fields. Used for both create and full-replace update.

    Unknown keys (including ``status``) are ignored. Numeric fields accept
    numeric strings but not booleans, and must fit their column.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str
    address: str
    city: str
    tax_id: int = Field(ge=0, le=BIGINT_MAX)
    tax_verification_digit: int = Field(ge=0, le=INTEGER_MAX)
    room_count_declared: int = Field(ge=0, le=INTEGER_MAX)

    @field_validator("name", "address", "city")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if v == "":
            raise ValueError("must not be empty")
        return v

    @field_validator("tax_id", "tax_verification_digit", "room_count_declared", mode="before")
    @classmethod
    def not_bool(cls, v: Any) -> Any:
        return _reject_bool(v)


class RoomInput(BaseModel):
    """Mutable room fields. Used for both create and full-replace update."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    hotel_id: int = Field(ge=1, le=BIGINT_MAX)
    quantity: int = Field(ge=0, le=INTEGER_MAX)
    room_type: str
    accommodation: str

    @field_validator("room_type", "accommodation")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if v == "":
            raise ValueError("must not be empty")
        return v

    @field_validator("hotel_id", "quantity", mode="before")
    @classmethod
    def not_bool(cls, v: Any) -> Any:
        return _reject_bool(v)


InputT = TypeVar("InputT", bound=BaseModel)


def describe_errors(errors: list[Mapping[str, Any]]) -> tuple[str, list[dict]]:
    """Flatten pydantic error entries into a message and a field list."""
    fields = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "invalid value"),
        }
        for err in errors
    ]
    message = "; ".join(f"{f['field']}: {f['message']}" if f["field"] else f["message"] for f in fields)
    return message or "Invalid input", fields


def parse_input(model: type[InputT], data: InputT | Mapping[str, Any]) -> InputT:
    """Validate raw input against ``model``.

    Already-validated instances pass through untouched.

    Raises:
        ValidationError: If a field is missing or malformed.
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        message, fields = describe_errors(exc.errors())
        raise ValidationError(message, fields) from exc
