"""Persistence interfaces used by the services.

A ``Store`` opens a unit of work; the unit of work exposes one repository per
entity. Everything done through one unit of work commits or rolls back
together. Implementations live in hotelrooms.infra.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any, Mapping

from .models import Hotel, Room, Status


class HotelRepository(ABC):
    """Hotel persistence.

    Implementations must reject duplicate ``name`` or ``tax_id`` with
    ConflictError regardless of the other row's status.
    """

    @abstractmethod
    def find_by_id(self, hotel_id: int) -> Hotel | None:
        """Return the hotel with this id in any status."""
        raise NotImplementedError

    @abstractmethod
    def list_active(self) -> list[Hotel]:
        """Return hotels whose status is not DELETED, ordered by id."""
        raise NotImplementedError

    @abstractmethod
    def insert(self, fields: Mapping[str, Any]) -> Hotel:
        raise NotImplementedError

    @abstractmethod
    def update(self, hotel_id: int, fields: Mapping[str, Any]) -> Hotel | None:
        """Replace the mutable fields. Returns None if the id is unknown."""
        raise NotImplementedError

    @abstractmethod
    def set_status(self, hotel_id: int, status: Status) -> Hotel | None:
        raise NotImplementedError


class RoomRepository(ABC):
    """Room persistence.

    Implementations must reject a ``hotel_id`` with no hotel row
    (ValidationError) and a second non-deleted room with the same
    (hotel_id, room_type, accommodation) (ConflictError).
    """

    @abstractmethod
    def find_by_id(self, room_id: int) -> Room | None:
        """Return the room with this id in any status."""
        raise NotImplementedError

    @abstractmethod
    def list_active(self, hotel_id: int | None = None) -> list[tuple[Room, Hotel | None]]:
        """Return non-deleted rooms ordered by id, each paired with its hotel.

        The hotel is attached whatever its status; it is None only when the
        reference is broken.
        """
        raise NotImplementedError

    @abstractmethod
    def exists_duplicate(
        self,
        hotel_id: int,
        room_type: str,
        accommodation: str,
        exclude_id: int | None = None,
    ) -> bool:
        """True if another non-deleted room of the hotel has this type and accommodation."""
        raise NotImplementedError

    @abstractmethod
    def insert(self, fields: Mapping[str, Any]) -> Room:
        raise NotImplementedError

    @abstractmethod
    def update(self, room_id: int, fields: Mapping[str, Any]) -> Room | None:
        raise NotImplementedError

    @abstractmethod
    def set_status(self, room_id: int, status: Status) -> Room | None:
        raise NotImplementedError

    @abstractmethod
    def set_status_for_hotel(self, hotel_id: int, status: Status) -> int:
        """Set the status of every room of a hotel. Returns the number of rows changed."""
        raise NotImplementedError

    @abstractmethod
    def sum_quantity(self, hotel_id: int) -> int:
        """Sum ``quantity`` over all rooms of a hotel, deleted ones included."""
        raise NotImplementedError


@dataclass(frozen=True)
class UnitOfWork:
    hotels: HotelRepository
    rooms: RoomRepository


class Store(ABC):
    """Factory of units of work."""

    @abstractmethod
    def begin(self) -> AbstractContextManager[UnitOfWork]:
        """Open a unit of work.

        Commits on normal exit, rolls back and re-raises on exception.
        """
        raise NotImplementedError
