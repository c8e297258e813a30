"""In-process store with the same constraints as the PostgreSQL schema.

Selected with STORAGE_BACKEND=memory and used by the test-suite. Units of
work are serialised by a lock; on exception the state captured at
``begin()`` is put back, so a failed unit of work leaves nothing behind.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Iterator, Mapping

from hotelrooms.domain.errors import (
    DUPLICATE_HOTEL_NAME,
    DUPLICATE_HOTEL_TAX_ID,
    DUPLICATE_ROOM,
    UNKNOWN_HOTEL_REFERENCE,
    ConflictError,
    ValidationError,
)
from hotelrooms.domain.models import Hotel, Room, Status
from hotelrooms.domain.repository import HotelRepository, RoomRepository, Store, UnitOfWork


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _State:
    hotels: dict[int, Hotel] = field(default_factory=dict)
    rooms: dict[int, Room] = field(default_factory=dict)
    next_hotel_id: int = 1
    next_room_id: int = 1

    def copy(self) -> _State:
        # Records are frozen, so copying the dicts is enough.
        return _State(
            hotels=dict(self.hotels),
            rooms=dict(self.rooms),
            next_hotel_id=self.next_hotel_id,
            next_room_id=self.next_room_id,
        )


class MemoryHotelRepository(HotelRepository):
    def __init__(self, state: _State) -> None:
        self._state = state

    def _check_unique(self, name: str, tax_id: int, exclude_id: int | None = None) -> None:
        # Mirrors uq_hotels_name / uq_hotels_tax_id: every status counts.
        for hotel in self._state.hotels.values():
            if hotel.id == exclude_id:
                continue
            if hotel.name == name:
                raise ConflictError(DUPLICATE_HOTEL_NAME)
            if hotel.tax_id == tax_id:
                raise ConflictError(DUPLICATE_HOTEL_TAX_ID)

    def find_by_id(self, hotel_id: int) -> Hotel | None:
        return self._state.hotels.get(hotel_id)

    def list_active(self) -> list[Hotel]:
        return [
            hotel
            for _, hotel in sorted(self._state.hotels.items())
            if hotel.status != Status.DELETED
        ]

    def insert(self, fields: Mapping[str, Any]) -> Hotel:
        self._check_unique(fields["name"], fields["tax_id"])
        now = _now()
        hotel = Hotel(
            id=self._state.next_hotel_id,
            name=fields["name"],
            address=fields["address"],
            city=fields["city"],
            tax_id=fields["tax_id"],
            tax_verification_digit=fields["tax_verification_digit"],
            room_count_declared=fields["room_count_declared"],
            status=Status(fields.get("status", Status.ACTIVE)),
            created_at=now,
            updated_at=now,
        )
        self._state.hotels[hotel.id] = hotel
        self._state.next_hotel_id += 1
        return hotel

    def update(self, hotel_id: int, fields: Mapping[str, Any]) -> Hotel | None:
        current = self._state.hotels.get(hotel_id)
        if current is None:
            return None
        self._check_unique(fields["name"], fields["tax_id"], exclude_id=hotel_id)
        hotel = replace(
            current,
            name=fields["name"],
            address=fields["address"],
            city=fields["city"],
            tax_id=fields["tax_id"],
            tax_verification_digit=fields["tax_verification_digit"],
            room_count_declared=fields["room_count_declared"],
            updated_at=_now(),
        )
        self._state.hotels[hotel_id] = hotel
        return hotel

    def set_status(self, hotel_id: int, status: Status) -> Hotel | None:
        current = self._state.hotels.get(hotel_id)
        if current is None:
            return None
        hotel = replace(current, status=status, updated_at=_now())
        self._state.hotels[hotel_id] = hotel
        return hotel


class MemoryRoomRepository(RoomRepository):
    def __init__(self, state: _State) -> None:
        self._state = state

    def _check_constraints(self, room: Room) -> None:
        if room.hotel_id not in self._state.hotels:
            raise ValidationError(UNKNOWN_HOTEL_REFERENCE)
        # Mirrors the partial index: only non-deleted rows take part.
        if room.status != Status.DELETED and self.exists_duplicate(
            room.hotel_id, room.room_type, room.accommodation, exclude_id=room.id
        ):
            raise ConflictError(DUPLICATE_ROOM)

    def find_by_id(self, room_id: int) -> Room | None:
        return self._state.rooms.get(room_id)

    def list_active(self, hotel_id: int | None = None) -> list[tuple[Room, Hotel | None]]:
        return [
            (room, self._state.hotels.get(room.hotel_id))
            for _, room in sorted(self._state.rooms.items())
            if room.status != Status.DELETED and (hotel_id is None or room.hotel_id == hotel_id)
        ]

    def exists_duplicate(
        self,
        hotel_id: int,
        room_type: str,
        accommodation: str,
        exclude_id: int | None = None,
    ) -> bool:
        return any(
            room.hotel_id == hotel_id
            and room.room_type == room_type
            and room.accommodation == accommodation
            and room.status != Status.DELETED
            and room.id != exclude_id
            for room in self._state.rooms.values()
        )

    def insert(self, fields: Mapping[str, Any]) -> Room:
        now = _now()
        room = Room(
            id=self._state.next_room_id,
            hotel_id=fields["hotel_id"],
            quantity=fields["quantity"],
            room_type=fields["room_type"],
            accommodation=fields["accommodation"],
            status=Status(fields.get("status", Status.ACTIVE)),
            created_at=now,
            updated_at=now,
        )
        self._check_constraints(room)
        self._state.rooms[room.id] = room
        self._state.next_room_id += 1
        return room

    def update(self, room_id: int, fields: Mapping[str, Any]) -> Room | None:
        current = self._state.rooms.get(room_id)
        if current is None:
            return None
        room = replace(
            current,
            hotel_id=fields["hotel_id"],
            quantity=fields["quantity"],
            room_type=fields["room_type"],
            accommodation=fields["accommodation"],
            updated_at=_now(),
        )
        self._check_constraints(room)
        self._state.rooms[room_id] = room
        return room

    def set_status(self, room_id: int, status: Status) -> Room | None:
        current = self._state.rooms.get(room_id)
        if current is None:
            return None
        room = replace(current, status=status, updated_at=_now())
        self._state.rooms[room_id] = room
        return room

    def set_status_for_hotel(self, hotel_id: int, status: Status) -> int:
        changed = 0
        for room_id, room in list(self._state.rooms.items()):
            if room.hotel_id == hotel_id and room.status != status:
                self._state.rooms[room_id] = replace(room, status=status, updated_at=_now())
                changed += 1
        return changed

    def sum_quantity(self, hotel_id: int) -> int:
        return sum(room.quantity for room in self._state.rooms.values() if room.hotel_id == hotel_id)


class MemoryStore(Store):
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._state = _State()

    @contextmanager
    def begin(self) -> Iterator[UnitOfWork]:
        with self._lock:
            snapshot = self._state.copy()
            try:
                yield UnitOfWork(
                    hotels=MemoryHotelRepository(self._state),
                    rooms=MemoryRoomRepository(self._state),
                )
            except Exception:
                self._state = snapshot
                raise
