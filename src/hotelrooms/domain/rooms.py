"""Room operations.

Within one hotel a (room_type, accommodation) pair may appear on at most one
non-deleted room. The service probes for a duplicate before writing; the
store's partial unique index rejects whatever slips past the probe under
concurrency, with the same ConflictError.

Room creation does not look the hotel up first. A dangling hotel_id is
rejected by the store's foreign key as a ValidationError.
"""

from __future__ import annotations

from typing import Any, Mapping

from hotelrooms.observability.logging import get_logger

from .errors import DUPLICATE_ROOM, ConflictError, NotFoundError
from .hotels import HOTEL_NOT_FOUND
from .models import Hotel, Room, RoomInput, Status, parse_input
from .repository import Store, UnitOfWork

logger = get_logger(__name__)

ROOM_NOT_FOUND = "Room not found"


class RoomService:
    def __init__(self, store: Store) -> None:
        self._store = store

    @staticmethod
    def _guard_duplicate(uow: UnitOfWork, payload: RoomInput, exclude_id: int | None = None) -> None:
        if uow.rooms.exists_duplicate(
            payload.hotel_id,
            payload.room_type,
            payload.accommodation,
            exclude_id=exclude_id,
        ):
            raise ConflictError(DUPLICATE_ROOM)

    def create(self, data: RoomInput | Mapping[str, Any]) -> Room:
        """Create an ACTIVE room.

        Raises:
            ValidationError: On malformed input or an unknown hotel_id.
            ConflictError: If the hotel already has a non-deleted room with
                the same type and accommodation.
        """
        payload = parse_input(RoomInput, data)
        with self._store.begin() as uow:
            self._guard_duplicate(uow, payload)
            room = uow.rooms.insert({**payload.model_dump(), "status": Status.ACTIVE})

        logger.info(
            "room created",
            extra={"extra_fields": {"room_id": room.id, "hotel_id": room.hotel_id}},
        )
        return room

    def update(self, room_id: int, data: RoomInput | Mapping[str, Any]) -> Room:
        """Replace every mutable field of a room. Status is left as it is.

        Raises:
            NotFoundError: If no room has this id.
            ValidationError: On malformed input or an unknown hotel_id.
            ConflictError: If another non-deleted room of the hotel already
                has the same type and accommodation.
        """
        with self._store.begin() as uow:
            if uow.rooms.find_by_id(room_id) is None:
                raise NotFoundError(ROOM_NOT_FOUND)
            payload = parse_input(RoomInput, data)
            self._guard_duplicate(uow, payload, exclude_id=room_id)
            room = uow.rooms.update(room_id, payload.model_dump())
            if room is None:
                raise NotFoundError(ROOM_NOT_FOUND)

        logger.info(
            "room updated",
            extra={"extra_fields": {"room_id": room_id, "hotel_id": room.hotel_id}},
        )
        return room

    def list(self, hotel_id: int | None = None) -> list[tuple[Room, Hotel | None]]:
        """List non-deleted rooms, each paired with its hotel.

        The hotel is attached as stored, even when it is itself DELETED.
        """
        with self._store.begin() as uow:
            return uow.rooms.list_active(hotel_id=hotel_id)

    def get(self, room_id: int) -> Room:
        with self._store.begin() as uow:
            room = uow.rooms.find_by_id(room_id)
        if room is None or room.status == Status.DELETED:
            raise NotFoundError(ROOM_NOT_FOUND)
        return room

    def soft_delete(self, room_id: int) -> Room:
        with self._store.begin() as uow:
            if uow.rooms.find_by_id(room_id) is None:
                raise NotFoundError(ROOM_NOT_FOUND)
            room = uow.rooms.set_status(room_id, Status.DELETED)

        logger.info("room soft-deleted", extra={"extra_fields": {"room_id": room_id}})
        return room

    def total_quantity_for_hotel(self, hotel_id: int) -> int:
        """Sum the quantity of every room recorded for a hotel.

        Deleted rooms are counted, and the hotel's own status is not checked.

        Raises:
            NotFoundError: If no hotel row has this id.
        """
        with self._store.begin() as uow:
            if uow.hotels.find_by_id(hotel_id) is None:
                raise NotFoundError(HOTEL_NOT_FOUND)
            return uow.rooms.sum_quantity(hotel_id)
