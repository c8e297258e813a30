"""Hotel operations.

Name and tax ID uniqueness is not probed here: the store rejects the write
and the resulting ConflictError propagates unchanged.

Soft delete flips the hotel to DELETED and, in the same unit of work, flags
every room of the hotel DELETED too. Rows are never physically removed.
"""

from __future__ import annotations

from typing import Any, Mapping

from hotelrooms.observability.logging import get_logger

from .errors import NotFoundError
from .models import Hotel, HotelInput, Status, parse_input
from .repository import Store

logger = get_logger(__name__)

HOTEL_NOT_FOUND = "Hotel not found"


class HotelService:
    def __init__(self, store: Store) -> None:
        self._store = store

    def create(self, data: HotelInput | Mapping[str, Any]) -> Hotel:
        """Create an ACTIVE hotel.

        Raises:
            ValidationError: If a required field is missing or malformed.
            ConflictError: If the name or tax ID is already taken.
        """
        payload = parse_input(HotelInput, data)
        with self._store.begin() as uow:
            hotel = uow.hotels.insert({**payload.model_dump(), "status": Status.ACTIVE})

        logger.info("hotel created", extra={"extra_fields": {"hotel_id": hotel.id}})
        return hotel

    def update(self, hotel_id: int, data: HotelInput | Mapping[str, Any]) -> Hotel:
        """Replace every mutable field of a hotel. Status is left as it is.

        Raises:
            NotFoundError: If no hotel has this id.
            ValidationError: If a required field is missing or malformed.
            ConflictError: If the new name or tax ID belongs to another hotel.
        """
        with self._store.begin() as uow:
            if uow.hotels.find_by_id(hotel_id) is None:
                raise NotFoundError(HOTEL_NOT_FOUND)
            payload = parse_input(HotelInput, data)
            hotel = uow.hotels.update(hotel_id, payload.model_dump())
            if hotel is None:
                raise NotFoundError(HOTEL_NOT_FOUND)

        logger.info("hotel updated", extra={"extra_fields": {"hotel_id": hotel_id}})
        return hotel

    def list(self) -> list[Hotel]:
        with self._store.begin() as uow:
            return uow.hotels.list_active()

    def get(self, hotel_id: int) -> Hotel:
        """Return a non-deleted hotel.

        Raises:
            NotFoundError: If the hotel is missing or DELETED.
        """
        with self._store.begin() as uow:
            hotel = uow.hotels.find_by_id(hotel_id)
        if hotel is None or hotel.status == Status.DELETED:
            raise NotFoundError(HOTEL_NOT_FOUND)
        return hotel

    def soft_delete(self, hotel_id: int) -> Hotel:
        """Flag a hotel and all of its rooms DELETED.

        Returns the hotel as it is after the change.

        Raises:
            NotFoundError: If no hotel has this id.
        """
        with self._store.begin() as uow:
            if uow.hotels.find_by_id(hotel_id) is None:
                raise NotFoundError(HOTEL_NOT_FOUND)
            hotel = uow.hotels.set_status(hotel_id, Status.DELETED)
            rooms_deleted = uow.rooms.set_status_for_hotel(hotel_id, Status.DELETED)

        logger.info(
            "hotel soft-deleted",
            extra={"extra_fields": {"hotel_id": hotel_id, "rooms_deleted": rooms_deleted}},
        )
        return hotel
