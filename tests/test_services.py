"""Tests for HotelService and RoomService against the in-memory store."""

from __future__ import annotations

import pytest

from hotelrooms.domain.errors import (
    DUPLICATE_ROOM,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from hotelrooms.domain.hotels import HotelService
from hotelrooms.domain.models import HotelInput, Status
from hotelrooms.domain.rooms import RoomService


@pytest.fixture
def hotels(store):
    return HotelService(store)


@pytest.fixture
def rooms(store):
    return RoomService(store)


class TestHotelService:
    def test_create_from_mapping(self, hotels, hotel_payload):
        hotel = hotels.create(hotel_payload())

        assert hotel.id == 1
        assert hotel.status == Status.ACTIVE

    def test_create_from_model(self, hotels, hotel_payload):
        hotel = hotels.create(HotelInput(**hotel_payload()))

        assert hotel.name == "Plaza"

    def test_create_strips_strings(self, hotels, hotel_payload):
        hotel = hotels.create(hotel_payload(name="  Plaza  "))

        assert hotel.name == "Plaza"

    def test_create_missing_field_raises_validation_error(self, hotels):
        with pytest.raises(ValidationError) as exc_info:
            hotels.create({"name": "Plaza"})

        fields = {f["field"] for f in exc_info.value.fields}
        assert {"address", "city", "tax_id"} <= fields

    def test_create_non_mapping_raises_validation_error(self, hotels):
        with pytest.raises(ValidationError):
            hotels.create(None)

    def test_update_with_boolean_tax_id_raises_validation_error(self, hotels, hotel_payload):
        created = hotels.create(hotel_payload())

        with pytest.raises(ValidationError) as exc_info:
            hotels.update(created.id, hotel_payload(tax_id=True))

        assert [f["field"] for f in exc_info.value.fields] == ["tax_id"]
        assert hotels.get(created.id).tax_id == 900111

    def test_round_trip_update_then_get(self, hotels, hotel_payload):
        created = hotels.create(hotel_payload())

        hotels.update(created.id, hotel_payload(address="New address 1"))
        fetched = hotels.get(created.id)

        assert fetched.address == "New address 1"
        assert fetched.status == Status.ACTIVE

    def test_update_deleted_hotel_keeps_it_deleted(self, hotels, hotel_payload):
        created = hotels.create(hotel_payload())
        hotels.soft_delete(created.id)

        updated = hotels.update(created.id, hotel_payload(city="Cali"))

        assert updated.city == "Cali"
        assert updated.status == Status.DELETED

    def test_update_unknown_checked_before_input(self, hotels):
        with pytest.raises(NotFoundError):
            hotels.update(99, {})

    def test_duplicate_tax_id_raises_conflict(self, hotels, hotel_payload):
        hotels.create(hotel_payload())

        with pytest.raises(ConflictError):
            hotels.create(hotel_payload(name="Other"))

    def test_soft_delete_then_get_is_not_found(self, hotels, hotel_payload):
        created = hotels.create(hotel_payload())

        deleted = hotels.soft_delete(created.id)

        assert deleted.status == Status.DELETED
        assert hotels.list() == []
        with pytest.raises(NotFoundError):
            hotels.get(created.id)

    def test_soft_delete_cascades_to_rooms(self, hotels, rooms, hotel_payload, room_payload):
        hotel = hotels.create(hotel_payload())
        room = rooms.create(room_payload(hotel_id=hotel.id))

        hotels.soft_delete(hotel.id)

        with pytest.raises(NotFoundError):
            rooms.get(room.id)
        assert rooms.list() == []


class TestRoomService:
    @pytest.fixture
    def hotel(self, hotels, hotel_payload):
        return hotels.create(hotel_payload())

    def test_duplicate_probe(self, rooms, hotel, room_payload):
        rooms.create(room_payload(hotel_id=hotel.id))

        with pytest.raises(ConflictError, match=DUPLICATE_ROOM):
            rooms.create(room_payload(hotel_id=hotel.id))

    def test_duplicate_of_deleted_room_allowed(self, rooms, hotel, room_payload):
        first = rooms.create(room_payload(hotel_id=hotel.id))
        rooms.soft_delete(first.id)

        second = rooms.create(room_payload(hotel_id=hotel.id))

        assert second.id != first.id
        assert second.status == Status.ACTIVE

    def test_unknown_hotel_raises_validation_error(self, rooms, room_payload):
        with pytest.raises(ValidationError):
            rooms.create(room_payload(hotel_id=404))

    def test_blank_accommodation_raises_validation_error(self, rooms, hotel, room_payload):
        with pytest.raises(ValidationError):
            rooms.create(room_payload(hotel_id=hotel.id, accommodation=""))

    def test_update_moves_room_to_other_hotel(self, hotels, rooms, hotel, hotel_payload, room_payload):
        other = hotels.create(hotel_payload(name="Other", tax_id=555))
        room = rooms.create(room_payload(hotel_id=hotel.id))

        moved = rooms.update(room.id, room_payload(hotel_id=other.id))

        assert moved.hotel_id == other.id

    def test_list_pairs_room_with_hotel(self, rooms, hotel, room_payload):
        rooms.create(room_payload(hotel_id=hotel.id))

        listed = rooms.list()

        assert len(listed) == 1
        room, joined = listed[0]
        assert room.hotel_id == hotel.id
        assert joined == hotel

    def test_total_counts_deleted_rooms(self, rooms, hotel, room_payload):
        rooms.create(room_payload(hotel_id=hotel.id, quantity=3))
        deleted = rooms.create(room_payload(hotel_id=hotel.id, room_type="Standard", quantity=7))
        rooms.soft_delete(deleted.id)

        assert rooms.total_quantity_for_hotel(hotel.id) == 10

    def test_total_for_unknown_hotel_raises(self, rooms):
        with pytest.raises(NotFoundError, match="Hotel not found"):
            rooms.total_quantity_for_hotel(12)

    def test_total_zero_without_rooms(self, rooms, hotel):
        assert rooms.total_quantity_for_hotel(hotel.id) == 0
