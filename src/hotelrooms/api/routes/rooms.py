"""Rooms endpoints.

POST   /rooms                          → create        (201)
PUT    /rooms/{room_id}                → full update
GET    /rooms[?hotel_id=...]           → list non-deleted rooms with their hotel
GET    /rooms/{room_id}                → fetch one non-deleted room
DELETE /rooms/{room_id}                → soft-delete
GET    /rooms/hotel/{hotel_id}/total   → summed quantity of the hotel's rooms
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Path, Query

from hotelrooms.api.deps import get_store
from hotelrooms.domain.models import RoomInput
from hotelrooms.domain.repository import Store
from hotelrooms.domain.rooms import RoomService

router = APIRouter(prefix="/rooms", tags=["rooms"])


def get_room_service(store: Store = Depends(get_store)) -> RoomService:
    return RoomService(store)


# ── POST /rooms ───────────────────────────────────────────────────────────────


@router.post("", status_code=201)
def create_room(
    body: RoomInput,
    service: RoomService = Depends(get_room_service),
) -> dict:
    """Create a room with status ACTIVE.

    Returns 400 if the hotel already has a non-deleted room with the same
    room_type and accommodation, 422 if hotel_id matches no hotel.
    """
    room = service.create(body)
    return {"message": "Room created successfully", "data": room.to_dict()}


# ── PUT /rooms/{room_id} ──────────────────────────────────────────────────────


@router.put("/{room_id}")
def update_room(
    room_id: int = Path(..., description="Room ID"),
    body: dict = Body(...),
    service: RoomService = Depends(get_room_service),
) -> dict:
    """Replace all mutable fields of a room; 404 on an unknown id comes before body checks."""
    room = service.update(room_id, body)
    return {"message": "Room updated successfully", "data": room.to_dict()}


# ── GET /rooms ────────────────────────────────────────────────────────────────


@router.get("")
def list_rooms(
    hotel_id: int | None = Query(None, description="Only rooms of this hotel"),
    service: RoomService = Depends(get_room_service),
) -> dict:
    """List non-deleted rooms.

    Each room carries its hotel under "hotel", whatever the hotel's status
    (null only if the hotel row is missing).
    """
    return {
        "data": [
            {**room.to_dict(), "hotel": hotel.to_dict() if hotel else None}
            for room, hotel in service.list(hotel_id=hotel_id)
        ]
    }


# ── GET /rooms/hotel/{hotel_id}/total ─────────────────────────────────────────


@router.get("/hotel/{hotel_id}/total")
def total_rooms_for_hotel(
    hotel_id: int = Path(..., description="Hotel ID"),
    service: RoomService = Depends(get_room_service),
) -> dict:
    """Sum of quantity over every room recorded for the hotel.

    Deleted rooms are included. Returns 404 only when no hotel row exists.
    """
    return {"total": service.total_quantity_for_hotel(hotel_id)}


# ── GET /rooms/{room_id} ──────────────────────────────────────────────────────


@router.get("/{room_id}")
def get_room(
    room_id: int = Path(..., description="Room ID"),
    service: RoomService = Depends(get_room_service),
) -> dict:
    return {"data": service.get(room_id).to_dict()}


# ── DELETE /rooms/{room_id} ───────────────────────────────────────────────────


@router.delete("/{room_id}")
def delete_room(
    room_id: int = Path(..., description="Room ID"),
    service: RoomService = Depends(get_room_service),
) -> dict:
    room = service.soft_delete(room_id)
    return {"message": "Room deleted successfully", "data": room.to_dict()}
