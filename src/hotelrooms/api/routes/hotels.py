"""Hotels endpoints.

POST   /hotels              → create        (201)
PUT    /hotels/{hotel_id}   → full update
GET    /hotels              → list non-deleted hotels
GET    /hotels/{hotel_id}   → fetch one non-deleted hotel
DELETE /hotels/{hotel_id}   → soft-delete (hotel and its rooms flagged DELETED)

Errors are raised as domain errors and rendered by hotelrooms.api.errors.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Path

from hotelrooms.api.deps import get_store
from hotelrooms.domain.hotels import HotelService
from hotelrooms.domain.models import HotelInput
from hotelrooms.domain.repository import Store

router = APIRouter(prefix="/hotels", tags=["hotels"])


def get_hotel_service(store: Store = Depends(get_store)) -> HotelService:
    return HotelService(store)


# ── POST /hotels ──────────────────────────────────────────────────────────────


@router.post("", status_code=201)
def create_hotel(
    body: HotelInput,
    service: HotelService = Depends(get_hotel_service),
) -> dict:
    """Create a hotel with status ACTIVE.

    Returns 400 if the name or tax ID is already used by any hotel,
    deleted ones included.
    """
    hotel = service.create(body)
    return {"message": "Hotel created successfully", "data": hotel.to_dict()}


# ── PUT /hotels/{hotel_id} ────────────────────────────────────────────────────


@router.put("/{hotel_id}")
def update_hotel(
    hotel_id: int = Path(..., description="Hotel ID"),
    body: dict = Body(...),
    service: HotelService = Depends(get_hotel_service),
) -> dict:
    """Replace all mutable fields of a hotel. A status in the body is ignored.

    The body is validated after the id lookup, so an unknown id answers 404
    whatever the body holds.
    """
    hotel = service.update(hotel_id, body)
    return {"message": "Hotel updated successfully", "data": hotel.to_dict()}


# ── GET /hotels ───────────────────────────────────────────────────────────────


@router.get("")
def list_hotels(service: HotelService = Depends(get_hotel_service)) -> dict:
    return {"data": [hotel.to_dict() for hotel in service.list()]}


# ── GET /hotels/{hotel_id} ────────────────────────────────────────────────────


@router.get("/{hotel_id}")
def get_hotel(
    hotel_id: int = Path(..., description="Hotel ID"),
    service: HotelService = Depends(get_hotel_service),
) -> dict:
    """Fetch a hotel. Soft-deleted hotels answer 404."""
    return {"data": service.get(hotel_id).to_dict()}


# ── DELETE /hotels/{hotel_id} ─────────────────────────────────────────────────


@router.delete("/{hotel_id}")
def delete_hotel(
    hotel_id: int = Path(..., description="Hotel ID"),
    service: HotelService = Depends(get_hotel_service),
) -> dict:
    """Soft-delete a hotel and every room it owns.

    The row is kept and returned with status DELETED.
    """
    hotel = service.soft_delete(hotel_id)
    return {"message": "Hotel deleted successfully", "data": hotel.to_dict()}
