"""Public routes: health check plus the hotels and rooms resources."""

from fastapi import APIRouter

from hotelrooms.api.routes import hotels, rooms

router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


router.include_router(hotels.router)
router.include_router(rooms.router)
