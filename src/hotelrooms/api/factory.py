"""FastAPI application factory."""

from fastapi import FastAPI, Request, Response

from hotelrooms.domain.repository import Store
from hotelrooms.observability.correlation import CORRELATION_ID_HEADER, correlation_scope

from .deps import get_store
from .errors import register_error_handlers
from .routers import public


def create_app(store: Store | None = None) -> FastAPI:
    """Create the FastAPI app.

    Args:
        store: Store to serve requests from. If None, the store is chosen
               from STORAGE_BACKEND on first request (see api.deps).

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Hotel Rooms API",
        docs_url=None,
        redoc_url=None,
    )

    # Correlation ID middleware
    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_ID_HEADER)) as cid:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response

    register_error_handlers(app)
    app.include_router(public.router)

    if store is not None:
        app.dependency_overrides[get_store] = lambda: store

    return app
