"""FastAPI dependencies shared by the routes."""

from __future__ import annotations

import os

from hotelrooms.domain.repository import Store

STORAGE_BACKENDS = ("postgres", "memory")

# Module-level store (singleton), built on first use
_store: Store | None = None


def build_store(backend: str) -> Store:
    """Build the store named by ``backend``.

    Raises:
        RuntimeError: If the backend name is unknown.
    """
    if backend == "postgres":
        from hotelrooms.infra.pg_store import PgStore

        return PgStore()
    if backend == "memory":
        from hotelrooms.infra.repositories.memory_repository import MemoryStore

        return MemoryStore()
    raise RuntimeError(
        f"Unknown STORAGE_BACKEND {backend!r}; expected one of {', '.join(STORAGE_BACKENDS)}"
    )


def get_store() -> Store:
    """Get the configured store (override in tests via app.dependency_overrides)."""
    global _store
    if _store is None:
        _store = build_store(os.environ.get("STORAGE_BACKEND", "postgres").strip().lower())
    return _store


def reset_store() -> None:
    """Forget the cached store so the next call re-reads STORAGE_BACKEND."""
    global _store
    _store = None
