"""PostgreSQL-backed store: one unit of work per transaction."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import psycopg2

from hotelrooms.domain.errors import StorageError
from hotelrooms.domain.repository import Store, UnitOfWork

from .db import txn
from .repositories.hotels_repository import PgHotelRepository
from .repositories.rooms_repository import PgRoomRepository


class PgStore(Store):
    """Opens a fresh connection per unit of work (see infra.db.txn)."""

    @contextmanager
    def begin(self) -> Iterator[UnitOfWork]:
        try:
            with txn() as cur:
                yield UnitOfWork(
                    hotels=PgHotelRepository(cur),
                    rooms=PgRoomRepository(cur),
                )
        except psycopg2.Error as exc:
            # Connection and commit failures; statement errors are translated
            # inside the repositories.
            raise StorageError(str(exc).strip() or type(exc).__name__) from exc
