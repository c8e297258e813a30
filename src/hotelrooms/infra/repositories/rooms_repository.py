"""Rooms repository - PostgreSQL implementation.

Uses raw SQL with psycopg2 (no ORM); the caller owns the transaction.

Constraints relied upon (migrations/sql/002_rooms.sql):
  rooms.hotel_id → hotels.id                      (ForeignKeyViolation → ValidationError)
  uq_rooms_hotel_type_accommodation, partial on
  status <> 'DELETED'                             (UniqueViolation → ConflictError)
"""

from __future__ import annotations

from typing import Any, Mapping

from psycopg2.extensions import cursor as PgCursor

from hotelrooms.domain.models import Hotel, Room, Status
from hotelrooms.domain.repository import RoomRepository
from hotelrooms.infra.db import fetchall, fetchone

from .hotels_repository import row_to_hotel
from .pg_errors import translate_pg_errors

ROOM_COLUMNS = "id, hotel_id, quantity, room_type, accommodation, status, created_at, updated_at"

_JOINED_COLUMNS = (
    "r.id, r.hotel_id, r.quantity, r.room_type, r.accommodation, r.status, "
    "r.created_at, r.updated_at, "
    "h.id, h.name, h.address, h.city, h.tax_id, h.tax_verification_digit, "
    "h.room_count_declared, h.status, h.created_at, h.updated_at"
)


def row_to_room(row: tuple) -> Room:
    return Room(
        id=row[0],
        hotel_id=row[1],
        quantity=row[2],
        room_type=row[3],
        accommodation=row[4],
        status=Status(row[5]),
        created_at=row[6],
        updated_at=row[7],
    )


class PgRoomRepository(RoomRepository):
    def __init__(self, cur: PgCursor) -> None:
        self._cur = cur

    def find_by_id(self, room_id: int) -> Room | None:
        with translate_pg_errors():
            row = fetchone(
                self._cur,
                f"SELECT {ROOM_COLUMNS} FROM rooms WHERE id = %s",
                (room_id,),
            )
        return row_to_room(row) if row else None

    def list_active(self, hotel_id: int | None = None) -> list[tuple[Room, Hotel | None]]:
        conditions = ["r.status <> %s"]
        params: list = [Status.DELETED.value]
        if hotel_id is not None:
            conditions.append("r.hotel_id = %s")
            params.append(hotel_id)

        with translate_pg_errors():
            rows = fetchall(
                self._cur,
                f"""
                SELECT {_JOINED_COLUMNS}
                FROM rooms r
                LEFT JOIN hotels h ON h.id = r.hotel_id
                WHERE {" AND ".join(conditions)}
                ORDER BY r.id
                """,  # noqa: S608 – conditions are fixed strings
                params,
            )

        return [
            (row_to_room(row[:8]), row_to_hotel(row[8:]) if row[8] is not None else None)
            for row in rows
        ]

    def exists_duplicate(
        self,
        hotel_id: int,
        room_type: str,
        accommodation: str,
        exclude_id: int | None = None,
    ) -> bool:
        conditions = [
            "hotel_id = %s",
            "room_type = %s",
            "accommodation = %s",
            "status <> %s",
        ]
        params: list = [hotel_id, room_type, accommodation, Status.DELETED.value]
        if exclude_id is not None:
            conditions.append("id <> %s")
            params.append(exclude_id)

        with translate_pg_errors():
            row = fetchone(
                self._cur,
                f"SELECT EXISTS (SELECT 1 FROM rooms WHERE {' AND '.join(conditions)})",  # noqa: S608
                params,
            )
        return bool(row and row[0])

    def insert(self, fields: Mapping[str, Any]) -> Room:
        with translate_pg_errors():
            row = fetchone(
                self._cur,
                f"""
                INSERT INTO rooms
                    (hotel_id, quantity, room_type, accommodation, status)
                VALUES
                    (%s, %s, %s, %s, %s)
                RETURNING {ROOM_COLUMNS}
                """,
                (
                    fields["hotel_id"],
                    fields["quantity"],
                    fields["room_type"],
                    fields["accommodation"],
                    Status(fields.get("status", Status.ACTIVE)).value,
                ),
            )
        return row_to_room(row)

    def update(self, room_id: int, fields: Mapping[str, Any]) -> Room | None:
        with translate_pg_errors():
            row = fetchone(
                self._cur,
                f"""
                UPDATE rooms
                SET hotel_id      = %s,
                    quantity      = %s,
                    room_type     = %s,
                    accommodation = %s,
                    updated_at    = now()
                WHERE id = %s
                RETURNING {ROOM_COLUMNS}
                """,
                (
                    fields["hotel_id"],
                    fields["quantity"],
                    fields["room_type"],
                    fields["accommodation"],
                    room_id,
                ),
            )
        return row_to_room(row) if row else None

    def set_status(self, room_id: int, status: Status) -> Room | None:
        with translate_pg_errors():
            row = fetchone(
                self._cur,
                f"""
                UPDATE rooms
                SET status = %s, updated_at = now()
                WHERE id = %s
                RETURNING {ROOM_COLUMNS}
                """,
                (status.value, room_id),
            )
        return row_to_room(row) if row else None

    def set_status_for_hotel(self, hotel_id: int, status: Status) -> int:
        with translate_pg_errors():
            self._cur.execute(
                """
                UPDATE rooms
                SET status = %s, updated_at = now()
                WHERE hotel_id = %s AND status <> %s
                """,
                (status.value, hotel_id, status.value),
            )
        return self._cur.rowcount

    def sum_quantity(self, hotel_id: int) -> int:
        # No status filter: deleted rooms still count toward the total.
        with translate_pg_errors():
            row = fetchone(
                self._cur,
                "SELECT COALESCE(SUM(quantity), 0) FROM rooms WHERE hotel_id = %s",
                (hotel_id,),
            )
        return int(row[0]) if row else 0
