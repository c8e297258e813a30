"""Hotels repository - PostgreSQL implementation.

Uses raw SQL with psycopg2 (no ORM). The caller owns the transaction
(with txn() as cur:); every method runs on the cursor it was built with.

Uniqueness of name and tax_id is left to the uq_hotels_name and
uq_hotels_tax_id constraints; violations surface as ConflictError.
"""

from __future__ import annotations

from typing import Any, Mapping

from psycopg2.extensions import cursor as PgCursor

from hotelrooms.domain.models import Hotel, Status
from hotelrooms.domain.repository import HotelRepository
from hotelrooms.infra.db import fetchall, fetchone

from .pg_errors import translate_pg_errors

HOTEL_COLUMNS = (
    "id, name, address, city, tax_id, tax_verification_digit, "
    "room_count_declared, status, created_at, updated_at"
)


def row_to_hotel(row: tuple) -> Hotel:
    return Hotel(
        id=row[0],
        name=row[1],
        address=row[2],
        city=row[3],
        tax_id=row[4],
        tax_verification_digit=row[5],
        room_count_declared=row[6],
        status=Status(row[7]),
        created_at=row[8],
        updated_at=row[9],
    )


class PgHotelRepository(HotelRepository):
    def __init__(self, cur: PgCursor) -> None:
        self._cur = cur

    def find_by_id(self, hotel_id: int) -> Hotel | None:
        with translate_pg_errors():
            row = fetchone(
                self._cur,
                f"SELECT {HOTEL_COLUMNS} FROM hotels WHERE id = %s",
                (hotel_id,),
            )
        return row_to_hotel(row) if row else None

    def list_active(self) -> list[Hotel]:
        with translate_pg_errors():
            rows = fetchall(
                self._cur,
                f"""
                SELECT {HOTEL_COLUMNS}
                FROM hotels
                WHERE status <> %s
                ORDER BY id
                """,
                (Status.DELETED.value,),
            )
        return [row_to_hotel(r) for r in rows]

    def insert(self, fields: Mapping[str, Any]) -> Hotel:
        with translate_pg_errors():
            row = fetchone(
                self._cur,
                f"""
                INSERT INTO hotels
                    (name, address, city, tax_id, tax_verification_digit,
                     room_count_declared, status)
                VALUES
                    (%s, %s, %s, %s, %s, %s, %s)
                RETURNING {HOTEL_COLUMNS}
                """,
                (
                    fields["name"],
                    fields["address"],
                    fields["city"],
                    fields["tax_id"],
                    fields["tax_verification_digit"],
                    fields["room_count_declared"],
                    Status(fields.get("status", Status.ACTIVE)).value,
                ),
            )
        return row_to_hotel(row)

    def update(self, hotel_id: int, fields: Mapping[str, Any]) -> Hotel | None:
        with translate_pg_errors():
            row = fetchone(
                self._cur,
                f"""
                UPDATE hotels
                SET name                   = %s,
                    address                = %s,
                    city                   = %s,
                    tax_id                 = %s,
                    tax_verification_digit = %s,
                    room_count_declared    = %s,
                    updated_at             = now()
                WHERE id = %s
                RETURNING {HOTEL_COLUMNS}
                """,
                (
                    fields["name"],
                    fields["address"],
                    fields["city"],
                    fields["tax_id"],
                    fields["tax_verification_digit"],
                    fields["room_count_declared"],
                    hotel_id,
                ),
            )
        return row_to_hotel(row) if row else None

    def set_status(self, hotel_id: int, status: Status) -> Hotel | None:
        with translate_pg_errors():
            row = fetchone(
                self._cur,
                f"""
                UPDATE hotels
                SET status = %s, updated_at = now()
                WHERE id = %s
                RETURNING {HOTEL_COLUMNS}
                """,
                (status.value, hotel_id),
            )
        return row_to_hotel(row) if row else None
