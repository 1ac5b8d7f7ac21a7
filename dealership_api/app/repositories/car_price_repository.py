"""SQL access for the ``car_prices`` table.

Dates are bound and stored as ISO ``YYYY-MM-DD`` strings, which compare
correctly as text.  Prices are stored as NUMERIC and converted back to
two‑place ``Decimal`` values when read.

A price is *active* on a given day when that day falls inside its
``effective_date``/``expiry_date`` window, both ends inclusive, with a
missing expiry meaning open ended.  Every "active" query takes the day
as a parameter so callers decide what "today" is.
"""

import sqlite3
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from .sql import placeholders, to_decimal

COLUMNS = "cp.id, cp.price, cp.price_type, cp.effective_date, cp.expiry_date, cp.notes, cp.car_model_id"

ACTIVE_ON = "cp.effective_date <= ? AND (cp.expiry_date IS NULL OR cp.expiry_date >= ?)"


def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "price": to_decimal(row["price"]),
        "price_type": row["price_type"],
        "effective_date": row["effective_date"],
        "expiry_date": row["expiry_date"],
        "notes": row["notes"],
        "car_model_id": row["car_model_id"],
    }


def _fetch(
    cursor: sqlite3.Cursor,
    where: str = "",
    params: tuple = (),
    order_by: str = "cp.id",
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    query = f"SELECT {COLUMNS} FROM car_prices cp"
    if where:
        query += f" WHERE {where}"
    query += f" ORDER BY {order_by}"
    if limit is not None:
        query += f" LIMIT {int(limit)}"
    return [_row_to_dict(row) for row in cursor.execute(query, params).fetchall()]


class CarPriceRepository:
    """Queries over car prices."""

    @staticmethod
    def find_all(cursor: sqlite3.Cursor) -> List[Dict[str, Any]]:
        return _fetch(cursor)

    @staticmethod
    def find_by_id(cursor: sqlite3.Cursor, car_price_id: int) -> Optional[Dict[str, Any]]:
        prices = _fetch(cursor, "cp.id = ?", (car_price_id,))
        return prices[0] if prices else None

    @staticmethod
    def exists_by_id(cursor: sqlite3.Cursor, car_price_id: int) -> bool:
        row = cursor.execute("SELECT 1 FROM car_prices WHERE id = ?", (car_price_id,)).fetchone()
        return row is not None

    @staticmethod
    def find_by_car_model_id(cursor: sqlite3.Cursor, car_model_id: int) -> List[Dict[str, Any]]:
        return _fetch(cursor, "cp.car_model_id = ?", (car_model_id,))

    @staticmethod
    def find_by_car_model_ids(cursor: sqlite3.Cursor, car_model_ids: Iterable[int]) -> List[Dict[str, Any]]:
        ids = list(car_model_ids)
        if not ids:
            return []
        return _fetch(cursor, f"cp.car_model_id IN ({placeholders(ids)})", tuple(ids))

    @staticmethod
    def find_by_price_type(cursor: sqlite3.Cursor, price_type: str) -> List[Dict[str, Any]]:
        return _fetch(cursor, "cp.price_type = ?", (price_type,))

    @staticmethod
    def find_by_price_between(
        cursor: sqlite3.Cursor, min_price: Decimal, max_price: Decimal
    ) -> List[Dict[str, Any]]:
        return _fetch(cursor, "cp.price BETWEEN ? AND ?", (str(min_price), str(max_price)))

    @staticmethod
    def find_active(cursor: sqlite3.Cursor, on: date) -> List[Dict[str, Any]]:
        day = on.isoformat()
        return _fetch(cursor, ACTIVE_ON, (day, day))

    @staticmethod
    def find_active_by_car_model(cursor: sqlite3.Cursor, car_model_id: int, on: date) -> List[Dict[str, Any]]:
        day = on.isoformat()
        return _fetch(cursor, f"cp.car_model_id = ? AND {ACTIVE_ON}", (car_model_id, day, day))

    @staticmethod
    def find_latest_by_car_model_and_type(
        cursor: sqlite3.Cursor, car_model_id: int, price_type: str
    ) -> List[Dict[str, Any]]:
        return _fetch(
            cursor,
            "cp.car_model_id = ? AND cp.price_type = ?",
            (car_model_id, price_type),
            order_by="cp.effective_date DESC, cp.id DESC",
        )

    @staticmethod
    def find_current_by_car_model_and_type(
        cursor: sqlite3.Cursor, car_model_id: int, price_type: str, on: date
    ) -> Optional[Dict[str, Any]]:
        day = on.isoformat()
        prices = _fetch(
            cursor,
            f"cp.car_model_id = ? AND cp.price_type = ? AND {ACTIVE_ON}",
            (car_model_id, price_type, day, day),
            order_by="cp.effective_date DESC, cp.id DESC",
            limit=1,
        )
        return prices[0] if prices else None

    @staticmethod
    def find_by_effective_date_between(
        cursor: sqlite3.Cursor, start_date: date, end_date: date
    ) -> List[Dict[str, Any]]:
        return _fetch(
            cursor,
            "cp.effective_date BETWEEN ? AND ?",
            (start_date.isoformat(), end_date.isoformat()),
        )

    @staticmethod
    def average_active_price_by_make(cursor: sqlite3.Cursor, make: str, on: date) -> Optional[Decimal]:
        """Return the mean active price for ``make`` or ``None`` when there is none."""
        day = on.isoformat()
        row = cursor.execute(
            f"""
            SELECT AVG(cp.price) FROM car_prices cp
            JOIN car_models cm ON cm.id = cp.car_model_id
            WHERE LOWER(cm.make) = LOWER(?) AND {ACTIVE_ON}
            """,
            (make, day, day),
        ).fetchone()
        return to_decimal(row[0])

    @staticmethod
    def count_by_price_type(cursor: sqlite3.Cursor, price_type: str) -> int:
        return cursor.execute(
            "SELECT COUNT(*) FROM car_prices WHERE price_type = ?", (price_type,)
        ).fetchone()[0]

    @staticmethod
    def insert(cursor: sqlite3.Cursor, car_model_id: int, data: Dict[str, Any]) -> int:
        cursor.execute(
            """
            INSERT INTO car_prices (price, price_type, effective_date, expiry_date, notes, car_model_id)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                data["price"],
                data["price_type"],
                data["effective_date"],
                data.get("expiry_date"),
                data.get("notes"),
                car_model_id,
            ),
        )
        return cursor.lastrowid

    @staticmethod
    def update(cursor: sqlite3.Cursor, car_price_id: int, data: Dict[str, Any]) -> int:
        cursor.execute(
            """
            UPDATE car_prices
            SET price = ?, price_type = ?, effective_date = ?, expiry_date = ?, notes = ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            (
                data["price"],
                data["price_type"],
                data["effective_date"],
                data.get("expiry_date"),
                data.get("notes"),
                car_price_id,
            ),
        )
        return cursor.rowcount

    @staticmethod
    def delete(cursor: sqlite3.Cursor, car_price_id: int) -> int:
        cursor.execute("DELETE FROM car_prices WHERE id = ?", (car_price_id,))
        return cursor.rowcount
