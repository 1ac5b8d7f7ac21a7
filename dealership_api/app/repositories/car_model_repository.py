"""SQL access for the ``car_models`` table.

The ``year`` attribute is stored in the ``model_year`` column because
``year`` is a reserved word in several SQL dialects.
"""

import sqlite3
from typing import Any, Dict, Iterable, List, Optional

from .sql import contains_pattern, placeholders

COLUMNS = "cm.id, cm.make, cm.model, cm.model_year, cm.category, cm.description, cm.dealership_id"


def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "make": row["make"],
        "model": row["model"],
        "year": row["model_year"],
        "category": row["category"],
        "description": row["description"],
        "dealership_id": row["dealership_id"],
    }


def _fetch(cursor: sqlite3.Cursor, where: str = "", params: tuple = ()) -> List[Dict[str, Any]]:
    query = f"SELECT {COLUMNS} FROM car_models cm"
    if where:
        query += f" WHERE {where}"
    query += " ORDER BY cm.id"
    return [_row_to_dict(row) for row in cursor.execute(query, params).fetchall()]


class CarModelRepository:
    """Queries over car models."""

    @staticmethod
    def find_all(cursor: sqlite3.Cursor) -> List[Dict[str, Any]]:
        return _fetch(cursor)

    @staticmethod
    def find_by_id(cursor: sqlite3.Cursor, car_model_id: int) -> Optional[Dict[str, Any]]:
        models = _fetch(cursor, "cm.id = ?", (car_model_id,))
        return models[0] if models else None

    @staticmethod
    def exists_by_id(cursor: sqlite3.Cursor, car_model_id: int) -> bool:
        row = cursor.execute("SELECT 1 FROM car_models WHERE id = ?", (car_model_id,)).fetchone()
        return row is not None

    @staticmethod
    def find_by_make(cursor: sqlite3.Cursor, make: str) -> List[Dict[str, Any]]:
        return _fetch(cursor, "LOWER(cm.make) = LOWER(?)", (make,))

    @staticmethod
    def find_by_category(cursor: sqlite3.Cursor, category: str) -> List[Dict[str, Any]]:
        return _fetch(cursor, "cm.category = ?", (category,))

    @staticmethod
    def find_by_year(cursor: sqlite3.Cursor, year: int) -> List[Dict[str, Any]]:
        return _fetch(cursor, "cm.model_year = ?", (year,))

    @staticmethod
    def find_by_year_between(cursor: sqlite3.Cursor, start_year: int, end_year: int) -> List[Dict[str, Any]]:
        return _fetch(cursor, "cm.model_year BETWEEN ? AND ?", (start_year, end_year))

    @staticmethod
    def find_by_make_and_model(cursor: sqlite3.Cursor, make: str, model: str) -> List[Dict[str, Any]]:
        return _fetch(
            cursor,
            "LOWER(cm.make) = LOWER(?) AND LOWER(cm.model) = LOWER(?)",
            (make, model),
        )

    @staticmethod
    def find_by_dealership_id(cursor: sqlite3.Cursor, dealership_id: int) -> List[Dict[str, Any]]:
        return _fetch(cursor, "cm.dealership_id = ?", (dealership_id,))

    @staticmethod
    def find_by_dealership_ids(cursor: sqlite3.Cursor, dealership_ids: Iterable[int]) -> List[Dict[str, Any]]:
        ids = list(dealership_ids)
        if not ids:
            return []
        return _fetch(cursor, f"cm.dealership_id IN ({placeholders(ids)})", tuple(ids))

    @staticmethod
    def find_by_make_and_category(cursor: sqlite3.Cursor, make: str, category: str) -> List[Dict[str, Any]]:
        return _fetch(cursor, "LOWER(cm.make) = LOWER(?) AND cm.category = ?", (make, category))

    @staticmethod
    def find_latest_by_make(cursor: sqlite3.Cursor) -> List[Dict[str, Any]]:
        # Ties on the newest year are all returned.
        return _fetch(
            cursor,
            "cm.model_year = (SELECT MAX(cm2.model_year) FROM car_models cm2 WHERE cm2.make = cm.make)",
        )

    @staticmethod
    def find_by_description_containing(cursor: sqlite3.Cursor, keyword: str) -> List[Dict[str, Any]]:
        return _fetch(
            cursor,
            "LOWER(cm.description) LIKE LOWER(?) ESCAPE '\\'",
            (contains_pattern(keyword),),
        )

    @staticmethod
    def find_by_dealership_location(cursor: sqlite3.Cursor, location: str) -> List[Dict[str, Any]]:
        rows = cursor.execute(
            f"""
            SELECT {COLUMNS} FROM car_models cm
            JOIN dealerships d ON d.id = cm.dealership_id
            WHERE LOWER(d.location) LIKE LOWER(?) ESCAPE '\\'
            ORDER BY cm.id
            """,
            (contains_pattern(location),),
        ).fetchall()
        return [_row_to_dict(row) for row in rows]

    @staticmethod
    def count_by_category(cursor: sqlite3.Cursor, category: str) -> int:
        return cursor.execute(
            "SELECT COUNT(*) FROM car_models WHERE category = ?", (category,)
        ).fetchone()[0]

    @staticmethod
    def insert(cursor: sqlite3.Cursor, dealership_id: int, data: Dict[str, Any]) -> int:
        cursor.execute(
            """
            INSERT INTO car_models (make, model, model_year, category, description, dealership_id)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                data["make"],
                data["model"],
                data["year"],
                data["category"],
                data.get("description"),
                dealership_id,
            ),
        )
        return cursor.lastrowid

    @staticmethod
    def update(cursor: sqlite3.Cursor, car_model_id: int, data: Dict[str, Any]) -> int:
        cursor.execute(
            """
            UPDATE car_models
            SET make = ?, model = ?, model_year = ?, category = ?, description = ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            (
                data["make"],
                data["model"],
                data["year"],
                data["category"],
                data.get("description"),
                car_model_id,
            ),
        )
        return cursor.rowcount

    @staticmethod
    def delete(cursor: sqlite3.Cursor, car_model_id: int) -> int:
        cursor.execute("DELETE FROM car_models WHERE id = ?", (car_model_id,))
        return cursor.rowcount
