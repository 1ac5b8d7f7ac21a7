"""SQL access for the ``dealerships`` table."""

import sqlite3
from typing import Any, Dict, List, Optional

from .sql import contains_pattern

COLUMNS = "d.id, d.name, d.location, d.phone_number, d.email"


def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "name": row["name"],
        "location": row["location"],
        "phone_number": row["phone_number"],
        "email": row["email"],
    }


class DealershipRepository:
    """Queries over dealerships."""

    @staticmethod
    def find_all(cursor: sqlite3.Cursor) -> List[Dict[str, Any]]:
        rows = cursor.execute(f"SELECT {COLUMNS} FROM dealerships d ORDER BY d.id").fetchall()
        return [_row_to_dict(row) for row in rows]

    @staticmethod
    def find_by_id(cursor: sqlite3.Cursor, dealership_id: int) -> Optional[Dict[str, Any]]:
        row = cursor.execute(
            f"SELECT {COLUMNS} FROM dealerships d WHERE d.id = ?",
            (dealership_id,),
        ).fetchone()
        return _row_to_dict(row) if row else None

    @staticmethod
    def exists_by_id(cursor: sqlite3.Cursor, dealership_id: int) -> bool:
        row = cursor.execute(
            "SELECT 1 FROM dealerships WHERE id = ?", (dealership_id,)
        ).fetchone()
        return row is not None

    @staticmethod
    def find_by_name_ignore_case(cursor: sqlite3.Cursor, name: str) -> Optional[Dict[str, Any]]:
        row = cursor.execute(
            f"SELECT {COLUMNS} FROM dealerships d WHERE LOWER(d.name) = LOWER(?) ORDER BY d.id",
            (name,),
        ).fetchone()
        return _row_to_dict(row) if row else None

    @staticmethod
    def find_by_location_containing(cursor: sqlite3.Cursor, location: str) -> List[Dict[str, Any]]:
        rows = cursor.execute(
            f"""
            SELECT {COLUMNS} FROM dealerships d
            WHERE LOWER(d.location) LIKE LOWER(?) ESCAPE '\\'
            ORDER BY d.id
            """,
            (contains_pattern(location),),
        ).fetchall()
        return [_row_to_dict(row) for row in rows]

    @staticmethod
    def find_with_car_models(cursor: sqlite3.Cursor) -> List[Dict[str, Any]]:
        rows = cursor.execute(
            f"""
            SELECT {COLUMNS} FROM dealerships d
            WHERE EXISTS (SELECT 1 FROM car_models cm WHERE cm.dealership_id = d.id)
            ORDER BY d.id
            """
        ).fetchall()
        return [_row_to_dict(row) for row in rows]

    @staticmethod
    def find_by_location_and_car_make(
        cursor: sqlite3.Cursor, location: str, make: str
    ) -> List[Dict[str, Any]]:
        rows = cursor.execute(
            f"""
            SELECT DISTINCT {COLUMNS} FROM dealerships d
            JOIN car_models cm ON cm.dealership_id = d.id
            WHERE LOWER(d.location) LIKE LOWER(?) ESCAPE '\\'
              AND LOWER(cm.make) = LOWER(?)
            ORDER BY d.id
            """,
            (contains_pattern(location), make),
        ).fetchall()
        return [_row_to_dict(row) for row in rows]

    @staticmethod
    def count_by_location_containing(cursor: sqlite3.Cursor, location: str) -> int:
        row = cursor.execute(
            "SELECT COUNT(*) FROM dealerships WHERE LOWER(location) LIKE LOWER(?) ESCAPE '\\'",
            (contains_pattern(location),),
        ).fetchone()
        return row[0]

    @staticmethod
    def insert(cursor: sqlite3.Cursor, data: Dict[str, Any]) -> int:
        cursor.execute(
            """
            INSERT INTO dealerships (name, location, phone_number, email)
            VALUES (?, ?, ?, ?)
            """,
            (data["name"], data["location"], data.get("phone_number"), data.get("email")),
        )
        return cursor.lastrowid

    @staticmethod
    def update(cursor: sqlite3.Cursor, dealership_id: int, data: Dict[str, Any]) -> int:
        cursor.execute(
            """
            UPDATE dealerships
            SET name = ?, location = ?, phone_number = ?, email = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            (
                data["name"],
                data["location"],
                data.get("phone_number"),
                data.get("email"),
                dealership_id,
            ),
        )
        return cursor.rowcount

    @staticmethod
    def delete(cursor: sqlite3.Cursor, dealership_id: int) -> int:
        cursor.execute("DELETE FROM dealerships WHERE id = ?", (dealership_id,))
        return cursor.rowcount
