"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), applying migrations on application start
(``init_db``) and a cursor context manager for one‑off scripts.  It
uses SQLite as a lightweight embedded database; to switch to another
DBMS you would replace connection logic and adapt SQL syntax
accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # dealership_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Dates and decimals are stored as ISO strings and numeric
    values respectively and converted by the repositories, so no type
    detection is enabled here.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    # Foreign key support is off by default in SQLite and must be turned
    # on per connection, otherwise ON DELETE CASCADE is ignored.
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS dealerships (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            location TEXT NOT NULL,
            phone_number TEXT,
            email TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS car_models (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            make TEXT NOT NULL,
            model TEXT NOT NULL,
            model_year INTEGER NOT NULL,
            category TEXT NOT NULL,
            description TEXT,
            dealership_id INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(dealership_id) REFERENCES dealerships(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS car_prices (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            price NUMERIC NOT NULL,
            price_type TEXT DEFAULT 'MSRP',
            effective_date DATE NOT NULL,
            expiry_date DATE,
            notes TEXT,
            car_model_id INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(car_model_id) REFERENCES car_models(id) ON DELETE CASCADE
        );
        """,
    ),
    # Migration 2: uniqueness of dealership names and lookup indices
    (
        2,
        """
        -- Dealership names are unique regardless of case.  The service
        -- checks before inserting; this index catches concurrent creates.
        CREATE UNIQUE INDEX IF NOT EXISTS ux_dealerships_name ON dealerships(name COLLATE NOCASE);
        CREATE INDEX IF NOT EXISTS idx_car_models_dealership_id ON car_models(dealership_id);
        CREATE INDEX IF NOT EXISTS idx_car_models_make ON car_models(make COLLATE NOCASE);
        CREATE INDEX IF NOT EXISTS idx_car_prices_car_model_id ON car_prices(car_model_id);
        CREATE INDEX IF NOT EXISTS idx_car_prices_effective_date ON car_prices(effective_date);
        """,
    ),
]


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  To change the schema, append a migration with an
    incremented version number.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying database migration %s", version)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
