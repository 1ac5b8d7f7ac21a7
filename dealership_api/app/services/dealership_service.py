"""
Service layer for dealerships.

Dealership names are unique regardless of case.  ``create_dealership``
checks for an existing name before inserting, and the unique index on
``dealerships.name`` rejects anything that slips past the check (two
concurrent creates, or an update renaming a dealership onto another's
name).  Both paths end in ``ConflictError``.

Deleting a dealership removes its car models and their prices through
``ON DELETE CASCADE`` foreign keys.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List

from dealership_api.app.core.db import get_connection
from dealership_api.app.core.exceptions import ConflictError, NotFoundError
from dealership_api.app.repositories import CarModelRepository, DealershipRepository
from dealership_api.app.schemas.car_model import CarModelBase
from dealership_api.app.schemas.dealership import DealershipCreate, DealershipRead, DealershipUpdate
from dealership_api.app.services.car_model_service import CarModelService

logger = logging.getLogger(__name__)


class DealershipService:
    """Service class for managing dealerships."""

    @staticmethod
    def _build_reads(cursor: sqlite3.Cursor, rows: List[Dict[str, Any]]) -> List[DealershipRead]:
        """Attach car models (with prices) to dealership rows."""
        model_rows = CarModelRepository.find_by_dealership_ids(cursor, [row["id"] for row in rows])
        models_by_dealership: Dict[int, list] = {row["id"]: [] for row in rows}
        for model in CarModelService.build_reads(cursor, model_rows):
            models_by_dealership[model.dealership_id].append(model)
        return [DealershipRead(**row, car_models=models_by_dealership[row["id"]]) for row in rows]

    @classmethod
    def _query(cls, finder, *args) -> List[DealershipRead]:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            return cls._build_reads(cursor, finder(cursor, *args))
        finally:
            conn.close()

    @classmethod
    async def list_dealerships(cls) -> List[DealershipRead]:
        return cls._query(DealershipRepository.find_all)

    @classmethod
    async def get_dealership(cls, dealership_id: int) -> DealershipRead:
        """Return a dealership by id or raise ``NotFoundError``."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = DealershipRepository.find_by_id(cursor, dealership_id)
            if row is None:
                raise NotFoundError("Dealership", dealership_id)
            return cls._build_reads(cursor, [row])[0]
        finally:
            conn.close()

    @classmethod
    async def get_by_name(cls, name: str) -> DealershipRead:
        """Return the dealership whose name matches ``name`` ignoring case."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = DealershipRepository.find_by_name_ignore_case(cursor, name)
            if row is None:
                raise NotFoundError("Dealership", name, f"Dealership not found with name: {name}")
            return cls._build_reads(cursor, [row])[0]
        finally:
            conn.close()

    @classmethod
    async def list_by_location(cls, location: str) -> List[DealershipRead]:
        return cls._query(DealershipRepository.find_by_location_containing, location)

    @classmethod
    async def list_with_car_models(cls) -> List[DealershipRead]:
        """Return dealerships that have at least one car model in stock."""
        return cls._query(DealershipRepository.find_with_car_models)

    @classmethod
    async def list_by_location_and_make(cls, location: str, make: str) -> List[DealershipRead]:
        """Return dealerships in ``location`` that stock at least one model of ``make``."""
        return cls._query(DealershipRepository.find_by_location_and_car_make, location, make)

    @classmethod
    async def create_dealership(cls, data: DealershipCreate) -> DealershipRead:
        """Insert a new dealership.

        Raises ``ConflictError`` if a dealership with the same name
        (ignoring case) already exists.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if DealershipRepository.find_by_name_ignore_case(cursor, data.name) is not None:
                logger.warning("Rejected duplicate dealership name '%s'", data.name)
                raise ConflictError("Dealership", f"Dealership with name '{data.name}' already exists")
            try:
                dealership_id = DealershipRepository.insert(cursor, data.model_dump(mode="json"))
            except sqlite3.IntegrityError as exc:
                raise ConflictError(
                    "Dealership", f"Dealership with name '{data.name}' already exists"
                ) from exc
            conn.commit()
            logger.info("Created dealership %s (%s)", dealership_id, data.name)
            return cls._build_reads(cursor, [DealershipRepository.find_by_id(cursor, dealership_id)])[0]
        finally:
            conn.close()

    @classmethod
    async def update_dealership(cls, dealership_id: int, data: DealershipUpdate) -> DealershipRead:
        """Replace name, location, phone number and email of a dealership.

        Car models are untouched.  Raises ``NotFoundError`` if the
        dealership does not exist and ``ConflictError`` if the new name
        belongs to another dealership.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not DealershipRepository.exists_by_id(cursor, dealership_id):
                raise NotFoundError("Dealership", dealership_id)
            try:
                DealershipRepository.update(cursor, dealership_id, data.model_dump(mode="json"))
            except sqlite3.IntegrityError as exc:
                logger.warning("Rejected rename of dealership %s to '%s'", dealership_id, data.name)
                raise ConflictError(
                    "Dealership", f"Dealership with name '{data.name}' already exists"
                ) from exc
            conn.commit()
            logger.info("Updated dealership %s", dealership_id)
            return cls._build_reads(cursor, [DealershipRepository.find_by_id(cursor, dealership_id)])[0]
        finally:
            conn.close()

    @classmethod
    async def delete_dealership(cls, dealership_id: int) -> None:
        """Delete a dealership together with its car models and their prices."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not DealershipRepository.exists_by_id(cursor, dealership_id):
                raise NotFoundError("Dealership", dealership_id)
            DealershipRepository.delete(cursor, dealership_id)
            conn.commit()
            logger.info("Deleted dealership %s", dealership_id)
        finally:
            conn.close()

    @classmethod
    async def add_car_model(cls, dealership_id: int, data: CarModelBase) -> DealershipRead:
        """Add a car model to a dealership and return the updated dealership."""
        await CarModelService.add_to_dealership(dealership_id, data)
        return await cls.get_dealership(dealership_id)

    @classmethod
    async def count_by_location(cls, location: str) -> int:
        conn = get_connection()
        try:
            return DealershipRepository.count_by_location_containing(conn.cursor(), location)
        finally:
            conn.close()

    @classmethod
    async def dealership_exists(cls, dealership_id: int) -> bool:
        conn = get_connection()
        try:
            return DealershipRepository.exists_by_id(conn.cursor(), dealership_id)
        finally:
            conn.close()
