"""
Service layer for car models.

Car models are the inventory of a dealership.  Every model returned by
this service embeds its price records; the owning dealership is only
referenced by id.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List

from dealership_api.app.core.db import get_connection
from dealership_api.app.core.exceptions import NotFoundError
from dealership_api.app.repositories import CarModelRepository, DealershipRepository
from dealership_api.app.schemas.car_model import (
    CarCategory,
    CarModelBase,
    CarModelCreate,
    CarModelRead,
    CarModelUpdate,
)
from dealership_api.app.services.car_price_service import CarPriceService


class CarModelService:
    """Сервис для управления моделями автомобилей.

    Search methods return an empty list when nothing matches; lookups by
    id raise ``NotFoundError``.
    """

    @staticmethod
    def build_reads(cursor: sqlite3.Cursor, rows: List[Dict[str, Any]]) -> List[CarModelRead]:
        """Convert car model rows to ``CarModelRead`` with their prices attached."""
        prices = CarPriceService.prices_by_car_model(cursor, [row["id"] for row in rows])
        return [CarModelRead(**row, car_prices=prices.get(row["id"], [])) for row in rows]

    @classmethod
    def _query(cls, finder, *args) -> List[CarModelRead]:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            return cls.build_reads(cursor, finder(cursor, *args))
        finally:
            conn.close()

    @classmethod
    async def list_car_models(cls) -> List[CarModelRead]:
        return cls._query(CarModelRepository.find_all)

    @classmethod
    async def get_car_model(cls, car_model_id: int) -> CarModelRead:
        """Return a car model by id or raise ``NotFoundError``."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = CarModelRepository.find_by_id(cursor, car_model_id)
            if row is None:
                raise NotFoundError("Car model", car_model_id)
            return cls.build_reads(cursor, [row])[0]
        finally:
            conn.close()

    @classmethod
    async def list_by_make(cls, make: str) -> List[CarModelRead]:
        return cls._query(CarModelRepository.find_by_make, make)

    @classmethod
    async def list_by_category(cls, category: CarCategory) -> List[CarModelRead]:
        return cls._query(CarModelRepository.find_by_category, category.value)

    @classmethod
    async def list_by_year(cls, year: int) -> List[CarModelRead]:
        return cls._query(CarModelRepository.find_by_year, year)

    @classmethod
    async def list_by_year_range(cls, start_year: int, end_year: int) -> List[CarModelRead]:
        """Return models built between ``start_year`` and ``end_year`` inclusive."""
        return cls._query(CarModelRepository.find_by_year_between, start_year, end_year)

    @classmethod
    async def list_by_make_and_model(cls, make: str, model: str) -> List[CarModelRead]:
        return cls._query(CarModelRepository.find_by_make_and_model, make, model)

    @classmethod
    async def list_by_dealership(cls, dealership_id: int) -> List[CarModelRead]:
        return cls._query(CarModelRepository.find_by_dealership_id, dealership_id)

    @classmethod
    async def list_by_make_and_category(cls, make: str, category: CarCategory) -> List[CarModelRead]:
        return cls._query(CarModelRepository.find_by_make_and_category, make, category.value)

    @classmethod
    async def list_latest_by_make(cls) -> List[CarModelRead]:
        """Return, for each make, the models from that make's newest year."""
        return cls._query(CarModelRepository.find_latest_by_make)

    @classmethod
    async def search_by_description(cls, keyword: str) -> List[CarModelRead]:
        return cls._query(CarModelRepository.find_by_description_containing, keyword)

    @classmethod
    async def list_by_dealership_location(cls, location: str) -> List[CarModelRead]:
        return cls._query(CarModelRepository.find_by_dealership_location, location)

    @classmethod
    async def create_car_model(cls, data: CarModelCreate) -> CarModelRead:
        """Create a car model at the dealership named by ``data.dealership_id``."""
        return await cls.add_to_dealership(data.dealership_id, data)

    @classmethod
    async def add_to_dealership(cls, dealership_id: int, data: CarModelBase) -> CarModelRead:
        """Insert a car model owned by ``dealership_id``.

        Raises ``NotFoundError`` if the dealership does not exist.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not DealershipRepository.exists_by_id(cursor, dealership_id):
                logger.warning("Rejected car model for missing dealership %s", dealership_id)
                raise NotFoundError("Dealership", dealership_id)
            values = data.model_dump(mode="json", include=set(CarModelBase.model_fields))
            car_model_id = CarModelRepository.insert(cursor, dealership_id, values)
            conn.commit()
            logger.info(
                "Created car model %s (%s %s) for dealership %s",
                car_model_id, data.make, data.model, dealership_id,
            )
            return cls.build_reads(cursor, [CarModelRepository.find_by_id(cursor, car_model_id)])[0]
        finally:
            conn.close()

    @classmethod
    async def update_car_model(cls, car_model_id: int, data: CarModelUpdate) -> CarModelRead:
        """Replace make, model, year, category and description of a model.

        The owning dealership and the prices are preserved.  Raises
        ``NotFoundError`` if the model does not exist.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not CarModelRepository.exists_by_id(cursor, car_model_id):
                raise NotFoundError("Car model", car_model_id)
            CarModelRepository.update(cursor, car_model_id, data.model_dump(mode="json"))
            conn.commit()
            logger.info("Updated car model %s", car_model_id)
            return cls.build_reads(cursor, [CarModelRepository.find_by_id(cursor, car_model_id)])[0]
        finally:
            conn.close()

    @classmethod
    async def delete_car_model(cls, car_model_id: int) -> None:
        """Delete a car model together with its prices."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not CarModelRepository.exists_by_id(cursor, car_model_id):
                raise NotFoundError("Car model", car_model_id)
            CarModelRepository.delete(cursor, car_model_id)
            conn.commit()
            logger.info("Deleted car model %s", car_model_id)
        finally:
            conn.close()

    @classmethod
    async def count_by_category(cls, category: CarCategory) -> int:
        conn = get_connection()
        try:
            return CarModelRepository.count_by_category(conn.cursor(), category.value)
        finally:
            conn.close()

    @classmethod
    async def car_model_exists(cls, car_model_id: int) -> bool:
        conn = get_connection()
        try:
            return CarModelRepository.exists_by_id(conn.cursor(), car_model_id)
        finally:
            conn.close()
