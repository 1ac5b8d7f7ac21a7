"""
Service layer for car prices.

Prices belong to a car model and are valid inside an effective/expiry
date window.  "Active" queries are evaluated against the current date,
computed here on every call and handed to the repository.

Each method opens its own connection.  Read methods never commit;
write methods commit once after every statement has succeeded, so a
failure part way through leaves the database untouched.
"""

from __future__ import annotations

import logging
import sqlite3
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List

from dealership_api.app.core.db import get_connection
from dealership_api.app.core.exceptions import NotFoundError
from dealership_api.app.repositories import CarModelRepository, CarPriceRepository
from dealership_api.app.schemas.car_price import (
    CarPriceCreate,
    CarPriceRead,
    CarPriceUpdate,
)

logger = logging.getLogger(__name__)


class CarPriceService:
    """Service class for managing car price records."""

    @staticmethod
    def today() -> date:
        """Return the day used to decide whether a price is active."""
        return date.today()

    @staticmethod
    def prices_by_car_model(cursor: sqlite3.Cursor, car_model_ids: Iterable[int]) -> Dict[int, List[CarPriceRead]]:
        """Load the prices of several car models, grouped by car model id."""
        grouped: Dict[int, List[CarPriceRead]] = defaultdict(list)
        for row in CarPriceRepository.find_by_car_model_ids(cursor, car_model_ids):
            grouped[row["car_model_id"]].append(CarPriceRead(**row))
        return grouped

    @classmethod
    async def list_prices(cls) -> List[CarPriceRead]:
        conn = get_connection()
        try:
            rows = CarPriceRepository.find_all(conn.cursor())
            return [CarPriceRead(**row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_price(cls, car_price_id: int) -> CarPriceRead:
        """Return a price by id or raise ``NotFoundError``."""
        conn = get_connection()
        try:
            row = CarPriceRepository.find_by_id(conn.cursor(), car_price_id)
            if row is None:
                raise NotFoundError("Car price", car_price_id)
            return CarPriceRead(**row)
        finally:
            conn.close()

    @classmethod
    async def list_by_car_model(cls, car_model_id: int) -> List[CarPriceRead]:
        conn = get_connection()
        try:
            rows = CarPriceRepository.find_by_car_model_id(conn.cursor(), car_model_id)
            return [CarPriceRead(**row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_by_type(cls, price_type: str) -> List[CarPriceRead]:
        conn = get_connection()
        try:
            rows = CarPriceRepository.find_by_price_type(conn.cursor(), price_type)
            return [CarPriceRead(**row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_in_range(cls, min_price: Decimal, max_price: Decimal) -> List[CarPriceRead]:
        """Return prices between ``min_price`` and ``max_price`` inclusive."""
        conn = get_connection()
        try:
            rows = CarPriceRepository.find_by_price_between(conn.cursor(), min_price, max_price)
            return [CarPriceRead(**row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_active(cls) -> List[CarPriceRead]:
        conn = get_connection()
        try:
            rows = CarPriceRepository.find_active(conn.cursor(), cls.today())
            return [CarPriceRead(**row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_active_for_car_model(cls, car_model_id: int) -> List[CarPriceRead]:
        conn = get_connection()
        try:
            rows = CarPriceRepository.find_active_by_car_model(conn.cursor(), car_model_id, cls.today())
            return [CarPriceRead(**row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_latest(cls, car_model_id: int, price_type: str) -> List[CarPriceRead]:
        """Return every price of one type for a model, newest effective date first.

        Expired and future prices are included; the first element is the
        latest one.
        """
        conn = get_connection()
        try:
            rows = CarPriceRepository.find_latest_by_car_model_and_type(
                conn.cursor(), car_model_id, price_type
            )
            return [CarPriceRead(**row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_current(cls, car_model_id: int, price_type: str) -> CarPriceRead:
        """Return the active price of one type for a model.

        When several prices are active the one with the most recent
        effective date wins.  Raises ``NotFoundError`` when none is active.
        """
        conn = get_connection()
        try:
            row = CarPriceRepository.find_current_by_car_model_and_type(
                conn.cursor(), car_model_id, price_type, cls.today()
            )
            if row is None:
                raise NotFoundError(
                    "Car price",
                    car_model_id,
                    f"No active {price_type} price for car model {car_model_id}",
                )
            return CarPriceRead(**row)
        finally:
            conn.close()

    @classmethod
    async def list_by_date_range(cls, start_date: date, end_date: date) -> List[CarPriceRead]:
        """Return prices whose effective date lies in the inclusive range."""
        conn = get_connection()
        try:
            rows = CarPriceRepository.find_by_effective_date_between(conn.cursor(), start_date, end_date)
            return [CarPriceRead(**row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def average_by_make(cls, make: str) -> Decimal:
        """Average the active prices of every model of ``make``.

        Raises ``NotFoundError`` rather than returning zero when the make
        has no active prices.
        """
        conn = get_connection()
        try:
            average = CarPriceRepository.average_active_price_by_make(conn.cursor(), make, cls.today())
            if average is None:
                raise NotFoundError("Car price", make, f"No active prices for make '{make}'")
            return average
        finally:
            conn.close()

    @classmethod
    async def create_price(cls, data: CarPriceCreate) -> CarPriceRead:
        """Insert a price for an existing car model.

        Raises ``NotFoundError`` if the referenced car model does not exist.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not CarModelRepository.exists_by_id(cursor, data.car_model_id):
                logger.warning("Rejected price for missing car model %s", data.car_model_id)
                raise NotFoundError("Car model", data.car_model_id)
            values = data.model_dump(mode="json", exclude={"car_model_id"})
            car_price_id = CarPriceRepository.insert(cursor, data.car_model_id, values)
            conn.commit()
            logger.info("Created car price %s for car model %s", car_price_id, data.car_model_id)
            return CarPriceRead(**CarPriceRepository.find_by_id(cursor, car_price_id))
        finally:
            conn.close()

    @classmethod
    async def update_price(cls, car_price_id: int, data: CarPriceUpdate) -> CarPriceRead:
        """Replace price, type, dates and notes of an existing price."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not CarPriceRepository.exists_by_id(cursor, car_price_id):
                raise NotFoundError("Car price", car_price_id)
            CarPriceRepository.update(cursor, car_price_id, data.model_dump(mode="json"))
            conn.commit()
            logger.info("Updated car price %s", car_price_id)
            return CarPriceRead(**CarPriceRepository.find_by_id(cursor, car_price_id))
        finally:
            conn.close()

    @classmethod
    async def delete_price(cls, car_price_id: int) -> None:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not CarPriceRepository.exists_by_id(cursor, car_price_id):
                raise NotFoundError("Car price", car_price_id)
            CarPriceRepository.delete(cursor, car_price_id)
            conn.commit()
            logger.info("Deleted car price %s", car_price_id)
        finally:
            conn.close()

    @classmethod
    async def count_by_type(cls, price_type: str) -> int:
        conn = get_connection()
        try:
            return CarPriceRepository.count_by_price_type(conn.cursor(), price_type)
        finally:
            conn.close()

    @classmethod
    async def price_exists(cls, car_price_id: int) -> bool:
        conn = get_connection()
        try:
            return CarPriceRepository.exists_by_id(conn.cursor(), car_price_id)
        finally:
            conn.close()
