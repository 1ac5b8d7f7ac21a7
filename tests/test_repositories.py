"""Unit tests for the SQL in the repository classes."""

import sqlite3
from datetime import date
from decimal import Decimal

import pytest

from dealership_api.app.core.db import get_connection, get_cursor, init_db
from dealership_api.app.repositories import CarModelRepository, CarPriceRepository, DealershipRepository
from dealership_api.app.repositories.sql import contains_pattern, to_decimal


def _dealership(cursor, name="Acme Motors", location="Springfield"):
    return DealershipRepository.insert(cursor, {"name": name, "location": location})


def _model(cursor, dealership_id, make="Toyota", model="Camry", year=2024, category="SEDAN"):
    return CarModelRepository.insert(
        cursor, dealership_id, {"make": make, "model": model, "year": year, "category": category}
    )


def _price(cursor, car_model_id, price="100.00", effective="2024-01-01", expiry=None, price_type="MSRP"):
    return CarPriceRepository.insert(
        cursor,
        car_model_id,
        {"price": price, "price_type": price_type, "effective_date": effective, "expiry_date": expiry},
    )


class TestHelpers:

    def test_contains_pattern_escapes_wildcards(self):
        assert contains_pattern("50%_off\\") == "%50\\%\\_off\\\\%"

    def test_to_decimal(self):
        assert to_decimal(None) is None
        assert to_decimal(25000) == Decimal("25000.00")
        assert to_decimal(0.1 + 0.2) == Decimal("0.30")


class TestSchema:

    def test_init_db_is_idempotent(self):
        init_db()
        with get_cursor() as cursor:
            versions = [row["version"] for row in cursor.execute("SELECT version FROM migrations")]
        assert versions == [1, 2]

    def test_unique_name_index_ignores_case(self):
        with get_cursor() as cursor:
            _dealership(cursor, name="Acme Motors")
            with pytest.raises(sqlite3.IntegrityError):
                _dealership(cursor, name="ACME motors")

    def test_foreign_keys_cascade(self):
        conn = get_connection()
        try:
            cursor = conn.cursor()
            dealership_id = _dealership(cursor)
            model_id = _model(cursor, dealership_id)
            _price(cursor, model_id)
            DealershipRepository.delete(cursor, dealership_id)
            assert CarModelRepository.find_all(cursor) == []
            assert CarPriceRepository.find_all(cursor) == []
        finally:
            conn.close()

    def test_car_model_requires_existing_dealership(self):
        with get_cursor() as cursor:
            with pytest.raises(sqlite3.IntegrityError):
                _model(cursor, dealership_id=999)


class TestCarModelQueries:

    def test_latest_by_make(self):
        with get_cursor() as cursor:
            dealership_id = _dealership(cursor)
            _model(cursor, dealership_id, make="Toyota", year=2022)
            toyota = _model(cursor, dealership_id, make="Toyota", year=2024)
            bmw = _model(cursor, dealership_id, make="BMW", model="X3", year=2023)
            latest = CarModelRepository.find_latest_by_make(cursor)
        assert [row["id"] for row in latest] == [toyota, bmw]

    def test_row_uses_year_key(self):
        with get_cursor() as cursor:
            model_id = _model(cursor, _dealership(cursor), year=2021)
            row = CarModelRepository.find_by_id(cursor, model_id)
        assert row["year"] == 2021
        assert "model_year" not in row

    def test_find_by_dealership_ids_empty(self):
        with get_cursor() as cursor:
            assert CarModelRepository.find_by_dealership_ids(cursor, []) == []


class TestCarPriceQueries:

    def test_active_boundaries(self):
        day = date(2024, 6, 1)
        with get_cursor() as cursor:
            model_id = _model(cursor, _dealership(cursor))
            starts = _price(cursor, model_id, effective="2024-06-01")
            ends = _price(cursor, model_id, effective="2024-01-01", expiry="2024-06-01")
            _price(cursor, model_id, effective="2024-01-01", expiry="2024-05-31")
            _price(cursor, model_id, effective="2024-06-02")
            active = CarPriceRepository.find_active(cursor, day)
        assert [row["id"] for row in active] == [starts, ends]

    def test_current_by_model_and_type(self):
        day = date(2024, 6, 1)
        with get_cursor() as cursor:
            model_id = _model(cursor, _dealership(cursor))
            _price(cursor, model_id, effective="2024-01-01")
            newest = _price(cursor, model_id, effective="2024-05-01")
            _price(cursor, model_id, effective="2024-05-15", price_type="Invoice")
            current = CarPriceRepository.find_current_by_car_model_and_type(cursor, model_id, "MSRP", day)
            missing = CarPriceRepository.find_current_by_car_model_and_type(cursor, model_id, "Market", day)
        assert current["id"] == newest
        assert missing is None

    def test_average_active_price_by_make(self):
        day = date(2024, 6, 1)
        with get_cursor() as cursor:
            dealership_id = _dealership(cursor)
            camry = _model(cursor, dealership_id, make="Toyota")
            x5 = _model(cursor, dealership_id, make="BMW", model="X5", category="SUV")
            _price(cursor, camry, price="10000.00")
            _price(cursor, camry, price="10001.00")
            _price(cursor, x5, price="70000.00", expiry="2024-01-31")
            assert CarPriceRepository.average_active_price_by_make(cursor, "TOYOTA", day) == Decimal("10000.50")
            assert CarPriceRepository.average_active_price_by_make(cursor, "BMW", day) is None

    def test_prices_read_back_as_decimal(self):
        with get_cursor() as cursor:
            price_id = _price(cursor, _model(cursor, _dealership(cursor)), price="19999.99")
            row = CarPriceRepository.find_by_id(cursor, price_id)
        assert row["price"] == Decimal("19999.99")
