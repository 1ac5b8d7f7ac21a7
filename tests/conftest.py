"""Pytest configuration and shared fixtures.

Every test runs against its own SQLite file under ``tmp_path`` with all
migrations applied.  The factory fixtures create rows through the HTTP
API so that tests exercise the same path as real clients.
"""

import itertools
from datetime import date, timedelta
from typing import Any, Callable, Dict

import pytest
from fastapi.testclient import TestClient

from dealership_api.app.core.config import settings
from dealership_api.app.core.db import init_db
from dealership_api.app.main import create_app


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch) -> str:
    """Point the application at a fresh database file."""
    db_path = str(tmp_path / "dealership-test.db")
    monkeypatch.setattr(settings, "database_url", db_path)
    init_db()
    return db_path


@pytest.fixture
def client():
    """Create test client for a freshly built FastAPI app."""
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def today() -> date:
    return date.today()


@pytest.fixture
def make_dealership(client) -> Callable[..., Dict[str, Any]]:
    """Factory creating dealerships with unique default names."""
    counter = itertools.count(1)

    def _make(**overrides) -> Dict[str, Any]:
        payload = {
            "name": f"Dealership {next(counter)}",
            "location": "Springfield, IL",
            "phoneNumber": "555-0100",
            "email": "sales@dealer.example",
        }
        payload.update(overrides)
        response = client.post("/api/dealerships", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_car_model(client, make_dealership) -> Callable[..., Dict[str, Any]]:
    """Factory creating car models; a dealership is created when none is given."""

    def _make(dealership_id: int = None, **overrides) -> Dict[str, Any]:
        if dealership_id is None:
            dealership_id = make_dealership()["id"]
        payload = {
            "make": "Toyota",
            "model": "Camry",
            "year": 2024,
            "category": "SEDAN",
            "description": "Reliable mid-size sedan",
            "dealershipId": dealership_id,
        }
        payload.update(overrides)
        response = client.post("/api/car-models", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_car_price(client, today) -> Callable[..., Dict[str, Any]]:
    """Factory creating prices that are active today unless overridden."""

    def _make(car_model_id: int, **overrides) -> Dict[str, Any]:
        payload = {
            "price": "30000.00",
            "priceType": "MSRP",
            "effectiveDate": (today - timedelta(days=10)).isoformat(),
            "expiryDate": None,
            "notes": None,
            "carModelId": car_model_id,
        }
        payload.update(overrides)
        response = client.post("/api/car-prices", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
