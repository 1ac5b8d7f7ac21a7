"""Tests for the requests based API client."""

import json
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from dealership_api.client import DealershipAPIClient


def _response(status_code, body=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = b"" if body is None else json.dumps(body).encode()
    response.url = "http://api.test/"
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return DealershipAPIClient(base_url="http://api.test/", timeout=3, session=session)


def test_create_dealership_sends_json(api, session):
    session.request.return_value = _response(201, {"id": 1, "name": "Acme Motors"})
    data, error = api.create_dealership({"name": "Acme Motors", "location": "Springfield"})
    assert error is None
    assert data["id"] == 1
    session.request.assert_called_once_with(
        method="POST",
        url="http://api.test/api/dealerships",
        params=None,
        json={"name": "Acme Motors", "location": "Springfield"},
        timeout=3,
    )


def test_conflict_with_empty_body(api, session):
    session.request.return_value = _response(409)
    data, error = api.create_dealership({"name": "Acme Motors", "location": "Springfield"})
    assert data is None
    assert error == {"status_code": 409, "message": "Conflict"}


def test_validation_error_detail_is_reported(api, session):
    session.request.return_value = _response(400, {"detail": [{"msg": "too short"}]})
    _, error = api.create_car_model({"make": ""})
    assert error["status_code"] == 400
    assert "too short" in error["message"]


def test_delete_no_content(api, session):
    session.request.return_value = _response(204)
    assert api.delete_car_price(4) == (True, None)


def test_delete_missing(api, session):
    session.request.return_value = _response(404)
    deleted, error = api.delete_dealership(4)
    assert deleted is False
    assert error["message"] == "Not found"


def test_network_error(api, session):
    session.request.side_effect = requests.ConnectionError("connection refused")
    data, error = api.get_car_model(1)
    assert data is None
    assert error["status_code"] is None
    assert "connection refused" in error["message"]


def test_list_returns_empty_list_on_error(api, session):
    session.request.return_value = _response(500, {"detail": "boom"})
    data, error = api.list_car_models()
    assert data == []
    assert error["status_code"] == 500


def test_search_passes_query_params(api, session):
    session.request.return_value = _response(200, [])
    api.search_dealerships_by_location("Spring")
    kwargs = session.request.call_args.kwargs
    assert kwargs["url"] == "http://api.test/api/dealerships/search/location"
    assert kwargs["params"] == {"location": "Spring"}


def test_current_price_defaults_to_msrp(api, session):
    session.request.return_value = _response(200, {"id": 2, "price": "100.00"})
    data, _ = api.get_current_price(7)
    assert data["price"] == "100.00"
    assert session.request.call_args.kwargs["url"].endswith("/api/car-prices/current/car-model/7/type/MSRP")


def test_average_price_is_decimal(api, session):
    session.request.return_value = _response(200, "35000.00")
    assert api.get_average_price_by_make("Toyota") == (Decimal("35000.00"), None)


def test_average_price_missing_make(api, session):
    session.request.return_value = _response(404)
    data, error = api.get_average_price_by_make("Lada")
    assert data is None
    assert error["status_code"] == 404
