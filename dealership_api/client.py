"""Car Dealership API client.

A thin wrapper around the dealership REST API using the ``requests``
library.  It is meant for scripts and other services that need to read
or maintain dealership inventory without speaking HTTP directly.

Every public method returns a tuple ``(data, error)``.  On success
``error`` is ``None``; on failure ``data`` is empty (``None``, ``[]`` or
``False`` depending on the call) and ``error`` is a dictionary with the
keys ``status_code`` and ``message``.  Network errors are reported the
same way with ``status_code`` set to ``None``, so callers never have to
catch ``requests`` exceptions.

Payloads and results use the API's camelCase keys (``phoneNumber``,
``carModelId``, ``effectiveDate``).

Example::

    client = DealershipAPIClient(base_url="http://localhost:8000")
    dealership, error = client.create_dealership({"name": "Acme Motors", "location": "Springfield"})
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]

RESOURCES = {
    "dealerships": "/api/dealerships",
    "car_models": "/api/car-models",
    "car_prices": "/api/car-prices",
}


class DealershipAPIClient:
    """Client for interacting with the Car Dealership API."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API, e.g. ``http://localhost:8000``.
            timeout: Per‑request timeout in seconds.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/dealerships``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  ``data`` is the parsed JSON body,
            or ``None`` for empty responses such as 204.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None and exc.response.content:
                try:
                    err_json = exc.response.json()
                    message = str(err_json.get("detail") or err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = _DEFAULT_MESSAGES.get(status, str(exc))
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, resource: str, suffix: str = "", params: Dict[str, Any] | None = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", f"{RESOURCES[resource]}{suffix}", params=params)
        if error:
            return [], error
        return data or [], None

    def _get(self, resource: str, item_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"{RESOURCES[resource]}/{item_id}")

    def _create(self, resource: str, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", RESOURCES[resource], json_body=payload)

    def _update(self, resource: str, item_id: Any, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", f"{RESOURCES[resource]}/{item_id}", json_body=payload)

    def _delete(self, resource: str, item_id: Any) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"{RESOURCES[resource]}/{item_id}")
        return error is None, error

    # ------------------------------------------------------------------
    # Dealerships
    # ------------------------------------------------------------------
    def list_dealerships(self):
        return self._list("dealerships")

    def get_dealership(self, dealership_id: int):
        return self._get("dealerships", dealership_id)

    def search_dealerships_by_location(self, location: str):
        return self._list("dealerships", "/search/location", params={"location": location})

    def create_dealership(self, payload: Dict[str, Any]):
        """Create a dealership.  A duplicate name yields ``status_code`` 409."""
        return self._create("dealerships", payload)

    def update_dealership(self, dealership_id: int, payload: Dict[str, Any]):
        return self._update("dealerships", dealership_id, payload)

    def delete_dealership(self, dealership_id: int):
        return self._delete("dealerships", dealership_id)

    # ------------------------------------------------------------------
    # Car models
    # ------------------------------------------------------------------
    def list_car_models(self):
        return self._list("car_models")

    def get_car_model(self, car_model_id: int):
        return self._get("car_models", car_model_id)

    def list_car_models_by_dealership(self, dealership_id: int):
        return self._list("car_models", f"/dealership/{dealership_id}")

    def create_car_model(self, payload: Dict[str, Any]):
        return self._create("car_models", payload)

    def update_car_model(self, car_model_id: int, payload: Dict[str, Any]):
        return self._update("car_models", car_model_id, payload)

    def delete_car_model(self, car_model_id: int):
        return self._delete("car_models", car_model_id)

    # ------------------------------------------------------------------
    # Car prices
    # ------------------------------------------------------------------
    def list_car_prices(self):
        return self._list("car_prices")

    def get_car_price(self, car_price_id: int):
        return self._get("car_prices", car_price_id)

    def create_car_price(self, payload: Dict[str, Any]):
        return self._create("car_prices", payload)

    def update_car_price(self, car_price_id: int, payload: Dict[str, Any]):
        return self._update("car_prices", car_price_id, payload)

    def delete_car_price(self, car_price_id: int):
        return self._delete("car_prices", car_price_id)

    def get_current_price(self, car_model_id: int, price_type: str = "MSRP"):
        """Return the price of ``price_type`` active today for a car model."""
        return self._request(
            "GET", f"{RESOURCES['car_prices']}/current/car-model/{car_model_id}/type/{price_type}"
        )

    def get_average_price_by_make(self, make: str):
        """Return the average active price of ``make`` as a ``Decimal``."""
        data, error = self._request("GET", f"{RESOURCES['car_prices']}/average/make/{make}")
        if error:
            return None, error
        return Decimal(str(data)), None


# The API answers 404 and 409 with empty bodies.
_DEFAULT_MESSAGES = {
    404: "Not found",
    409: "Conflict",
}
