"""API tests for the car price endpoints."""

from datetime import timedelta
from decimal import Decimal


def _ids(response):
    return [p["id"] for p in response.json()]


class TestCreateAndRead:

    def test_create_then_get(self, client, make_car_model, today):
        model = make_car_model()
        payload = {
            "price": "32999.99",
            "priceType": "Invoice",
            "effectiveDate": today.isoformat(),
            "expiryDate": (today + timedelta(days=30)).isoformat(),
            "notes": "Spring promotion",
            "carModelId": model["id"],
        }
        created = client.post("/api/car-prices", json=payload)
        assert created.status_code == 201
        fetched = client.get(f"/api/car-prices/{created.json()['id']}").json()
        assert Decimal(fetched["price"]) == Decimal("32999.99")
        for key in ("priceType", "effectiveDate", "expiryDate", "notes", "carModelId"):
            assert fetched[key] == payload[key]

    def test_price_type_defaults_to_msrp(self, client, make_car_model, today):
        model = make_car_model()
        response = client.post(
            "/api/car-prices",
            json={"price": "100.00", "effectiveDate": today.isoformat(), "carModelId": model["id"]},
        )
        assert response.status_code == 201
        assert response.json()["priceType"] == "MSRP"
        assert response.json()["expiryDate"] is None

    def test_whole_number_price_keeps_two_places(self, make_car_model, make_car_price):
        price = make_car_price(make_car_model()["id"], price="25000")
        assert price["price"] == "25000.00"

    def test_create_for_missing_model_returns_404(self, client, today):
        response = client.post(
            "/api/car-prices",
            json={"price": "100.00", "effectiveDate": today.isoformat(), "carModelId": 31337},
        )
        assert response.status_code == 404
        assert client.get("/api/car-prices").json() == []

    def test_invalid_prices_rejected(self, client, make_car_model, today):
        model = make_car_model()
        for bad in ("0", "-5.00", "10.999"):
            response = client.post(
                "/api/car-prices",
                json={"price": bad, "effectiveDate": today.isoformat(), "carModelId": model["id"]},
            )
            assert response.status_code == 400, bad

    def test_missing_effective_date_rejected(self, client, make_car_model):
        response = client.post(
            "/api/car-prices", json={"price": "100.00", "carModelId": make_car_model()["id"]}
        )
        assert response.status_code == 400

    def test_get_missing(self, client):
        assert client.get("/api/car-prices/8").status_code == 404


class TestQueries:

    def test_by_car_model(self, client, make_car_model, make_car_price):
        model = make_car_model()
        mine = make_car_price(model["id"])
        make_car_price(make_car_model()["id"])
        assert _ids(client.get(f"/api/car-prices/car-model/{model['id']}")) == [mine["id"]]

    def test_by_type_and_count(self, client, make_car_model, make_car_price):
        model_id = make_car_model()["id"]
        invoice = make_car_price(model_id, priceType="Invoice")
        make_car_price(model_id, priceType="MSRP")
        make_car_price(model_id, priceType="MSRP")
        assert _ids(client.get("/api/car-prices/search/type/Invoice")) == [invoice["id"]]
        assert client.get("/api/car-prices/count/type/MSRP").json() == 2
        assert client.get("/api/car-prices/count/type/Market").json() == 0

    def test_price_range_is_inclusive(self, client, make_car_model, make_car_price):
        model_id = make_car_model()["id"]
        low = make_car_price(model_id, price="20000.00")
        high = make_car_price(model_id, price="30000.00")
        make_car_price(model_id, price="30000.01")
        make_car_price(model_id, price="19999.99")
        response = client.get(
            "/api/car-prices/search/price-range", params={"minPrice": "20000", "maxPrice": "30000"}
        )
        assert _ids(response) == [low["id"], high["id"]]

    def test_active_window(self, client, make_car_model, make_car_price, today):
        model_id = make_car_model()["id"]
        starts_today = make_car_price(model_id, effectiveDate=today.isoformat())
        ends_today = make_car_price(
            model_id,
            effectiveDate=(today - timedelta(days=5)).isoformat(),
            expiryDate=today.isoformat(),
        )
        make_car_price(
            model_id,
            effectiveDate=(today - timedelta(days=5)).isoformat(),
            expiryDate=(today - timedelta(days=1)).isoformat(),
        )
        make_car_price(model_id, effectiveDate=(today + timedelta(days=1)).isoformat())

        assert sorted(_ids(client.get("/api/car-prices/active"))) == sorted(
            [starts_today["id"], ends_today["id"]]
        )

    def test_active_for_car_model(self, client, make_car_model, make_car_price, today):
        model_id = make_car_model()["id"]
        active = make_car_price(model_id)
        make_car_price(model_id, expiryDate=(today - timedelta(days=1)).isoformat())
        make_car_price(make_car_model()["id"])
        assert _ids(client.get(f"/api/car-prices/active/car-model/{model_id}")) == [active["id"]]

    def test_latest_orders_by_effective_date_desc(self, client, make_car_model, make_car_price, today):
        model_id = make_car_model()["id"]
        old = make_car_price(
            model_id,
            effectiveDate=(today - timedelta(days=400)).isoformat(),
            expiryDate=(today - timedelta(days=40)).isoformat(),
        )
        new = make_car_price(model_id, effectiveDate=(today - timedelta(days=39)).isoformat())
        make_car_price(model_id, priceType="Invoice")
        response = client.get(f"/api/car-prices/latest/car-model/{model_id}/type/MSRP")
        assert _ids(response) == [new["id"], old["id"]]

    def test_current_picks_most_recent_active(self, client, make_car_model, make_car_price, today):
        model_id = make_car_model()["id"]
        make_car_price(model_id, effectiveDate=(today - timedelta(days=10)).isoformat())
        recent = make_car_price(model_id, effectiveDate=(today - timedelta(days=2)).isoformat())
        make_car_price(model_id, effectiveDate=(today + timedelta(days=3)).isoformat())
        response = client.get(f"/api/car-prices/current/car-model/{model_id}/type/MSRP")
        assert response.status_code == 200
        assert response.json()["id"] == recent["id"]

    def test_current_missing_returns_404(self, client, make_car_model, make_car_price, today):
        model_id = make_car_model()["id"]
        make_car_price(model_id, expiryDate=(today - timedelta(days=1)).isoformat())
        response = client.get(f"/api/car-prices/current/car-model/{model_id}/type/MSRP")
        assert response.status_code == 404

    def test_date_range_is_inclusive(self, client, make_car_model, make_car_price):
        model_id = make_car_model()["id"]
        first = make_car_price(model_id, effectiveDate="2024-01-01")
        last = make_car_price(model_id, effectiveDate="2024-03-31")
        make_car_price(model_id, effectiveDate="2023-12-31")
        make_car_price(model_id, effectiveDate="2024-04-01")
        response = client.get(
            "/api/car-prices/search/date-range",
            params={"startDate": "2024-01-01", "endDate": "2024-03-31"},
        )
        assert _ids(response) == [first["id"], last["id"]]

    def test_invalid_date_rejected(self, client):
        response = client.get(
            "/api/car-prices/search/date-range",
            params={"startDate": "yesterday", "endDate": "2024-03-31"},
        )
        assert response.status_code == 400


class TestAverageByMake:

    def test_average_of_active_prices(self, client, make_dealership, make_car_model, make_car_price, today):
        dealership_id = make_dealership()["id"]
        camry = make_car_model(dealership_id=dealership_id, make="Toyota", model="Camry")
        rav4 = make_car_model(dealership_id=dealership_id, make="Toyota", model="RAV4", category="SUV")
        make_car_price(camry["id"], price="30000.00")
        make_car_price(rav4["id"], price="40000.00")
        make_car_price(rav4["id"], price="99999.00", expiryDate=(today - timedelta(days=1)).isoformat())

        response = client.get("/api/car-prices/average/make/toyota")
        assert response.status_code == 200
        assert Decimal(str(response.json())) == Decimal("35000.00")

    def test_average_is_rounded_to_cents(self, client, make_car_model, make_car_price):
        model_id = make_car_model(make="Kia", model="Rio", category="HATCHBACK")["id"]
        for amount in ("1.00", "1.01", "1.01"):
            make_car_price(model_id, price=amount)
        response = client.get("/api/car-prices/average/make/Kia")
        assert Decimal(str(response.json())) == Decimal("1.01")

    def test_no_active_prices_returns_404_not_zero(self, client, make_car_model, make_car_price, today):
        model = make_car_model(make="BMW", model="X5", category="SUV")
        make_car_price(model["id"], effectiveDate=(today + timedelta(days=7)).isoformat())
        response = client.get("/api/car-prices/average/make/BMW")
        assert response.status_code == 404


class TestUpdateAndDelete:

    def test_update_replaces_fields(self, client, make_car_model, make_car_price, today):
        price = make_car_price(make_car_model()["id"], notes="old")
        response = client.put(
            f"/api/car-prices/{price['id']}",
            json={"price": "28500.50", "effectiveDate": today.isoformat()},
        )
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["price"]) == Decimal("28500.50")
        assert data["priceType"] == "MSRP"
        assert data["notes"] is None
        assert data["carModelId"] == price["carModelId"]

    def test_update_missing_returns_404_and_creates_nothing(self, client, today):
        response = client.put(
            "/api/car-prices/3", json={"price": "1.00", "effectiveDate": today.isoformat()}
        )
        assert response.status_code == 404
        assert client.get("/api/car-prices").json() == []

    def test_delete(self, client, make_car_model, make_car_price):
        model = make_car_model()
        price = make_car_price(model["id"])
        assert client.delete(f"/api/car-prices/{price['id']}").status_code == 204
        assert client.get(f"/api/car-prices/{price['id']}").status_code == 404
        assert client.get(f"/api/car-models/{model['id']}").json()["carPrices"] == []

    def test_delete_missing(self, client):
        assert client.delete("/api/car-prices/3").status_code == 404
