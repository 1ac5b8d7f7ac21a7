"""
Car price endpoints.

CRUD operations for price records plus pricing queries: by model,
type, amount range and effective date range, the prices active today,
the latest and current price of a model for one price type, and the
average active price of a make.
"""

from datetime import date
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Query, status

from dealership_api.app.schemas.car_price import (
    CarPriceCreate,
    CarPriceRead,
    CarPriceUpdate,
)
from dealership_api.app.services.car_price_service import CarPriceService

router = APIRouter()


@router.get("", response_model=List[CarPriceRead])
async def list_car_prices() -> List[CarPriceRead]:
    return await CarPriceService.list_prices()


@router.get("/car-model/{car_model_id}", response_model=List[CarPriceRead])
async def list_by_car_model(car_model_id: int) -> List[CarPriceRead]:
    return await CarPriceService.list_by_car_model(car_model_id)


@router.get("/search/type/{price_type}", response_model=List[CarPriceRead])
async def search_by_type(price_type: str) -> List[CarPriceRead]:
    return await CarPriceService.list_by_type(price_type)


@router.get("/search/price-range", response_model=List[CarPriceRead])
async def search_by_price_range(
    min_price: Decimal = Query(..., alias="minPrice"),
    max_price: Decimal = Query(..., alias="maxPrice"),
) -> List[CarPriceRead]:
    """Find prices between ``min_price`` and ``max_price`` inclusive."""
    return await CarPriceService.list_in_range(min_price, max_price)


@router.get("/active", response_model=List[CarPriceRead])
async def list_active() -> List[CarPriceRead]:
    """Return prices whose effective/expiry window contains today."""
    return await CarPriceService.list_active()


@router.get("/active/car-model/{car_model_id}", response_model=List[CarPriceRead])
async def list_active_for_car_model(car_model_id: int) -> List[CarPriceRead]:
    return await CarPriceService.list_active_for_car_model(car_model_id)


@router.get("/latest/car-model/{car_model_id}/type/{price_type}", response_model=List[CarPriceRead])
async def list_latest(car_model_id: int, price_type: str) -> List[CarPriceRead]:
    """Return all prices of a type for a model, most recent effective date first."""
    return await CarPriceService.list_latest(car_model_id, price_type)


@router.get("/current/car-model/{car_model_id}/type/{price_type}", response_model=CarPriceRead)
async def get_current(car_model_id: int, price_type: str) -> CarPriceRead:
    """Return the active price of a type for a model.  Returns 404 if none is active."""
    return await CarPriceService.get_current(car_model_id, price_type)


@router.get("/search/date-range", response_model=List[CarPriceRead])
async def search_by_date_range(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
) -> List[CarPriceRead]:
    """Find prices whose effective date lies in the inclusive range (ISO dates)."""
    return await CarPriceService.list_by_date_range(start_date, end_date)


@router.get("/average/make/{make}", response_model=Decimal)
async def average_by_make(make: str) -> Decimal:
    """Average of the active prices for a make.  Returns 404 when there are none."""
    return await CarPriceService.average_by_make(make)


@router.get("/count/type/{price_type}", response_model=int)
async def count_by_type(price_type: str) -> int:
    return await CarPriceService.count_by_type(price_type)


@router.get("/{car_price_id}", response_model=CarPriceRead)
async def get_car_price(car_price_id: int) -> CarPriceRead:
    return await CarPriceService.get_price(car_price_id)


@router.post("", response_model=CarPriceRead, status_code=status.HTTP_201_CREATED)
async def create_car_price(car_price: CarPriceCreate) -> CarPriceRead:
    """Create a price.  Returns 404 if ``car_model_id`` does not exist."""
    return await CarPriceService.create_price(car_price)


@router.put("/{car_price_id}", response_model=CarPriceRead)
async def update_car_price(car_price_id: int, car_price: CarPriceUpdate) -> CarPriceRead:
    return await CarPriceService.update_price(car_price_id, car_price)


@router.delete("/{car_price_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_car_price(car_price_id: int) -> None:
    await CarPriceService.delete_price(car_price_id)
    return None
