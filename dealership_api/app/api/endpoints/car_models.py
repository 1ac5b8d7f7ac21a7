"""
Car model endpoints.

CRUD operations for car models and the inventory searches: by make,
category, year, dealership, description keyword and dealership
location, plus the newest models of each make.  Category values are
validated against ``CarCategory``; unknown categories are rejected
with 400.
"""

from typing import List

from fastapi import APIRouter, Query, status

from dealership_api.app.schemas.car_model import CarCategory, CarModelCreate, CarModelRead, CarModelUpdate
from dealership_api.app.services.car_model_service import CarModelService

router = APIRouter()


@router.get("", response_model=List[CarModelRead])
async def list_car_models() -> List[CarModelRead]:
    return await CarModelService.list_car_models()


@router.get("/search/make/{make}", response_model=List[CarModelRead])
async def search_by_make(make: str) -> List[CarModelRead]:
    """Find car models by make, ignoring case."""
    return await CarModelService.list_by_make(make)


@router.get("/search/category/{category}", response_model=List[CarModelRead])
async def search_by_category(category: CarCategory) -> List[CarModelRead]:
    return await CarModelService.list_by_category(category)


@router.get("/search/year/{year}", response_model=List[CarModelRead])
async def search_by_year(year: int) -> List[CarModelRead]:
    return await CarModelService.list_by_year(year)


@router.get("/search/year-range", response_model=List[CarModelRead])
async def search_by_year_range(
    start_year: int = Query(..., alias="startYear"),
    end_year: int = Query(..., alias="endYear"),
) -> List[CarModelRead]:
    """Find car models whose year lies between ``start_year`` and ``end_year`` inclusive."""
    return await CarModelService.list_by_year_range(start_year, end_year)


@router.get("/search/make-and-model", response_model=List[CarModelRead])
async def search_by_make_and_model(
    make: str = Query(...),
    model: str = Query(...),
) -> List[CarModelRead]:
    """Find car models by make and model name, both ignoring case."""
    return await CarModelService.list_by_make_and_model(make, model)


@router.get("/dealership/{dealership_id}", response_model=List[CarModelRead])
async def list_by_dealership(dealership_id: int) -> List[CarModelRead]:
    return await CarModelService.list_by_dealership(dealership_id)


@router.get("/search/make-and-category", response_model=List[CarModelRead])
async def search_by_make_and_category(
    make: str = Query(...),
    category: CarCategory = Query(...),
) -> List[CarModelRead]:
    return await CarModelService.list_by_make_and_category(make, category)


@router.get("/latest", response_model=List[CarModelRead])
async def list_latest_by_make() -> List[CarModelRead]:
    """Return the newest car models of every make.

    For each make, every model whose year equals the highest year
    recorded for that make is included.
    """
    return await CarModelService.list_latest_by_make()


@router.get("/search/description", response_model=List[CarModelRead])
async def search_by_description(keyword: str = Query(...)) -> List[CarModelRead]:
    """Find car models whose description contains ``keyword`` (case insensitive)."""
    return await CarModelService.search_by_description(keyword)


@router.get("/search/location", response_model=List[CarModelRead])
async def search_by_dealership_location(location: str = Query(...)) -> List[CarModelRead]:
    """Find car models stocked by dealerships whose location contains ``location``."""
    return await CarModelService.list_by_dealership_location(location)


@router.get("/count/category/{category}", response_model=int)
async def count_by_category(category: CarCategory) -> int:
    return await CarModelService.count_by_category(category)


@router.get("/{car_model_id}", response_model=CarModelRead)
async def get_car_model(car_model_id: int) -> CarModelRead:
    """Retrieve a single car model by ID.  Returns 404 if absent."""
    return await CarModelService.get_car_model(car_model_id)


@router.post("", response_model=CarModelRead, status_code=status.HTTP_201_CREATED)
async def create_car_model(car_model: CarModelCreate) -> CarModelRead:
    """Create a car model.  Returns 404 if ``dealership_id`` does not exist."""
    return await CarModelService.create_car_model(car_model)


@router.put("/{car_model_id}", response_model=CarModelRead)
async def update_car_model(car_model_id: int, car_model: CarModelUpdate) -> CarModelRead:
    """Replace make, model, year, category and description of a car model.

    The dealership and the price history are preserved.
    """
    return await CarModelService.update_car_model(car_model_id, car_model)


@router.delete("/{car_model_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_car_model(car_model_id: int) -> None:
    """Delete a car model and its prices."""
    await CarModelService.delete_car_model(car_model_id)
    return None
