"""
Dealership endpoints.

CRUD operations for dealerships plus searches by name and location.
Missing dealerships surface as 404 and duplicate names as 409 through
the application's exception handlers, so the handlers below simply
delegate to ``DealershipService``.

Static paths (``/search/...``, ``/with-cars``, ``/count/...``) are
declared before ``/{dealership_id}`` so they are matched first.
"""

from typing import List

from fastapi import APIRouter, Query, status

from dealership_api.app.schemas.car_model import CarModelBase
from dealership_api.app.schemas.dealership import DealershipCreate, DealershipRead, DealershipUpdate
from dealership_api.app.services.dealership_service import DealershipService

router = APIRouter()


@router.get("", response_model=List[DealershipRead])
async def list_dealerships() -> List[DealershipRead]:
    """Return all dealerships with their car models."""
    return await DealershipService.list_dealerships()


@router.get("/search/name/{name}", response_model=DealershipRead)
async def get_dealership_by_name(name: str) -> DealershipRead:
    """Find a dealership by exact name, ignoring case."""
    return await DealershipService.get_by_name(name)


@router.get("/search/location", response_model=List[DealershipRead])
async def search_dealerships_by_location(location: str = Query(...)) -> List[DealershipRead]:
    """Find dealerships whose location contains ``location`` (case insensitive)."""
    return await DealershipService.list_by_location(location)


@router.get("/with-cars", response_model=List[DealershipRead])
async def list_dealerships_with_car_models() -> List[DealershipRead]:
    """Return dealerships that have at least one car model in stock."""
    return await DealershipService.list_with_car_models()


@router.get("/search/location-and-make", response_model=List[DealershipRead])
async def search_dealerships_by_location_and_make(
    location: str = Query(...),
    make: str = Query(...),
) -> List[DealershipRead]:
    """Find dealerships in a location that stock a given make."""
    return await DealershipService.list_by_location_and_make(location, make)


@router.get("/count/location", response_model=int)
async def count_dealerships_by_location(location: str = Query(...)) -> int:
    return await DealershipService.count_by_location(location)


@router.get("/{dealership_id}", response_model=DealershipRead)
async def get_dealership(dealership_id: int) -> DealershipRead:
    """Retrieve a single dealership by its ID.  Returns 404 if absent."""
    return await DealershipService.get_dealership(dealership_id)


@router.post("", response_model=DealershipRead, status_code=status.HTTP_201_CREATED)
async def create_dealership(dealership: DealershipCreate) -> DealershipRead:
    """Create a new dealership.

    Returns 409 if another dealership already uses the same name,
    compared case‑insensitively.
    """
    return await DealershipService.create_dealership(dealership)


@router.post(
    "/{dealership_id}/car-models",
    response_model=DealershipRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_car_model_to_dealership(dealership_id: int, car_model: CarModelBase) -> DealershipRead:
    """Add a car model to a dealership and return the updated dealership."""
    return await DealershipService.add_car_model(dealership_id, car_model)


@router.put("/{dealership_id}", response_model=DealershipRead)
async def update_dealership(dealership_id: int, dealership: DealershipUpdate) -> DealershipRead:
    """Replace the name, location, phone number and email of a dealership."""
    return await DealershipService.update_dealership(dealership_id, dealership)


@router.delete("/{dealership_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_dealership(dealership_id: int) -> None:
    """Delete a dealership along with its car models and their prices."""
    await DealershipService.delete_dealership(dealership_id)
    return None
