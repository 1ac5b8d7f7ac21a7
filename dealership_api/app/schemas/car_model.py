"""
Pydantic models for car models.

``CarModelBase`` holds the fields shared by requests and responses.
``CarModelCreate`` adds the owning dealership, which is fixed for the
lifetime of the model; ``CarModelRead`` adds the id and embeds the
model's prices.
"""

from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from .base import CamelModel
from .car_price import CarPriceRead


class CarCategory(str, Enum):
    """Body style or drivetrain class of a car model."""

    SEDAN = "SEDAN"
    SUV = "SUV"
    HATCHBACK = "HATCHBACK"
    COUPE = "COUPE"
    CONVERTIBLE = "CONVERTIBLE"
    TRUCK = "TRUCK"
    VAN = "VAN"
    ELECTRIC = "ELECTRIC"
    HYBRID = "HYBRID"


class CarModelBase(CamelModel):
    make: str = Field(..., min_length=1, max_length=50, examples=["Toyota"])
    model: str = Field(..., min_length=1, max_length=50, examples=["Camry"])
    year: int = Field(..., ge=1900, examples=[2024])
    category: CarCategory = Field(..., examples=["SEDAN"])
    description: Optional[str] = Field(None, max_length=500, examples=["Reliable mid-size sedan"])

    @field_validator("make", "model")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class CarModelCreate(CarModelBase):
    """Schema for creating a car model at an existing dealership."""

    dealership_id: int = Field(..., examples=[1])


class CarModelUpdate(CarModelBase):
    """Schema for updating a car model.

    Updates replace make, model, year, category and description.  The
    dealership and the price history are left untouched.
    """


class CarModelRead(CarModelBase):
    """Schema for reading a car model, including its prices."""

    id: int
    dealership_id: int
    car_prices: List[CarPriceRead] = Field(default_factory=list)
