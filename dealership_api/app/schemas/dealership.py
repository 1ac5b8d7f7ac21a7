"""
Pydantic models for dealerships.

Names must be unique ignoring case; that rule is enforced by the
service layer and the database, not here.  ``DealershipRead`` embeds
the dealership's car models (which in turn embed their prices).
"""

from typing import List, Optional

from pydantic import Field, field_validator

from .base import CamelModel
from .car_model import CarModelRead


class DealershipBase(CamelModel):
    name: str = Field(..., min_length=2, max_length=100, examples=["Acme Motors"])
    location: str = Field(..., min_length=2, max_length=200, examples=["Springfield, IL"])
    phone_number: Optional[str] = Field(None, max_length=15, examples=["555-0100"])
    email: Optional[str] = Field(None, max_length=100, examples=["sales@acme-motors.example"])

    @field_validator("name", "location")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class DealershipCreate(DealershipBase):
    """Schema for creating a dealership."""
    pass


class DealershipUpdate(DealershipBase):
    """Schema for updating a dealership.

    All of name, location, phone number and email are replaced; omitted
    optional fields are cleared.
    """
    pass


class DealershipRead(DealershipBase):
    """Schema for reading a dealership, including its car models."""

    id: int
    car_models: List[CarModelRead] = Field(default_factory=list)
