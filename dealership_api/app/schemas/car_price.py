"""
Pydantic models for car price records.

A price belongs to exactly one car model and is valid from its
``effective_date`` until its optional ``expiry_date`` (both inclusive).
``price_type`` is a free‑form label such as ``MSRP``, ``Invoice`` or
``Market`` and defaults to ``MSRP`` when omitted or null.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel

DEFAULT_PRICE_TYPE = "MSRP"


class CarPriceBase(CamelModel):
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, examples=["32999.99"])
    price_type: str = Field(DEFAULT_PRICE_TYPE, max_length=50, examples=["MSRP"])
    effective_date: date = Field(..., examples=["2024-01-01"])
    expiry_date: Optional[date] = Field(None, examples=["2024-12-31"])
    notes: Optional[str] = Field(None, max_length=200, examples=["Launch pricing"])

    @field_validator("price_type", mode="before")
    @classmethod
    def default_price_type(cls, v):
        if v is None:
            return DEFAULT_PRICE_TYPE
        return v


class CarPriceCreate(CarPriceBase):
    """Schema for creating a price for an existing car model."""

    car_model_id: int = Field(..., examples=[1])


class CarPriceUpdate(CarPriceBase):
    """Schema for updating a price.

    Updates replace every mutable field; the owning car model cannot be
    changed.
    """


class CarPriceRead(CarPriceBase):
    """Schema for reading a price from the API."""

    id: int
    car_model_id: int
