"""
Top‑level API router.

This router aggregates domain‑specific routers (dealerships, car
models, car prices) under one prefix.  When a new domain is added,
include its router here.
"""

from fastapi import APIRouter

from .endpoints import car_models, car_prices, dealerships

router = APIRouter()

router.include_router(dealerships.router, prefix="/dealerships", tags=["Dealership Management"])
router.include_router(car_models.router, prefix="/car-models", tags=["Car Model Management"])
router.include_router(car_prices.router, prefix="/car-prices", tags=["Car Price Management"])
