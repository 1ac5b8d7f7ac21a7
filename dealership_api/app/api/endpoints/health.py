"""Liveness endpoint, mounted outside the ``/api`` prefix."""

from typing import Dict

from fastapi import APIRouter

from dealership_api.app.core.config import settings

router = APIRouter()


@router.get("/health", response_model=Dict[str, str])
async def health() -> Dict[str, str]:
    return {"status": "ok", "version": settings.api_version}
