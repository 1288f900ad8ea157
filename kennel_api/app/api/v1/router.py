"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
"""

from fastapi import APIRouter

from .endpoints import dogs, info

router = APIRouter()

router.include_router(dogs.router, prefix="/dogs", tags=["dogs"])
router.include_router(info.router, prefix="/info", tags=["info"])
