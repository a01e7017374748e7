"""
Health and diagnostics endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from . import service

router = APIRouter()


@router.get("/")
def root() -> dict:
    return service.api_info()


@router.get("/api/test")
def liveness() -> dict:
    return service.liveness()


@router.get("/test-db")
async def test_db() -> dict:
    return await service.database_check()


@router.get("/api/stats")
async def stats() -> dict:
    data = await service.stats()
    return {"success": True, "data": data}
