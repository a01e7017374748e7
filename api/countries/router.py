"""
Country API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from . import schemas, service

router = APIRouter(prefix="/api/countries")


@router.get("")
async def list_countries() -> dict:
    rows = await service.list_countries()
    return {"success": True, "data": rows}


@router.post("/select")
async def select_country(request: schemas.SelectCountryRequest) -> dict:
    row = await service.select_country(request.country_id)
    return {
        "success": True,
        "data": row,
        "message": "País seleccionado correctamente",
    }
