"""
Country lookup logic.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from . import repository

COUNTRY_NOT_FOUND = "País no encontrado"


async def list_countries() -> list[dict]:
    return await repository.list_countries()


async def select_country(country_id: int | None) -> dict:
    """
    Validate that `country_id` exists and return its row.

    Nothing is persisted: the chosen country is stored later, on the user
    profile (`users.country_id`).
    """
    if country_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="El país es requerido",
        )

    row = await repository.get_country(country_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=COUNTRY_NOT_FOUND,
        )
    return row
