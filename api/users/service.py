"""
User profile business logic.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import asyncpg
from fastapi import HTTPException, status

from countries.service import COUNTRY_NOT_FOUND

from . import repository, schemas

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "Usuario no encontrado"


def normalize_especialidades(value: Any) -> str | None:
    """
    The column is text: structured values are stored as compact JSON,
    strings are stored untouched.
    """
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


async def upsert_profile(payload: schemas.UserProfileRequest) -> tuple[dict, bool]:
    if not payload.country_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="El país es requerido",
        )
    if not payload.email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="El email es requerido",
        )

    try:
        user, created = await repository.upsert_user(
            email=payload.email,
            nombre=payload.nombre,
            telefono=payload.telefono,
            direccion=payload.direccion,
            especialidades=normalize_especialidades(payload.especialidades),
            video_confirmado=payload.video_confirmado,
            country_id=payload.country_id,
        )
    except asyncpg.ForeignKeyViolationError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=COUNTRY_NOT_FOUND,
        ) from exc

    logger.info("user_upserted user_id=%s created=%s", user["id"], created)
    return user, created


async def get_profile(email: str) -> dict:
    row = await repository.get_user_with_country(email)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=USER_NOT_FOUND,
        )
    return row


async def resolve_user_id(email: str | None) -> int:
    """
    Map an owner email to its user id, or fail with 400/404.
    """
    if not email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="El email es requerido",
        )
    user_id = await repository.get_user_id_by_email(email)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=USER_NOT_FOUND,
        )
    return user_id
