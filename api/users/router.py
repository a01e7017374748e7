"""
User profile API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from . import schemas, service

router = APIRouter(prefix="/api/users")


@router.post("")
async def upsert_user(request: schemas.UserProfileRequest) -> dict:
    """
    Create the profile for `email`, or overwrite it if it already exists.
    """
    user, created = await service.upsert_profile(request)
    return {
        "success": True,
        "data": user,
        "message": "Usuario creado" if created else "Usuario actualizado",
    }


@router.get("/{email}")
async def get_user(email: str) -> dict:
    row = await service.get_profile(email)
    return {"success": True, "data": row}
