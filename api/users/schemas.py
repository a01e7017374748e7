"""
User profile API schemas.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class UserProfileRequest(BaseModel):
    # Presence of email/country_id is checked in the service so the client
    # gets the same 400 messages the onboarding form expects.
    email: str | None = None
    country_id: int | None = None
    nombre: str | None = None
    telefono: str | None = None
    direccion: str | None = None
    # List, mapping or an already-encoded JSON string.
    especialidades: Any = None
    video_confirmado: bool | None = None
