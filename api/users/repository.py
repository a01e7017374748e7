"""
User profile persistence (raw SQL).

Emails are matched exactly (case-sensitive); `users.email` carries a unique
constraint and is the conflict target of the upsert.
"""

from __future__ import annotations

from core import db

USER_COLUMNS = """
    id, email, nombre, telefono, direccion, especialidades,
    video_confirmado, country_id, created_at, updated_at
"""


async def upsert_user(
    *,
    email: str,
    nombre: str | None,
    telefono: str | None,
    direccion: str | None,
    especialidades: str | None,
    video_confirmado: bool | None,
    country_id: int,
) -> tuple[dict, bool]:
    """
    Insert a profile or update the existing one for `email` in one statement.

    Returns (row, created). `xmax = 0` only holds for a freshly inserted tuple.
    """
    row = await db.fetch_one(
        f"""
        INSERT INTO users (email, nombre, telefono, direccion, especialidades, video_confirmado, country_id)
        VALUES ($1, $2, $3, $4, $5, COALESCE($6, false), $7)
        ON CONFLICT (email) DO UPDATE
        SET nombre = EXCLUDED.nombre,
            telefono = EXCLUDED.telefono,
            direccion = EXCLUDED.direccion,
            especialidades = EXCLUDED.especialidades,
            video_confirmado = EXCLUDED.video_confirmado,
            country_id = EXCLUDED.country_id,
            updated_at = now()
        RETURNING {USER_COLUMNS}, (xmax = 0) AS inserted
        """,
        email,
        nombre,
        telefono,
        direccion,
        especialidades,
        video_confirmado,
        country_id,
    )
    if row is None:
        raise RuntimeError("Failed to upsert user.")
    created = bool(row.pop("inserted"))
    return row, created


async def get_user_with_country(email: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT u.id, u.email, u.nombre, u.telefono, u.direccion, u.especialidades,
               u.video_confirmado, u.country_id, u.created_at, u.updated_at,
               c.country AS country_name
        FROM users u
        LEFT JOIN country c ON c.id = u.country_id
        WHERE u.email = $1
        """,
        email,
    )


async def get_user_id_by_email(email: str) -> int | None:
    row = await db.fetch_one(
        """
        SELECT id
        FROM users
        WHERE email = $1
        """,
        email,
    )
    if row is None:
        return None
    return int(row["id"])
