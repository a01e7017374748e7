"""
Country reference data (raw SQL). Rows are seeded out-of-band and never
written by the API.
"""

from __future__ import annotations

from core import db


async def list_countries() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, country
        FROM country
        ORDER BY id
        """
    )


async def get_country(country_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, country
        FROM country
        WHERE id = $1
        """,
        country_id,
    )
