"""
Diagnostics queries (raw SQL).
"""

from __future__ import annotations

import asyncio

from core import db


async def server_info() -> dict:
    row = await db.fetch_one("SELECT now() AS current_time, version() AS pg_version")
    if row is None:
        raise RuntimeError("Database returned no server info.")
    return row


async def _count(table: str) -> int:
    # `table` is one of the fixed names below, never user input.
    value = await db.fetch_value(f"SELECT count(*) FROM {table}")
    return int(value or 0)


async def table_counts() -> dict[str, int]:
    users, documents, submissions = await asyncio.gather(
        _count("users"),
        _count("documents"),
        _count("submissions"),
    )
    return {"users": users, "documents": documents, "submissions": submissions}


async def submissions_by_status() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT status, count(*) AS count
        FROM submissions
        GROUP BY status
        """
    )
