"""
Health and statistics projections. Read-only.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from core import settings

from . import repository


def liveness() -> dict:
    return {
        "success": True,
        "message": "API funcionando correctamente",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.APP_VERSION,
        "environment": settings.app_env(),
    }


def _short_version(version: str) -> str:
    # "PostgreSQL 16.2 on x86_64-pc-linux-gnu, ..." -> "PostgreSQL 16.2"
    return " ".join(str(version or "").split()[:2])


async def database_check() -> dict:
    info = await repository.server_info()
    return {
        "success": True,
        "message": "Base de datos conectada correctamente",
        "current_time": info["current_time"],
        "postgresql_version": _short_version(info["pg_version"]),
    }


async def stats() -> dict:
    counts, by_status = await asyncio.gather(
        repository.table_counts(),
        repository.submissions_by_status(),
    )
    return {
        "total_users": counts["users"],
        "total_documents": counts["documents"],
        "total_submissions": counts["submissions"],
        "submissions_by_status": {
            str(row["status"]): int(row["count"]) for row in by_status
        },
    }


def api_info() -> dict:
    return {
        "success": True,
        "message": f"{settings.APP_NAME} - Backend",
        "version": settings.APP_VERSION,
        "environment": settings.app_env(),
        "endpoints": {
            "test": "/api/test",
            "database": "/test-db",
            "stats": "/api/stats",
            "users": "/api/users",
            "documents": "/api/documents",
            "submissions": "/api/submissions",
            "countries": "/api/countries",
        },
    }
