"""
Submission API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from . import schemas, service

router = APIRouter(prefix="/api/submissions")


@router.post("")
async def create_submission(request: schemas.SubmissionRequest) -> dict:
    row = await service.create_submission(request)
    return {
        "success": True,
        "data": row,
        "message": "Postulación enviada correctamente",
    }


@router.get("/{user_email}")
async def list_submissions(user_email: str) -> dict:
    rows = await service.list_submissions(user_email)
    return {"success": True, "data": rows}
