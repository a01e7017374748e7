"""
Document intake API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, File, Form, UploadFile

from . import service

router = APIRouter(prefix="/api/documents")


@router.post("")
async def upload_document(
    user_email: str = Form(...),
    document_type: str = Form(...),
    document: UploadFile | None = File(default=None),
) -> dict:
    """
    Upload one document (JPEG, PNG or PDF) for a user.

    A previous document of the same type for that user is replaced, file
    included.
    """
    row = await service.intake_document(
        document,
        user_email=user_email,
        document_type=document_type,
    )
    return {
        "success": True,
        "data": row,
        "message": "Documento subido correctamente",
    }


@router.get("/{user_email}")
async def list_documents(user_email: str) -> dict:
    """
    List a user's documents, newest first. Unknown users get an empty list.
    """
    rows = await service.list_documents(user_email)
    return {"success": True, "data": rows}
