"""
Document intake "service layer".

- Validate the declared content type before anything touches the disk
- Stream the upload to `<UPLOAD_ROOT>/documents/` with a size limit
- Swap the metadata row for (user, document_type) and drop the old file
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path

import anyio
from fastapi import HTTPException, UploadFile, status

from core import settings
from core.errors import UploadError
from users import service as users_service

from . import repository

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {"image/jpeg", "image/png", "application/pdf"}

DOCUMENTS_SUBDIR = "documents"

CHUNK_SIZE = 1024 * 1024  # 1 MiB


@dataclass(frozen=True)
class StoredFile:
    filename: str
    original_name: str
    mime_type: str
    size_bytes: int
    path: Path


def documents_dir() -> Path:
    return settings.upload_root() / DOCUMENTS_SUBDIR


def generate_filename(
    original_name: str,
    *,
    now_ms: int | None = None,
    rand: int | None = None,
) -> str:
    """
    `<epoch-ms>-<random>` plus the original extension, e.g. `1718000000000-42.pdf`.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    if rand is None:
        rand = random.randint(0, 10**9)
    return f"{now_ms}-{rand}{Path(original_name).suffix}"


def validate_upload(file: UploadFile | None) -> UploadFile:
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No se recibió ningún archivo",
        )

    if file.content_type not in ALLOWED_MIME_TYPES:
        raise UploadError(
            f"Tipo de archivo no permitido: {file.content_type}. "
            f"Permitidos: {sorted(ALLOWED_MIME_TYPES)}"
        )
    return file


async def store_upload(file: UploadFile, *, dest_dir: Path, max_bytes: int) -> StoredFile:
    """
    Stream the upload to disk in 1 MiB chunks.

    Oversized or interrupted uploads leave nothing behind: the partial
    file is removed before the error propagates.
    """
    await anyio.Path(dest_dir).mkdir(parents=True, exist_ok=True)

    original_name = file.filename or ""
    filename = generate_filename(original_name)
    path = dest_dir / filename

    size = 0
    try:
        async with await anyio.open_file(path, "wb") as out:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_bytes:
                    raise UploadError(f"Archivo demasiado grande. Máximo {max_bytes} bytes.")
                await out.write(chunk)
    except BaseException:
        # Half-written file: no metadata row will ever point at it.
        with anyio.CancelScope(shield=True):
            await anyio.Path(path).unlink(missing_ok=True)
        raise

    return StoredFile(
        filename=filename,
        original_name=original_name,
        mime_type=str(file.content_type),
        size_bytes=size,
        path=path,
    )


async def _remove_files(paths: list[str]) -> None:
    for raw in paths:
        try:
            await anyio.Path(raw).unlink(missing_ok=True)
        except OSError:
            logger.warning("document_file_cleanup_failed path=%s", raw, exc_info=True)
        else:
            logger.info("document_file_removed path=%s", raw)


async def intake_document(
    file: UploadFile | None,
    *,
    user_email: str,
    document_type: str,
) -> dict:
    """
    High-level intake step for a single uploaded document.

    This is what the FastAPI router should call.
    """
    upload = validate_upload(file)
    user_id = await users_service.resolve_user_id(user_email)

    stored = await store_upload(
        upload,
        dest_dir=documents_dir(),
        max_bytes=settings.max_upload_bytes(),
    )

    try:
        row, superseded = await repository.replace_document(
            user_id=user_id,
            document_type=document_type,
            filename=stored.filename,
            original_name=stored.original_name,
            file_size=stored.size_bytes,
            mime_type=stored.mime_type,
            file_path=str(stored.path),
        )
    except Exception:
        # Metadata never landed; the bytes on disk would be unreachable.
        await _remove_files([str(stored.path)])
        raise

    await _remove_files([p for p in superseded if p != str(stored.path)])
    logger.info(
        "document_stored user_id=%s document_type=%s filename=%s size=%s replaced=%s",
        user_id,
        document_type,
        stored.filename,
        stored.size_bytes,
        len(superseded),
    )
    return row


async def list_documents(user_email: str) -> list[dict]:
    return await repository.list_documents_for_email(user_email)
