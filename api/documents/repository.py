"""
Document metadata persistence (raw SQL).
"""

from __future__ import annotations

from core import db

DOCUMENT_COLUMNS = """
    id, user_id, document_type, filename, original_name,
    file_size, mime_type, file_path, uploaded_at
"""


async def replace_document(
    *,
    user_id: int,
    document_type: str,
    filename: str,
    original_name: str,
    file_size: int,
    mime_type: str,
    file_path: str,
) -> tuple[dict, list[str]]:
    """
    Replace the (user_id, document_type) document in a single transaction.

    The owner row is locked first so concurrent uploads for the same user
    run one after the other and never leave two rows for one type.

    Returns (new_row, superseded_file_paths).
    """
    async with db.transaction() as conn:
        await conn.execute(
            "SELECT id FROM users WHERE id = $1 FOR UPDATE",
            user_id,
        )
        superseded = await conn.fetch(
            """
            DELETE FROM documents
            WHERE user_id = $1
              AND document_type = $2
            RETURNING file_path
            """,
            user_id,
            document_type,
        )
        row = await conn.fetchrow(
            f"""
            INSERT INTO documents (user_id, document_type, filename, original_name, file_size, mime_type, file_path)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING {DOCUMENT_COLUMNS}
            """,
            user_id,
            document_type,
            filename,
            original_name,
            file_size,
            mime_type,
            file_path,
        )
        if row is None:
            raise RuntimeError("Failed to insert document.")

    return db.record_to_dict(row), [str(r["file_path"]) for r in superseded]


async def list_documents_for_email(email: str) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT d.id, d.user_id, d.document_type, d.filename, d.original_name,
               d.file_size, d.mime_type, d.file_path, d.uploaded_at
        FROM documents d
        JOIN users u ON u.id = d.user_id
        WHERE u.email = $1
        ORDER BY d.uploaded_at DESC, d.id DESC
        """,
        email,
    )
