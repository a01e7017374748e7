"""
Submission persistence (raw SQL). Submissions are append-only.
"""

from __future__ import annotations

from collections.abc import Callable

from core import db

SUBMISSION_COLUMNS = """
    id, user_id, reference_number, terms_accepted, status, submission_date
"""


async def create_submission(
    *,
    user_id: int,
    terms_accepted: bool,
    make_reference: Callable[[int], str],
) -> dict:
    """
    Insert a submission whose reference number is derived from the next value
    of `submission_reference_seq`. Both steps share one transaction.
    """
    async with db.transaction() as conn:
        serial = await conn.fetchval("SELECT nextval('submission_reference_seq')")
        row = await conn.fetchrow(
            f"""
            INSERT INTO submissions (user_id, reference_number, terms_accepted)
            VALUES ($1, $2, $3)
            RETURNING {SUBMISSION_COLUMNS}
            """,
            user_id,
            make_reference(int(serial)),
            terms_accepted,
        )
        if row is None:
            raise RuntimeError("Failed to insert submission.")
    return db.record_to_dict(row)


async def list_submissions_for_email(email: str) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT s.id, s.user_id, s.reference_number, s.terms_accepted, s.status,
               s.submission_date, u.nombre, u.email
        FROM submissions s
        JOIN users u ON u.id = s.user_id
        WHERE u.email = $1
        ORDER BY s.submission_date DESC, s.id DESC
        """,
        email,
    )
