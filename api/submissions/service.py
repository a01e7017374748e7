"""
Submission business logic.

Reference numbers look like `CG-2025-000123`: year of submission plus six
digits taken from a database sequence, so two submissions never share one
(until the sequence passes 999999 within the same year).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import partial

from users import service as users_service

from . import repository, schemas

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "CG"
REFERENCE_DIGITS = 6


def format_reference_number(serial: int, *, year: int | None = None) -> str:
    if year is None:
        year = datetime.now(timezone.utc).year
    number = serial % (10**REFERENCE_DIGITS)
    return f"{REFERENCE_PREFIX}-{year:04d}-{number:0{REFERENCE_DIGITS}d}"


async def create_submission(payload: schemas.SubmissionRequest) -> dict:
    user_id = await users_service.resolve_user_id(payload.user_email)
    year = datetime.now(timezone.utc).year

    row = await repository.create_submission(
        user_id=user_id,
        terms_accepted=payload.terms_accepted,
        make_reference=partial(format_reference_number, year=year),
    )
    logger.info(
        "submission_created user_id=%s reference_number=%s",
        user_id,
        row["reference_number"],
    )
    return row


async def list_submissions(user_email: str) -> list[dict]:
    return await repository.list_submissions_for_email(user_email)
