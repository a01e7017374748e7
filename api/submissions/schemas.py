"""
Submission API schemas.
"""

from __future__ import annotations

from pydantic import BaseModel


class SubmissionRequest(BaseModel):
    user_email: str | None = None
    terms_accepted: bool = False
