"""
Country API schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SelectCountryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # The onboarding frontend posts `countryId`; `country_id` is accepted too.
    country_id: int | None = Field(default=None, alias="countryId")
