"""Profile Schemas — profile records and the save-card-from-profile form.

Invariants:
    - ProfileRecord mirrors the `profiles` columns (wire contract)
    - SaveCardFromProfileForm ids are trimmed; blank ids become None
"""

from datetime import datetime
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, field_validator

from app.core.normalize_fields import normalize_string


class ProfileRecord(BaseModel):
    """Public profile as returned to callers."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str | None = None
    avatar_url: str | None = None
    email: str | None = None
    phone: str | None = None
    code_phone: str | None = None
    company: str | None = None
    position: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SaveCardFromProfileForm(BaseModel):
    """Hidden inputs posted by the "save card" button on a shared profile page."""
    profile_id: str | None = None
    requested_id: str | None = None

    @field_validator("profile_id", "requested_id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str | None:
        return normalize_string(v)

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "SaveCardFromProfileForm":
        return cls(
            profile_id=form.get("profile_id"),
            requested_id=form.get("requested_id"),
        )

    @property
    def effective_id(self) -> str | None:
        """profile_id, falling back to requested_id."""
        return self.profile_id or self.requested_id


class SaveCardFromProfileState(BaseModel):
    """Result of saving a card from a profile."""
    success: bool
    error: str | None = None
