"""Card Schemas — Pydantic models for card input, form data and results.

Invariants:
    - CardForm converts untyped form data exactly once: strings trimmed to None,
      is_archive through to_boolean, blank user_id treated as absent
    - CardRecord mirrors the `cards` columns (wire contract)
    - CardLookup never carries both a card and an error

Design Decisions:
    - CreateCardInput keeps raw strings: the orchestrator owns normalization so
      JSON callers and form callers get identical rules
"""

from datetime import datetime
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, field_validator

from app.core.normalize_fields import normalize_string, to_boolean

FORM_STRING_FIELDS = (
    "email", "phone", "company", "position", "user_id", "image_url", "code_phone",
)


class CreateCardInput(BaseModel):
    """Card creation request — full_name validated by the orchestrator, not here."""
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    position: str | None = None
    user_id: str | None = None
    image_url: str | None = None
    code_phone: str | None = None
    is_archive: bool | None = None


class CardForm(BaseModel):
    """Card creation form — every field optional, coerced from raw form values."""
    full_name: str = ""
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    position: str | None = None
    user_id: str | None = None
    image_url: str | None = None
    code_phone: str | None = None
    is_archive: bool = False

    @field_validator("full_name", mode="before")
    @classmethod
    def coerce_full_name(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator(*FORM_STRING_FIELDS, mode="before")
    @classmethod
    def coerce_optional_string(cls, v: Any) -> str | None:
        return normalize_string(v)

    @field_validator("is_archive", mode="before")
    @classmethod
    def coerce_is_archive(cls, v: Any) -> bool:
        return to_boolean(v)

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "CardForm":
        """Build from a multipart/urlencoded form (missing keys → defaults)."""
        return cls(**{
            name: form.get(name)
            for name in cls.model_fields
            if form.get(name) is not None
        })

    def to_input(self) -> CreateCardInput:
        return CreateCardInput(**self.model_dump())


class CardRecord(BaseModel):
    """Persisted card as returned to callers."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    position: str | None = None
    user_id: str
    image_url: str | None = None
    code_phone: str | None = None
    is_archive: bool | None = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CardLookup(BaseModel):
    """Result of get_card_by_id — lookups report errors as values."""
    card: CardRecord | None = None
    error: str | None = None


class CreateCardFormState(BaseModel):
    """Result of a card form submission."""
    success: bool
    error: str | None = None
    data: CardRecord | None = None
