"""Card ORM — persists a user-owned contact record.

Invariants:
    - id is a generated UUID, exposed as str
    - full_name is never blank (check constraint mirrors the orchestrator rule)
    - user_id is always set and stored verbatim as text (explicit owners need
      not be auth user UUIDs); no foreign key, ownership is by id match only
    - Rows are only ever inserted by this service, never updated or deleted

Design Decisions:
    - Uuid(as_uuid=False) for the generated card id: ids cross every boundary as strings
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

CARD_COLUMNS = (
    "id", "full_name", "email", "phone", "company", "position", "user_id",
    "image_url", "code_phone", "is_archive", "created_at", "updated_at",
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Card(Base):
    """Contact card derived from a profile or submitted directly."""
    __tablename__ = "cards"
    __table_args__ = (
        CheckConstraint(
            "length(trim(full_name)) > 0", name="ck_cards_full_name_not_blank",
        ),
    )

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    code_phone: Mapped[str | None] = mapped_column(String(10), nullable=True)
    is_archive: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now,
    )

    def to_row(self) -> dict:
        """Plain dict keyed by column name."""
        return {column: getattr(self, column) for column in CARD_COLUMNS}
