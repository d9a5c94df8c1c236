"""Profile ORM — the public identity a card can be derived from.

Invariants:
    - id equals the auth user id it belongs to
    - Read-only for this service: no code path updates or deletes a profile
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

PROFILE_COLUMNS = (
    "id", "name", "avatar_url", "email", "phone", "code_phone", "company",
    "position", "created_at", "updated_at",
)


class Profile(Base):
    """Public profile keyed by auth user id."""
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("auth_users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    code_phone: Mapped[str | None] = mapped_column(String(10), nullable=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    def to_row(self) -> dict:
        """Plain dict keyed by column name."""
        return {column: getattr(self, column) for column in PROFILE_COLUMNS}
