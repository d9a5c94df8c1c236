"""SQL Profile Store — `profiles` table adapter implementing ProfileStore.

Invariants:
    - Scoped store (elevated=False) only ever returns the viewer's own row;
      with no viewer it returns nothing
    - Elevated store reads any profile by id (service-role access)
    - Failed statements are rolled back and raised as StoreError

Design Decisions:
    - Scoping applied as an extra WHERE clause: the same row-level rule a
      Postgres RLS policy `id = auth.uid()` would enforce
"""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import UserId
from app.core.errors import StoreError
from app.infrastructure.database import describe_store_error
from app.models.profile import Profile


class SqlProfileStore:
    """ProfileStore over an AsyncSession, scoped or elevated."""

    def __init__(self, db: AsyncSession, elevated: bool = False):
        self.db = db
        self.elevated = elevated

    @classmethod
    def service_role(cls, db: AsyncSession) -> "SqlProfileStore":
        return cls(db, elevated=True)

    async def select_by_id(
        self, profile_id: str, viewer_id: UserId | None = None,
    ) -> dict | None:
        if not self.elevated and viewer_id != profile_id:
            return None
        try:
            result = await self.db.execute(
                select(Profile).where(Profile.id == profile_id),
            )
            profile = result.scalar_one_or_none()
        except (SQLAlchemyError, ValueError) as e:
            await self.db.rollback()
            message = (
                describe_store_error(e) if isinstance(e, SQLAlchemyError) else str(e)
            )
            raise StoreError(message, "select") from e
        return profile.to_row() if profile else None
