"""SQL Card Store — `cards` table adapter implementing CardStore.

Invariants:
    - insert() commits exactly one row and returns it with generated id/timestamps
    - Failed statements are rolled back and raised as StoreError (operation tagged)
    - select_by_id() returns None for no match, never raises for it
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import StoreError
from app.infrastructure.database import describe_store_error
from app.models.card import Card

logger = logging.getLogger(__name__)


class SqlCardStore:
    """CardStore over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, row: dict) -> dict:
        card = Card(**row)
        self.db.add(card)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            message = describe_store_error(e)
            logger.error(
                f"Card insert rejected: {message}", extra={"operation": "insert"},
            )
            raise StoreError(message, "insert") from e
        return card.to_row()

    async def select_by_id(self, card_id: str) -> dict | None:
        try:
            result = await self.db.execute(
                select(Card).where(Card.id == card_id),
            )
            card = result.scalar_one_or_none()
        except (SQLAlchemyError, ValueError) as e:
            await self.db.rollback()
            message = (
                describe_store_error(e) if isinstance(e, SQLAlchemyError) else str(e)
            )
            raise StoreError(message, "select") from e
        return card.to_row() if card else None
