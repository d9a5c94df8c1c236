"""Card Repository — inserts and fetches cards, translating store failures.

Invariants:
    - insert_card performs exactly one insert, no existence check, no retry
    - insert_card failures surface as PersistenceError carrying the store message
    - get_card_by_id never raises: blank id, store error and no match all become
      CardLookup.error; a blank id never reaches the store
"""

import logging

from app.core.errors import PersistenceError, StoreError
from app.core.repository_protocols import CardStore
from app.schemas.card import CardLookup, CardRecord

logger = logging.getLogger(__name__)

MISSING_ID = "missing id"
NOT_FOUND = "not found"


class CardRepository:
    """Domain-facing access to the cards table."""

    def __init__(self, store: CardStore):
        self.store = store

    async def insert_card(self, payload: dict) -> CardRecord:
        try:
            row = await self.store.insert(payload)
        except StoreError as e:
            raise PersistenceError(e.message) from e
        card = CardRecord.model_validate(row)
        logger.info(
            "Card created", extra={"card_id": card.id, "user_id": card.user_id},
        )
        return card

    async def get_card_by_id(self, card_id: str | None) -> CardLookup:
        card_id = card_id.strip() if isinstance(card_id, str) else ""
        if not card_id:
            return CardLookup(error=MISSING_ID)
        try:
            row = await self.store.select_by_id(card_id)
        except StoreError as e:
            logger.warning(
                f"Card lookup failed: {e.message}",
                extra={"card_id": card_id, "error_code": e.code},
            )
            return CardLookup(error=f"could not fetch card: {e.message}")
        if row is None:
            return CardLookup(error=NOT_FOUND)
        return CardLookup(card=CardRecord.model_validate(row))
