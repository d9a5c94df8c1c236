"""Card Routes — create cards (JSON or form) and fetch them by id.

Invariants:
    - POST /cards raises through the global handlers (400/401/409/503)
    - POST /cards/form and GET /cards/{id} always answer 200 with a result value
"""

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import get_card_repository, get_session_provider
from app.core.repository_protocols import SessionProvider
from app.schemas.card import (
    CardForm, CardLookup, CardRecord, CreateCardFormState, CreateCardInput,
)
from app.services.card_creation import create_card, create_card_from_form
from app.services.card_repository import CardRepository

router = APIRouter(prefix="/api/v1/cards", tags=["cards"])


@router.post(
    "", response_model=CardRecord, status_code=status.HTTP_201_CREATED,
)
async def create_card_route(
    body: CreateCardInput,
    sessions: SessionProvider = Depends(get_session_provider),
    cards: CardRepository = Depends(get_card_repository),
):
    """Create a card owned by body.user_id or the signed-in user."""
    return await create_card(body, sessions=sessions, cards=cards)


@router.post("/form", response_model=CreateCardFormState)
async def create_card_form_route(
    request: Request,
    sessions: SessionProvider = Depends(get_session_provider),
    cards: CardRepository = Depends(get_card_repository),
):
    """Create a card from an HTML form post."""
    form = CardForm.from_form(await request.form())
    return await create_card_from_form(form, sessions=sessions, cards=cards)


@router.get("/{card_id}", response_model=CardLookup)
async def get_card_route(
    card_id: str, cards: CardRepository = Depends(get_card_repository),
):
    """Fetch a card; missing or unknown ids are reported in the body."""
    return await cards.get_card_by_id(card_id)
