"""Card Creation — validate, resolve the owner, normalize, insert once.

Invariants:
    - Blank full_name → ValidationError before any session query or insert
    - Identity failures (SessionError, NoSessionError) propagate unchanged, no insert
    - Exactly one insert per successful call; PersistenceError propagates unchanged
    - The returned card always has a non-blank full_name and a resolved user_id
    - create_card_from_form folds every CardShareError into the form state;
      anything else propagates to the global handler

Design Decisions:
    - Validation before identity resolution: a bad form never costs a session query
"""

from app.core.card_payload import build_card_payload, require_full_name
from app.core.errors import CardShareError
from app.core.repository_protocols import SessionProvider
from app.schemas.card import CardForm, CardRecord, CreateCardFormState, CreateCardInput
from app.services.card_repository import CardRepository
from app.services.identity_resolver import resolve_user_id


async def create_card(
    card_input: CreateCardInput,
    *,
    sessions: SessionProvider,
    cards: CardRepository,
) -> CardRecord:
    """Persist a new card owned by the explicit or signed-in user."""
    full_name = require_full_name(card_input.full_name)
    user_id = await resolve_user_id(sessions, card_input.user_id)
    payload = build_card_payload(
        full_name,
        user_id,
        card_input.model_dump(),
        is_archive=card_input.is_archive,
    )
    return await cards.insert_card(payload)


async def create_card_from_form(
    form: CardForm,
    *,
    sessions: SessionProvider,
    cards: CardRepository,
) -> CreateCardFormState:
    """Form-submission boundary around create_card."""
    try:
        card = await create_card(form.to_input(), sessions=sessions, cards=cards)
    except CardShareError as e:
        return CreateCardFormState(success=False, error=e.message)
    return CreateCardFormState(success=True, data=card)
