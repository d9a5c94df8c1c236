"""Save Card From Profile — turn a shared profile into a card owned per OwnerPolicy.

Invariants:
    - Failure order: missing id, profile not found, profile without name,
      session error / no session, then whatever create_card raises
    - Nothing is inserted unless every earlier check passed
    - A session is required under both owner policies
    - Every CardShareError becomes SaveCardFromProfileState.error

Design Decisions:
    - Profile read with the elevated store: the viewer is usually not the owner
    - Redirect variant shares this function and only encodes its result into a URL
"""

import logging
from urllib.parse import urlencode

from app.core.card_payload import choose_owner, map_profile_to_card_fields
from app.core.domain_types import OwnerPolicy, ProfileId
from app.core.errors import (
    CardShareError, ErrorContext, NoSessionError, ResourceNotFoundError,
    SessionError, ValidationError,
)
from app.core.normalize_fields import normalize_string
from app.core.repository_protocols import ProfileStore, SessionProvider
from app.schemas.card import CardRecord, CreateCardInput
from app.schemas.profile import SaveCardFromProfileForm, SaveCardFromProfileState
from app.services.card_creation import create_card
from app.services.card_repository import CardRepository
from app.services.profile_lookup import get_profile_by_id

logger = logging.getLogger(__name__)

MISSING_TARGET = "no valid user was provided"
PROFILE_NOT_FOUND = "profile not found"
PROFILE_WITHOUT_NAME = "profile has no name"
SIGN_IN_REQUIRED = "you must sign in to save the card"


async def save_card_from_profile(
    form: SaveCardFromProfileForm,
    *,
    sessions: SessionProvider,
    profiles: ProfileStore,
    cards: CardRepository,
    owner_policy: OwnerPolicy = OwnerPolicy.SESSION,
) -> SaveCardFromProfileState:
    """Copy a profile into a new card; all domain failures come back as a message."""
    try:
        card = await _save(form, sessions, profiles, cards, owner_policy)
    except CardShareError as e:
        logger.info(
            f"Save from profile refused: {e.message}",
            extra={"profile_id": form.effective_id, "error_code": e.code},
        )
        return SaveCardFromProfileState(success=False, error=e.message)
    logger.info(
        "Card saved from profile",
        extra={"profile_id": form.effective_id, "card_id": card.id},
    )
    return SaveCardFromProfileState(success=True)


async def _save(
    form: SaveCardFromProfileForm,
    sessions: SessionProvider,
    profiles: ProfileStore,
    cards: CardRepository,
    owner_policy: OwnerPolicy,
) -> CardRecord:
    target_id = form.effective_id
    if not target_id:
        raise ValidationError(MISSING_TARGET, field="profile_id")

    context = ErrorContext(profile_id=target_id)
    profile = await get_profile_by_id(profiles, ProfileId(target_id))
    if not profile:
        raise ResourceNotFoundError(
            "Profile", target_id, context, message=PROFILE_NOT_FOUND,
        )

    full_name = normalize_string(profile.get("name"))
    if not full_name:
        raise ValidationError(PROFILE_WITHOUT_NAME, field="name", context=context)

    lookup = await sessions.get_user()
    if lookup.error:
        raise SessionError(lookup.error, context)
    if not lookup.user:
        raise NoSessionError(SIGN_IN_REQUIRED, context)

    owner = choose_owner(owner_policy, lookup.user.id, ProfileId(profile["id"]))
    return await create_card(
        CreateCardInput(
            full_name=full_name,
            user_id=owner,
            **map_profile_to_card_fields(profile),
        ),
        sessions=sessions,
        cards=cards,
    )


def build_save_redirect(
    base_path: str, requested_id: str | None, state: SaveCardFromProfileState,
) -> str:
    """Location for the redirect-style variant: ?id=…&saved=1 or ?id=…&error=…"""
    params: dict[str, str] = {}
    if requested_id:
        params["id"] = requested_id
    if state.success:
        params["saved"] = "1"
    else:
        params["error"] = state.error or "could not save the card"
    return f"{base_path}?{urlencode(params)}"
