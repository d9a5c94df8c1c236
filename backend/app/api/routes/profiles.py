"""Profile Routes — own profile, shared profiles, and saving a profile as a card.

Invariants:
    - /profiles/me reads through the scoped store, /profiles/{id} through the elevated one
    - Save endpoints never raise for domain failures: JSON result or 303 redirect
    - Owner of a saved card follows settings.card_owner_policy

Design Decisions:
    - /me declared before /{profile_id} so the literal path wins
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from app.api.dependencies import (
    get_card_repository, get_elevated_profile_store, get_scoped_profile_store,
    get_session_provider,
)
from app.config import Settings, get_settings
from app.core.repository_protocols import ProfileStore, SessionProvider
from app.schemas.profile import (
    ProfileRecord, SaveCardFromProfileForm, SaveCardFromProfileState,
)
from app.services.card_repository import CardRepository
from app.services.profile_lookup import get_current_profile, get_user_info
from app.services.save_card_from_profile import build_save_redirect, save_card_from_profile

router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileRecord | None)
async def current_profile_route(
    sessions: SessionProvider = Depends(get_session_provider),
    profiles: ProfileStore = Depends(get_scoped_profile_store),
):
    """Profile of the signed-in user, or null."""
    return await get_current_profile(sessions, profiles)


@router.get("/{profile_id}", response_model=ProfileRecord | None)
async def user_info_route(
    profile_id: str,
    profiles: ProfileStore = Depends(get_elevated_profile_store),
):
    """Anyone's profile by id (shared link), or null."""
    return await get_user_info(profiles, profile_id)


async def _save_from_request(
    request: Request,
    sessions: SessionProvider,
    profiles: ProfileStore,
    cards: CardRepository,
    settings: Settings,
) -> tuple[SaveCardFromProfileForm, SaveCardFromProfileState]:
    form = SaveCardFromProfileForm.from_form(await request.form())
    state = await save_card_from_profile(
        form,
        sessions=sessions,
        profiles=profiles,
        cards=cards,
        owner_policy=settings.card_owner_policy,
    )
    return form, state


@router.post("/save-card", response_model=SaveCardFromProfileState)
async def save_card_route(
    request: Request,
    sessions: SessionProvider = Depends(get_session_provider),
    profiles: ProfileStore = Depends(get_elevated_profile_store),
    cards: CardRepository = Depends(get_card_repository),
    settings: Settings = Depends(get_settings),
):
    """Save the posted profile as a card; outcome in the body."""
    _, state = await _save_from_request(request, sessions, profiles, cards, settings)
    return state


@router.post("/save-card/redirect")
async def save_card_redirect_route(
    request: Request,
    sessions: SessionProvider = Depends(get_session_provider),
    profiles: ProfileStore = Depends(get_elevated_profile_store),
    cards: CardRepository = Depends(get_card_repository),
    settings: Settings = Depends(get_settings),
):
    """Save the posted profile as a card; outcome in the redirect query string."""
    form, state = await _save_from_request(request, sessions, profiles, cards, settings)
    location = build_save_redirect(
        settings.save_card_redirect_path, form.effective_id, state,
    )
    return RedirectResponse(location, status_code=status.HTTP_303_SEE_OTHER)
