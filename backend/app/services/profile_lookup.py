"""Profile Lookup — elevated reads of any profile, scoped read of one's own.

Invariants:
    - get_profile_by_id goes through the elevated store; None for no match,
      StoreError propagates
    - get_user_info never raises a StoreError: it is logged and folded into None
    - get_current_profile reads through the scoped store with the session's
      own id as viewer; unauthenticated → None, provider error → SessionError
"""

import logging

from app.core.domain_types import ProfileId
from app.core.errors import SessionError, StoreError
from app.core.normalize_fields import normalize_string
from app.core.repository_protocols import ProfileStore, SessionProvider

logger = logging.getLogger(__name__)


async def get_profile_by_id(
    profiles: ProfileStore, profile_id: ProfileId,
) -> dict | None:
    """Any user's profile, read with service privileges."""
    return await profiles.select_by_id(profile_id)


async def get_user_info(
    profiles: ProfileStore, profile_id: str | None,
) -> dict | None:
    """Profile for a shared link; lookup failures render as "no profile"."""
    profile_id = normalize_string(profile_id)
    if not profile_id:
        return None
    try:
        return await get_profile_by_id(profiles, ProfileId(profile_id))
    except StoreError as e:
        logger.warning(
            f"Profile lookup failed: {e.message}",
            extra={"profile_id": profile_id, "error_code": e.code},
        )
        return None


async def get_current_profile(
    sessions: SessionProvider, profiles: ProfileStore,
) -> dict | None:
    """Profile of whoever is signed in, or None."""
    lookup = await sessions.get_user()
    if lookup.error:
        raise SessionError(lookup.error)
    if not lookup.user:
        return None
    return await profiles.select_by_id(lookup.user.id, viewer_id=lookup.user.id)
