"""Identity Resolver — decides who acts, and signs users in with a password.

Invariants:
    - A non-empty explicit id is returned unchanged and the provider is never queried
    - Provider error → SessionError; nobody signed in → NoSessionError
    - login_with_password never raises for bad input or bad credentials,
      and never calls the provider when email or password is blank
"""

import logging

from app.core.domain_types import UserId
from app.core.errors import NoSessionError, SessionError
from app.core.normalize_fields import normalize_string
from app.core.repository_protocols import SessionProvider
from app.schemas.auth import LoginResult

logger = logging.getLogger(__name__)

CREDENTIALS_REQUIRED = "email and password are required"


async def resolve_user_id(
    sessions: SessionProvider, explicit_id: str | None = None,
) -> UserId:
    """Acting user id: the explicit one if given, else the signed-in user's."""
    if explicit_id and explicit_id.strip():
        return UserId(explicit_id)

    lookup = await sessions.get_user()
    if lookup.error:
        raise SessionError(lookup.error)
    if not lookup.user:
        raise NoSessionError()
    return lookup.user.id


async def login_with_password(
    sessions: SessionProvider, email: str | None, password: str | None,
) -> LoginResult:
    """Password sign-in folded into a result value."""
    email = normalize_string(email)
    password = normalize_string(password)
    if not email or not password:
        return LoginResult(success=False, error=CREDENTIALS_REQUIRED)

    result = await sessions.sign_in_with_password(email, password)
    if result.error:
        logger.info(f"Login rejected: {result.error}")
        return LoginResult(success=False, error=result.error)
    return LoginResult(success=True)
