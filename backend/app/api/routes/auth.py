"""Auth Routes — password login that opens a cookie-backed session.

Invariants:
    - Always 200 with LoginResult; credential problems are values, not HTTP errors
    - The session cookie is set only on success, HTTP-only
"""

from fastapi import APIRouter, Depends, Response

from app.api.dependencies import get_session_provider
from app.config import Settings, get_settings
from app.infrastructure.session_provider import DatabaseSessionProvider
from app.schemas.auth import LoginRequest, LoginResult
from app.services.identity_resolver import login_with_password

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=LoginResult)
async def login(
    body: LoginRequest,
    response: Response,
    sessions: DatabaseSessionProvider = Depends(get_session_provider),
    settings: Settings = Depends(get_settings),
):
    """Sign in with email and password."""
    result = await login_with_password(sessions, body.email, body.password)
    if result.success and sessions.access_token:
        response.set_cookie(
            settings.session_cookie_name,
            sessions.access_token,
            max_age=settings.session_ttl_hours * 3600,
            httponly=True,
            samesite="lax",
            secure=settings.session_cookie_secure,
        )
    return result
