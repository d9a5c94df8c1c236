"""Database Session Provider — password sign-in and "who is signed in?" over SQL.

Invariants:
    - One provider per request, bound to that request's access token (or None)
    - Failures are reported as values (UserLookup.error / SignInResult.error), never raised
    - Expired sessions are invisible: get_user() answers "nobody" for them
    - Unknown email and wrong password produce the same error message

Design Decisions:
    - Opaque tokens stored in auth_sessions over signed JWTs: revocation is a row delete
    - sign_in_with_password remembers the issued token so the route can set the cookie
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.domain_types import UserId
from app.core.repository_protocols import AuthUser, SignInResult, UserLookup
from app.infrastructure.database import describe_store_error
from app.infrastructure.passwords import (
    Credentials, hash_credentials, verify_credentials,
)
from app.models.auth_session import AuthSessionRow
from app.models.auth_user import AuthUserRow

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid login credentials"


class DatabaseSessionProvider:
    """SessionProvider backed by the auth_users / auth_sessions tables."""

    def __init__(
        self,
        db: AsyncSession,
        access_token: str | None = None,
        session_ttl: timedelta = timedelta(days=7),
    ):
        self.db = db
        self.access_token = access_token
        self.session_ttl = session_ttl

    async def sign_in_with_password(
        self, email: str, password: str,
    ) -> SignInResult:
        """Verify credentials and open a new session."""
        try:
            result = await self.db.execute(
                select(AuthUserRow).where(AuthUserRow.email == email.lower()),
            )
            user = result.scalar_one_or_none()
            if not user or not verify_credentials(
                password, Credentials(user.password_hash, user.password_salt),
            ):
                return SignInResult(error=INVALID_CREDENTIALS)

            now = datetime.now(timezone.utc)
            session = AuthSessionRow(
                token=secrets.token_urlsafe(32),
                user_id=user.id,
                created_at=now,
                expires_at=now + self.session_ttl,
            )
            self.db.add(session)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Sign-in failed on store: {e}")
            return SignInResult(error="authentication service unavailable")

        self.access_token = session.token
        logger.info("User signed in", extra={"user_id": user.id})
        return SignInResult(access_token=session.token)

    async def get_user(self) -> UserLookup:
        """Resolve the bound access token to its user, if the session is still active."""
        if not self.access_token:
            return UserLookup()
        try:
            result = await self.db.execute(
                select(AuthUserRow)
                .join(AuthSessionRow, AuthSessionRow.user_id == AuthUserRow.id)
                .where(AuthSessionRow.token == self.access_token)
                .where(AuthSessionRow.expires_at > datetime.now(timezone.utc)),
            )
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Session lookup failed: {e}")
            return UserLookup(error=describe_store_error(e))
        if not user:
            return UserLookup()
        return UserLookup(user=AuthUser(id=UserId(user.id), email=user.email))


async def create_auth_user(
    db: AsyncSession, email: str, password: str, iterations: int | None = None,
) -> AuthUserRow:
    """Register credentials (seed scripts and fixtures; there is no sign-up route)."""
    credentials = hash_credentials(
        password, iterations or get_settings().password_hash_iterations,
    )
    user = AuthUserRow(
        email=email.strip().lower(),
        password_hash=credentials.password_hash,
        password_salt=credentials.password_salt,
    )
    db.add(user)
    await db.commit()
    return user
