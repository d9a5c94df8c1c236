"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Session provider reports failures as values ({user?, error?}), never raises
    - Stores raise StoreError on failure and return None for "no row"

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO; the pure rules in core/
      never await anything themselves
    - Rows are plain dicts keyed by column name: the wire contract is the
      column list, not an ORM class
"""

from dataclasses import dataclass
from typing import Protocol

from app.core.domain_types import UserId


@dataclass(frozen=True)
class AuthUser:
    """The signed-in identity as reported by the session provider."""
    id: UserId
    email: str


@dataclass(frozen=True)
class UserLookup:
    """Answer to "who is signed in?" — user and error are never both set."""
    user: AuthUser | None = None
    error: str | None = None


@dataclass(frozen=True)
class SignInResult:
    """Outcome of a password sign-in; access_token set only on success."""
    access_token: str | None = None
    error: str | None = None


class SessionProvider(Protocol):
    """Contract for the identity provider — implemented by shell."""
    async def sign_in_with_password(
        self, email: str, password: str,
    ) -> SignInResult: ...
    async def get_user(self) -> UserLookup: ...


class CardStore(Protocol):
    """Contract for the `cards` table — implemented by shell."""
    async def insert(self, row: dict) -> dict: ...
    async def select_by_id(self, card_id: str) -> dict | None: ...


class ProfileStore(Protocol):
    """Contract for the `profiles` table — implemented by shell.

    A scoped store only returns the row whose id equals viewer_id; an
    elevated store ignores viewer_id and can read any profile.
    """
    async def select_by_id(
        self, profile_id: str, viewer_id: UserId | None = None,
    ) -> dict | None: ...
