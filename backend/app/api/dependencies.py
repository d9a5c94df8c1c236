"""Request Dependencies — per-request wiring of the session provider and stores.

Invariants:
    - Every collaborator is built from the request's own AsyncSession (get_db)
    - The session provider is bound to the request's session cookie, if any
    - Scoped and elevated profile stores are distinct dependencies; routes pick one

Design Decisions:
    - Overriding get_db in tests rewires every collaborator at once
"""

from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.infrastructure.database import get_db
from app.infrastructure.session_provider import DatabaseSessionProvider
from app.infrastructure.sql_card_store import SqlCardStore
from app.infrastructure.sql_profile_store import SqlProfileStore
from app.services.card_repository import CardRepository


def get_session_provider(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> DatabaseSessionProvider:
    return DatabaseSessionProvider(
        db,
        access_token=request.cookies.get(settings.session_cookie_name),
        session_ttl=timedelta(hours=settings.session_ttl_hours),
    )


def get_card_repository(
    db: AsyncSession = Depends(get_db),
) -> CardRepository:
    return CardRepository(SqlCardStore(db))


def get_scoped_profile_store(
    db: AsyncSession = Depends(get_db),
) -> SqlProfileStore:
    return SqlProfileStore(db)


def get_elevated_profile_store(
    db: AsyncSession = Depends(get_db),
) -> SqlProfileStore:
    return SqlProfileStore.service_role(db)
