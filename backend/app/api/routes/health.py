"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 unless the database answers AND every
      table the service writes to (auth_users, auth_sessions, profiles, cards) exists
    - db_manager is read at request time, after lifespan has initialized it
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.core.errors import StoreError
from app.db.base import Base
from app.infrastructure import database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/health", tags=["health"])


def _not_ready(reason: str, **details) -> JSONResponse:
    logger.warning(f"Readiness check failed: {reason}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason, **details},
    )


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_settings)):
    """Liveness, plus the ownership rule this instance applies to saved cards."""
    return {
        "status": "healthy",
        "service": "contact-card-api",
        "card_owner_policy": settings.card_owner_policy.value,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness: database reachable and migrated."""
    manager = database.db_manager
    if not manager or not await manager.health_check():
        return _not_ready("database_unavailable")
    try:
        missing = await manager.missing_tables(sorted(Base.metadata.tables))
    except StoreError:
        return _not_ready("database_unavailable")
    if missing:
        return _not_ready("schema_incomplete", missing_tables=missing)
    return {"status": "ready", "checks": {"database": "healthy", "schema": "migrated"}}
