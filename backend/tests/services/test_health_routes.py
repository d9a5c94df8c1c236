"""Health routes — liveness payload and readiness checks (database, schema)."""

import app.infrastructure.database as db_module
from app.core.domain_types import OwnerPolicy
from app.models.card import Card


async def test_liveness_reports_owner_policy(client, override_settings):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json() == {
        "status": "healthy",
        "service": "contact-card-api",
        "card_owner_policy": "session",
    }

    override_settings(card_owner_policy=OwnerPolicy.PROFILE)
    res = await client.get("/api/v1/health/")
    assert res.json()["card_owner_policy"] == "profile"


async def test_ready_when_schema_migrated(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json() == {
        "status": "ready",
        "checks": {"database": "healthy", "schema": "migrated"},
    }


async def test_not_ready_when_cards_table_missing(client, test_engine):
    async with test_engine.begin() as conn:
        await conn.run_sync(Card.__table__.drop)

    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json() == {
        "status": "not_ready",
        "reason": "schema_incomplete",
        "missing_tables": ["cards"],
    }


async def test_not_ready_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"
