"""SQL adapters — card/profile stores and the password session provider on SQLite.

Invariants:
    - Absent optional columns come back as None, never ""
    - Blank full_name rejected by the table itself → StoreError / PersistenceError
    - Scoped profile store only returns the viewer's own row
    - Expired or unknown session tokens resolve to "nobody"
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from app.core.errors import PersistenceError, StoreError
from app.infrastructure.session_provider import (
    INVALID_CREDENTIALS, DatabaseSessionProvider,
)
from app.infrastructure.sql_card_store import SqlCardStore
from app.infrastructure.sql_profile_store import SqlProfileStore
from app.models.auth_session import AuthSessionRow
from app.services.card_repository import CardRepository
from tests.services.conftest import PASSWORD


def card_row(**overrides) -> dict:
    row = {
        "full_name": "Ana Pérez",
        "user_id": str(uuid.uuid4()),
        "email": None,
        "phone": None,
        "company": None,
        "position": None,
        "image_url": None,
        "code_phone": None,
        "is_archive": False,
    }
    row.update(overrides)
    return row


async def test_card_insert_round_trips_nulls(test_db):
    store = SqlCardStore(test_db)
    inserted = await store.insert(card_row(company="Acme"))

    fetched = await store.select_by_id(inserted["id"])
    assert fetched["full_name"] == "Ana Pérez"
    assert fetched["company"] == "Acme"
    assert fetched["email"] is None
    assert fetched["is_archive"] is False
    assert fetched["created_at"] is not None


async def test_card_select_unknown_id_returns_none(test_db):
    store = SqlCardStore(test_db)
    assert await store.select_by_id(str(uuid.uuid4())) is None


async def test_blank_full_name_rejected_by_table(test_db):
    with pytest.raises(StoreError) as exc:
        await SqlCardStore(test_db).insert(card_row(full_name="   "))
    assert exc.value.operation == "insert"


async def test_repository_wraps_table_rejection(test_db):
    cards = CardRepository(SqlCardStore(test_db))
    with pytest.raises(PersistenceError) as exc:
        await cards.insert_card(card_row(full_name=""))
    assert exc.value.message.startswith("could not create card: ")


async def test_store_usable_after_rejected_insert(test_db):
    store = SqlCardStore(test_db)
    with pytest.raises(StoreError):
        await store.insert(card_row(full_name=""))
    inserted = await store.insert(card_row())
    assert (await store.select_by_id(inserted["id"]))["id"] == inserted["id"]


async def test_elevated_profile_store_reads_any_profile(test_db, owner_profile, viewer):
    store = SqlProfileStore.service_role(test_db)
    profile = await store.select_by_id(owner_profile.id)
    assert profile["name"] == "  Ana Pérez "
    assert profile["position"] is None


async def test_scoped_profile_store_hides_other_profiles(test_db, owner_profile, viewer):
    store = SqlProfileStore(test_db)
    assert await store.select_by_id(owner_profile.id, viewer_id=viewer.id) is None
    assert await store.select_by_id(owner_profile.id) is None
    own = await store.select_by_id(owner_profile.id, viewer_id=owner_profile.id)
    assert own["id"] == owner_profile.id


async def test_sign_in_opens_session(test_db, viewer):
    provider = DatabaseSessionProvider(test_db)
    result = await provider.sign_in_with_password("Viewer@Example.com", PASSWORD)
    assert result.error is None
    assert result.access_token == provider.access_token

    lookup = await DatabaseSessionProvider(test_db, result.access_token).get_user()
    assert lookup.error is None
    assert lookup.user.id == viewer.id
    assert lookup.user.email == "viewer@example.com"


@pytest.mark.parametrize("email, password", [
    ("viewer@example.com", "wrong password"),
    ("nobody@example.com", PASSWORD),
])
async def test_bad_credentials_share_one_message(test_db, viewer, email, password):
    provider = DatabaseSessionProvider(test_db)
    result = await provider.sign_in_with_password(email, password)
    assert result.access_token is None
    assert result.error == INVALID_CREDENTIALS
    assert provider.access_token is None


async def test_no_token_means_nobody(test_db):
    lookup = await DatabaseSessionProvider(test_db).get_user()
    assert lookup.user is None
    assert lookup.error is None


async def test_unknown_token_means_nobody(test_db, viewer):
    lookup = await DatabaseSessionProvider(test_db, "forged").get_user()
    assert lookup.user is None
    assert lookup.error is None


async def test_expired_session_means_nobody(test_db, viewer):
    now = datetime.now(timezone.utc)
    test_db.add(AuthSessionRow(
        token="expired-token",
        user_id=viewer.id,
        created_at=now - timedelta(days=8),
        expires_at=now - timedelta(days=1),
    ))
    await test_db.commit()

    lookup = await DatabaseSessionProvider(test_db, "expired-token").get_user()
    assert lookup.user is None


@pytest.mark.parametrize("owner", ["u1", "owner-1", str(uuid.uuid4())])
async def test_explicit_owner_round_trips_verbatim(test_db, owner):
    cards = CardRepository(SqlCardStore(test_db))
    created = await cards.insert_card(card_row(user_id=owner))

    lookup = await cards.get_card_by_id(created.id)
    assert lookup.error is None
    assert lookup.card.user_id == owner


async def test_repository_lookup_keeps_absent_fields_null(test_db):
    cards = CardRepository(SqlCardStore(test_db))
    created = await cards.insert_card(card_row(email=None, company="Acme"))

    lookup = await cards.get_card_by_id(created.id)
    assert lookup.error is None
    assert lookup.card.email is None
    assert lookup.card.phone is None
    assert lookup.card.company == "Acme"
    assert lookup.card.full_name == "Ana Pérez"
