"""Profile Lookup — elevated by-id reads, error folding, scoped current profile."""

import pytest

from app.core.errors import SessionError, StoreError
from app.services.profile_lookup import get_current_profile, get_profile_by_id, get_user_info
from tests.services.fake_collaborators import (
    FakeSessionProvider, InMemoryProfileStore, make_profile,
)


async def test_get_profile_by_id_returns_row():
    profiles = InMemoryProfileStore([make_profile("p1")])
    assert (await get_profile_by_id(profiles, "p1"))["name"] == "Ana Pérez"


async def test_get_profile_by_id_propagates_store_error():
    with pytest.raises(StoreError):
        await get_profile_by_id(InMemoryProfileStore(error="timeout"), "p1")


async def test_get_user_info_folds_store_error_into_none():
    assert await get_user_info(InMemoryProfileStore(error="timeout"), "p1") is None


@pytest.mark.parametrize("profile_id", [None, "", "   "])
async def test_get_user_info_blank_id_never_queries(profile_id):
    profiles = InMemoryProfileStore([make_profile("p1")])
    assert await get_user_info(profiles, profile_id) is None
    assert profiles.selected == []


async def test_get_user_info_trims_id():
    profiles = InMemoryProfileStore([make_profile("p1")])
    assert (await get_user_info(profiles, " p1 "))["id"] == "p1"


async def test_current_profile_uses_session_id_as_viewer():
    profiles = InMemoryProfileStore([make_profile("u1")], elevated=False)
    profile = await get_current_profile(FakeSessionProvider(user_id="u1"), profiles)
    assert profile["id"] == "u1"
    assert profiles.selected == [("u1", "u1")]


async def test_current_profile_is_none_when_signed_out():
    profiles = InMemoryProfileStore([make_profile("u1")], elevated=False)
    assert await get_current_profile(FakeSessionProvider(), profiles) is None
    assert profiles.selected == []


async def test_current_profile_session_error_raises():
    with pytest.raises(SessionError):
        await get_current_profile(
            FakeSessionProvider(error="jwt malformed"), InMemoryProfileStore(),
        )


async def test_scoped_store_hides_other_profiles():
    profiles = InMemoryProfileStore([make_profile("p1")], elevated=False)
    assert await profiles.select_by_id("p1", viewer_id="u1") is None
