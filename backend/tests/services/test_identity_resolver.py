"""Identity Resolver — explicit id short-circuit, session lookup, password login."""

import pytest

from app.core.errors import NoSessionError, SessionError
from app.services.identity_resolver import (
    CREDENTIALS_REQUIRED, login_with_password, resolve_user_id,
)
from tests.services.fake_collaborators import FakeSessionProvider


async def test_explicit_id_is_returned_without_querying_provider():
    sessions = FakeSessionProvider(user_id="u1")
    assert await resolve_user_id(sessions, "explicit") == "explicit"
    assert sessions.get_user_calls == 0


async def test_explicit_id_is_not_trimmed():
    sessions = FakeSessionProvider()
    assert await resolve_user_id(sessions, " u2 ") == " u2 "


@pytest.mark.parametrize("explicit", [None, "", "   "])
async def test_blank_explicit_id_falls_back_to_session(explicit):
    sessions = FakeSessionProvider(user_id="u1")
    assert await resolve_user_id(sessions, explicit) == "u1"
    assert sessions.get_user_calls == 1


async def test_no_session_raises_no_session_error():
    with pytest.raises(NoSessionError) as exc:
        await resolve_user_id(FakeSessionProvider())
    assert exc.value.message == "no active session"


async def test_provider_error_raises_session_error():
    with pytest.raises(SessionError) as exc:
        await resolve_user_id(FakeSessionProvider(user_id="u1", error="jwt expired"))
    assert exc.value.provider_message == "jwt expired"


async def test_login_success():
    sessions = FakeSessionProvider()
    result = await login_with_password(sessions, " ana@example.com ", "secret")
    assert result.success is True
    assert result.error is None
    assert sessions.sign_in_calls == [("ana@example.com", "secret")]


@pytest.mark.parametrize("email, password", [("", "secret"), ("a@b.com", "  "), (None, None)])
async def test_login_blank_credentials_never_reach_provider(email, password):
    sessions = FakeSessionProvider()
    result = await login_with_password(sessions, email, password)
    assert result.success is False
    assert result.error == CREDENTIALS_REQUIRED
    assert sessions.sign_in_calls == []


async def test_login_rejected_returns_provider_message():
    sessions = FakeSessionProvider(sign_in_error="Invalid login credentials")
    result = await login_with_password(sessions, "a@b.com", "wrong")
    assert result.success is False
    assert result.error == "Invalid login credentials"
