from datetime import timedelta

import pytest

from pathforge.client.api import ApiAuthError, HttpJobsApi
from pathforge.client.auth import AuthManager
from pathforge.client.demo import DemoJobsApi, is_demo_token
from pathforge.services.auth import create_access_token
from conftest import USER_PASSWORD


@pytest.fixture
def auth(session_store, client_settings, transport):
    return AuthManager(store=session_store, client_settings=client_settings, http=transport)


def test_login_persists_token(auth, session_store, user):
    returned = auth.login(user.email, USER_PASSWORD)
    assert returned["email"] == user.email
    assert auth.is_authenticated
    assert session_store.token is not None
    assert isinstance(auth.api(), HttpJobsApi)
    assert auth.api().config.token == session_store.token


def test_register_then_list(auth):
    auth.register("New Person", "new.person@example.com", "secret123")
    assert auth.api().list_jobs() == []


def test_bad_login_leaves_session_empty(auth, user, session_store):
    with pytest.raises(ApiAuthError):
        auth.login(user.email, "wrong-password")
    assert session_store.token is None
    assert not auth.is_authenticated


def test_stale_token_is_discarded_on_restore(session_store, client_settings):
    session_store.set_token(create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-1)))
    auth = AuthManager(store=session_store, client_settings=client_settings)
    assert session_store.token is None
    assert auth.login_required
    assert not auth.is_authenticated


def test_fresh_token_survives_restore(session_store, client_settings):
    token = create_access_token({"sub": "1"})
    session_store.set_token(token)
    auth = AuthManager(store=session_store, client_settings=client_settings)
    assert auth.is_authenticated
    assert session_store.token == token


def test_logout(auth, user, session_store):
    auth.login(user.email, USER_PASSWORD)
    auth.logout()
    assert session_store.token is None
    assert auth.user is None


def test_demo_mode_uses_offline_client(auth, session_store, transport):
    auth.enter_demo_mode()
    assert auth.demo_mode
    assert is_demo_token(session_store.token)
    assert auth.is_authenticated

    api = auth.api()
    assert isinstance(api, DemoJobsApi)
    assert api.is_demo
    assert len(api.list_jobs()) == 6
    assert transport.calls == []

    auth.leave_demo_mode()
    assert not auth.demo_mode
    assert session_store.token is None
    assert isinstance(auth.api(), HttpJobsApi)


def test_demo_mode_restored_from_store(session_store, client_settings):
    session_store.set_demo_mode(True)
    auth = AuthManager(store=session_store, client_settings=client_settings)
    assert auth.demo_mode
    assert is_demo_token(session_store.token)
    assert isinstance(auth.api(), DemoJobsApi)
