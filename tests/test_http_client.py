import pytest

from pathforge.client.api import (
    ApiAuthError,
    ApiConflictError,
    ApiForbiddenError,
    ApiNetworkError,
    ApiNotFoundError,
    ApiServerError,
    ApiValidationError,
    ClientConfig,
    HttpJobsApi,
)
from pathforge.client.auth import AuthManager
from pathforge.client.board import Board
from pathforge.client.controller import BoardController, DragLocation
from conftest import TEST_BASE_URL, USER_PASSWORD


class FakeResponse:
    def __init__(self, status_code, body=None, content=b"x"):
        self.status_code = status_code
        self._body = body
        self.content = content

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class CannedTransport:
    def __init__(self, response):
        self.response = response

    def request(self, method, url, headers=None, json=None, timeout=None):
        return self.response


def _api(transport, token=None, on_unauthorized=None):
    config = ClientConfig(base_url=TEST_BASE_URL, token=token, timeout=10, health_timeout=2)
    return HttpJobsApi(config, http=transport, on_unauthorized=on_unauthorized)


def test_config_headers_and_urls():
    config = ClientConfig(base_url="http://api.local/", token="abc")
    assert config.url("/jobs") == "http://api.local/api/jobs"
    assert config.url("/health", prefixed=False) == "http://api.local/health"
    assert config.headers()["Authorization"] == "Bearer abc"
    assert "Authorization" not in ClientConfig(base_url="http://api.local").headers()


def test_config_is_built_from_session(session_store, client_settings):
    session_store.set_token("tok")
    config = ClientConfig.from_session(session_store, client_settings)
    assert config.token == "tok"
    assert config.base_url == TEST_BASE_URL
    assert config.timeout == 10


def test_register_login_and_crud_against_api(transport):
    api = _api(transport)
    registered = api.register("Http User", "http.user@example.com", "secret123")
    assert registered.user["email"] == "http.user@example.com"

    logged_in = api.login("http.user@example.com", "secret123")
    authed = _api(transport, token=logged_in.token)

    created = authed.create_job({"title": "SRE", "company": "Hooli", "location": "Remote"})
    assert created["status"] == "applied"

    moved = authed.update_status(created["id"], "interview")
    assert moved["status"] == "interview"
    assert [j["id"] for j in authed.list_jobs()] == [created["id"]]

    assert authed.delete_job(created["id"]) == "Job application deleted successfully"
    assert authed.list_jobs() == []


def test_health_uses_its_own_timeout(transport):
    api = _api(transport)
    assert api.health()["status"] == "up"
    method, url, timeout = transport.calls[-1]
    assert url == f"{TEST_BASE_URL}/health"
    assert timeout == 2


def test_validation_error_carries_field_errors(transport, user, get_token):
    api = _api(transport, token=get_token(user))
    with pytest.raises(ApiValidationError) as exc_info:
        api.create_job({"company": "Acme", "location": "Remote", "status": "nope"})
    assert exc_info.value.status_code == 400
    assert set(exc_info.value.field_errors) >= {"title", "status"}


def test_unauthorized_invokes_callback(transport):
    calls = []
    api = _api(transport, token="bogus", on_unauthorized=lambda: calls.append(1))
    with pytest.raises(ApiAuthError):
        api.list_jobs()
    assert calls == [1]


def test_forbidden_and_not_found(transport, user, other_user, get_token):
    theirs = _api(transport, token=get_token(other_user)).create_job(
        {"title": "Theirs", "company": "Acme", "location": "Remote"}
    )
    mine = _api(transport, token=get_token(user))
    with pytest.raises(ApiForbiddenError):
        mine.delete_job(theirs["id"])
    with pytest.raises(ApiNotFoundError):
        mine.update_status(424242, "offer")


def test_conflict_on_duplicate_registration(transport, user):
    with pytest.raises(ApiConflictError):
        _api(transport).register("Dup", user.email, "secret123")


def test_network_failure_is_wrapped(transport):
    transport.fail_methods.add("GET")
    with pytest.raises(ApiNetworkError):
        _api(transport).list_jobs()


def test_non_json_server_error():
    api = _api(CannedTransport(FakeResponse(502, body=None)))
    with pytest.raises(ApiServerError) as exc_info:
        api.list_jobs()
    assert exc_info.value.status_code == 502
    assert "502" in exc_info.value.message


def test_drag_rollback_against_real_api(transport, client_settings, session_store, user):
    auth = AuthManager(store=session_store, client_settings=client_settings, http=transport)
    auth.login(user.email, USER_PASSWORD)
    api = auth.api()
    for title in ("One", "Two", "Three"):
        api.create_job({"title": title, "company": "Acme", "location": "Remote"})

    controller = BoardController(api)
    assert controller.load()
    job_id = controller.board.columns["applied"][0]

    transport.fail_methods.add("PATCH")
    controller.on_drag_end(job_id, DragLocation("applied", 0), DragLocation("offer", 0))

    assert controller.error is not None
    assert controller.board.snapshot() == Board.from_jobs(api.list_jobs()).snapshot()
    assert controller.board.columns["offer"] == []

    transport.fail_methods.clear()
    controller.on_drag_end(job_id, DragLocation("applied", 0), DragLocation("offer", 0))
    assert controller.board.columns["offer"] == [job_id]
    assert Board.from_jobs(api.list_jobs()).columns["offer"] == [job_id]


def test_expired_session_on_drag_clears_token(transport, client_settings, session_store, user, get_token):
    auth = AuthManager(store=session_store, client_settings=client_settings, http=transport)
    auth.login(user.email, USER_PASSWORD)
    api = auth.api()
    created = api.create_job({"title": "One", "company": "Acme", "location": "Remote"})
    controller = BoardController(api)
    controller.load()

    # Server now rejects the token the client is holding
    controller.api = HttpJobsApi(
        api.config.model_copy(update={"token": "tampered"}),
        http=transport,
        on_unauthorized=auth.handle_unauthorized,
    )
    controller.on_drag_end(created["id"], DragLocation("applied", 0), DragLocation("offer", 0))

    assert controller.login_required
    assert auth.login_required
    assert session_store.token is None
    assert len(controller.board) == 0


def test_non_json_success_body_is_a_server_error():
    api = _api(CannedTransport(FakeResponse(200, body=None, content=b"<html>proxy</html>")))
    with pytest.raises(ApiServerError) as exc_info:
        api.list_jobs()
    assert exc_info.value.status_code == 200


def test_non_json_success_body_during_drag_rolls_back():
    api = _api(CannedTransport(FakeResponse(200, body=None, content=b"<html>proxy</html>")))
    controller = BoardController(api)
    controller.board = Board.from_jobs([{"id": 1, "status": "applied", "title": "A"}])

    controller.on_drag_end(1, DragLocation("applied", 0), DragLocation("offer", 0))

    assert controller.board.columns["applied"] == [1]
    assert controller.board.jobs[1]["status"] == "applied"
    assert controller.error.startswith("Could not update job status")
