import pytest

from pathforge.client.api import ApiNotFoundError, ApiValidationError
from pathforge.client.demo import DEMO_TOKEN_PREFIX, DemoJobsApi, SAMPLE_JOBS


def test_fabricated_tokens():
    api = DemoJobsApi(seed=False)
    result = api.login("someone@example.com", "whatever")
    assert result.token.startswith(DEMO_TOKEN_PREFIX)
    assert result.user["email"] == "someone@example.com"


def test_seeded_jobs_newest_first():
    jobs = DemoJobsApi().list_jobs()
    assert [j["title"] for j in jobs] == [j["title"] for j in SAMPLE_JOBS]
    assert all(j["id"].startswith("demo-") for j in jobs)


def test_create_update_delete():
    api = DemoJobsApi(seed=False)
    job = api.create_job({"title": "A", "company": "B", "location": "C"})
    assert job["status"] == "applied"
    assert job["appliedDate"]

    updated = api.update_status(job["id"], "interview")
    assert updated["status"] == "interview"
    assert api.list_jobs()[0]["status"] == "interview"

    assert api.delete_job(job["id"])
    assert api.list_jobs() == []
    with pytest.raises(ApiNotFoundError):
        api.delete_job(job["id"])


def test_same_validation_rules_as_server():
    api = DemoJobsApi(seed=False)
    with pytest.raises(ApiValidationError) as exc_info:
        api.create_job({"title": "A", "company": "B", "location": "C", "status": "archived"})
    assert "status" in exc_info.value.field_errors
    assert api.list_jobs() == []

    job = api.create_job({"title": "A", "company": "B", "location": "C"})
    with pytest.raises(ApiValidationError):
        api.update_job(job["id"], {"title": None})


def test_returned_records_are_copies():
    api = DemoJobsApi(seed=False)
    job = api.create_job({"title": "A", "company": "B", "location": "C"})
    job["status"] = "offer"
    assert api.list_jobs()[0]["status"] == "applied"


def test_health_reports_demo_mode():
    assert DemoJobsApi(seed=False).health()["mode"] == "demo"
