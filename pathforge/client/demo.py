"""
Offline demo backend.

DEMO ONLY: tokens are fabricated locally and every response is simulated in
memory. Nothing here performs network I/O or shares code with the HTTP client.
"""
import copy
import itertools
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from pathforge.client.api import (
    ApiNotFoundError,
    ApiValidationError,
    AuthResult,
    JobsApi,
)
from pathforge.schemas.job import JobCreate, JobUpdate

logger = logging.getLogger(__name__)

DEMO_TOKEN_PREFIX = "demo-mode-token-"
DEMO_USER_ID = "demo-user"

SAMPLE_JOBS: List[Dict[str, Any]] = [
    {
        "title": "Senior React Developer",
        "company": "TechCorp Inc.",
        "location": "San Francisco, CA",
        "salary": "120000",
        "status": "applied",
        "notes": "Great company culture, remote-first approach.",
    },
    {
        "title": "Full Stack Engineer",
        "company": "StartupXYZ",
        "location": "Remote",
        "salary": "100k - 130k",
        "status": "interview",
        "notes": "Technical interview scheduled for next week.",
    },
    {
        "title": "Frontend Developer",
        "company": "Design Studios",
        "location": "New York, NY",
        "salary": "95000",
        "status": "applied",
        "notes": "Portfolio review pending.",
    },
    {
        "title": "Software Engineer",
        "company": "Big Tech Corp",
        "location": "Seattle, WA",
        "salary": "150000",
        "status": "offer",
        "notes": "Negotiate salary and start date.",
    },
    {
        "title": "React Native Developer",
        "company": "Mobile First",
        "location": "Austin, TX",
        "salary": "110000",
        "status": "rejected",
        "notes": "Looking for more mobile experience.",
    },
    {
        "title": "Lead Developer",
        "company": "Enterprise Solutions",
        "location": "Chicago, IL",
        "salary": "140000",
        "status": "interview",
        "notes": "Final interview with VP Engineering.",
    },
]


def fabricate_token() -> str:
    return f"{DEMO_TOKEN_PREFIX}{int(time.time() * 1000)}"


def is_demo_token(token: Optional[str]) -> bool:
    return bool(token) and token.startswith(DEMO_TOKEN_PREFIX)


def _validation_error(exc: ValidationError) -> ApiValidationError:
    errors = [
        {"field": str(e["loc"][-1]) if e["loc"] else "body", "msg": e["msg"]}
        for e in exc.errors()
    ]
    message = "; ".join(f"{e['field']}: {e['msg']}" for e in errors)
    return ApiValidationError(message, status_code=400, errors=errors)


class DemoJobsApi(JobsApi):
    """In-memory stand-in for the PathForge API, applying the same job validation rules."""

    is_demo = True

    def __init__(self, seed: bool = True):
        self._ids = itertools.count(1)
        # Newest first, matching the server's list order
        self._jobs: Dict[str, Dict[str, Any]] = {}
        if seed:
            for data in reversed(SAMPLE_JOBS):
                self.create_job(data)
        logger.info("Demo mode active: responses are simulated locally")

    def _auth(self, name: str, email: str) -> AuthResult:
        return AuthResult(
            token=fabricate_token(),
            user={"id": DEMO_USER_ID, "name": name, "email": email},
        )

    def register(self, name: str, email: str, password: str) -> AuthResult:
        return self._auth(name, email)

    def login(self, email: str, password: str) -> AuthResult:
        return self._auth("Demo User", email)

    def list_jobs(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(job) for job in self._jobs.values()]

    def _get(self, job_id: Any) -> Dict[str, Any]:
        job = self._jobs.get(str(job_id))
        if job is None:
            raise ApiNotFoundError("Job not found", status_code=404)
        return job

    def create_job(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            job_in = JobCreate.model_validate(data)
        except ValidationError as e:
            raise _validation_error(e)
        now = datetime.now(timezone.utc)
        job = job_in.model_dump(mode="json", by_alias=True)
        job_id = f"demo-{next(self._ids)}"
        job.update({
            "id": job_id,
            "ownerId": DEMO_USER_ID,
            "appliedDate": job["appliedDate"] or now.isoformat(),
            "createdAt": now.isoformat(),
            "updatedAt": now.isoformat(),
        })
        self._jobs = {job_id: job, **self._jobs}
        return copy.deepcopy(job)

    def update_job(self, job_id: Any, changes: Dict[str, Any]) -> Dict[str, Any]:
        job = self._get(job_id)
        try:
            job_in = JobUpdate.model_validate(changes)
        except ValidationError as e:
            raise _validation_error(e)
        job.update(job_in.model_dump(mode="json", by_alias=True, exclude_unset=True))
        job["updatedAt"] = datetime.now(timezone.utc).isoformat()
        return copy.deepcopy(job)

    def delete_job(self, job_id: Any) -> str:
        self._get(job_id)
        del self._jobs[str(job_id)]
        return "Job application deleted successfully"

    def health(self) -> Dict[str, Any]:
        return {"status": "up", "mode": "demo", "timestamp": datetime.now(timezone.utc).isoformat()}
