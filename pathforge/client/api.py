"""
API client interface for the board, plus the HTTP implementation.

Request configuration (base URL, bearer token, timeouts) is an explicit
immutable ``ClientConfig`` built from the session and handed to the client,
so no request ever picks up shared global defaults.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

import requests
from pydantic import BaseModel, ConfigDict

from pathforge.core.config import ClientSettings, settings
from pathforge.client.session import SessionStore

logger = logging.getLogger(__name__)


# ============================================================================
# ERRORS
# ============================================================================
class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[List[Dict[str, Any]]] = None):
        self.message = message
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)

    @property
    def field_errors(self) -> Dict[str, str]:
        """Field name -> first message, for inline form display."""
        result: Dict[str, str] = {}
        for error in self.errors:
            field = error.get("field")
            if field and field not in result:
                result[field] = error.get("msg", self.message)
        return result


class ApiValidationError(ApiError):
    pass


class ApiAuthError(ApiError):
    pass


class ApiForbiddenError(ApiError):
    pass


class ApiNotFoundError(ApiError):
    pass


class ApiConflictError(ApiError):
    pass


class ApiServerError(ApiError):
    pass


class ApiNetworkError(ApiError):
    """No response was received."""


_ERRORS_BY_STATUS = {
    400: ApiValidationError,
    401: ApiAuthError,
    403: ApiForbiddenError,
    404: ApiNotFoundError,
    409: ApiConflictError,
}


# ============================================================================
# CONFIG & RESULTS
# ============================================================================
class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str
    api_prefix: str = "/api"
    token: Optional[str] = None
    timeout: Optional[float] = 30.0
    health_timeout: float = 5.0

    @classmethod
    def from_session(cls, store: SessionStore, client_settings: Optional[ClientSettings] = None) -> "ClientConfig":
        client_settings = client_settings or settings.client
        return cls(
            base_url=client_settings.api_url,
            api_prefix=client_settings.api_prefix,
            token=store.token,
            timeout=client_settings.request_timeout,
            health_timeout=client_settings.health_timeout,
        )

    def url(self, path: str, prefixed: bool = True) -> str:
        prefix = self.api_prefix if prefixed else ""
        return f"{self.base_url.rstrip('/')}{prefix}{path}"

    def headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


class AuthResult(BaseModel):
    token: str
    user: Dict[str, Any]


# ============================================================================
# INTERFACE
# ============================================================================
class JobsApi(ABC):
    """Everything the board needs from a backend."""

    is_demo = False

    @abstractmethod
    def register(self, name: str, email: str, password: str) -> AuthResult:
        pass

    @abstractmethod
    def login(self, email: str, password: str) -> AuthResult:
        pass

    @abstractmethod
    def list_jobs(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def create_job(self, data: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def update_job(self, job_id: Any, changes: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def delete_job(self, job_id: Any) -> str:
        pass

    @abstractmethod
    def health(self) -> Dict[str, Any]:
        pass

    def update_status(self, job_id: Any, status: str) -> Dict[str, Any]:
        return self.update_job(job_id, {"status": status})


# ============================================================================
# HTTP IMPLEMENTATION
# ============================================================================
class HttpJobsApi(JobsApi):
    def __init__(
        self,
        config: ClientConfig,
        http: Optional[requests.Session] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
    ):
        self.config = config
        self._http = http or requests.Session()
        self._on_unauthorized = on_unauthorized

    def _request(self, method: str, path: str, json: Any = None, prefixed: bool = True, timeout: Optional[float] = None) -> Any:
        url = self.config.url(path, prefixed=prefixed)
        try:
            response = self._http.request(
                method,
                url,
                headers=self.config.headers(),
                json=json,
                timeout=timeout if timeout is not None else self.config.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed without a response: {e}")
            raise ApiNetworkError(f"Network error: unable to reach {self.config.base_url}") from e

        if response.status_code >= 400:
            raise self._error_for(method, url, response)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{method} {url} returned a non-JSON body")
            raise ApiServerError(
                f"Unexpected response from server (status {response.status_code})",
                status_code=response.status_code,
            ) from e

    def _error_for(self, method: str, url: str, response) -> ApiError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        status_code = response.status_code
        message = body.get("message") or f"Request failed with status {status_code}"
        error_cls = _ERRORS_BY_STATUS.get(status_code, ApiServerError)
        logger.info(f"{method} {url} -> {status_code}: {message}")

        if error_cls is ApiAuthError and self._on_unauthorized is not None:
            self._on_unauthorized()
        return error_cls(message, status_code=status_code, errors=body.get("errors"))

    def register(self, name: str, email: str, password: str) -> AuthResult:
        body = self._request("POST", "/auth/register", json={"name": name, "email": email, "password": password})
        return AuthResult(token=body["token"], user=body["user"])

    def login(self, email: str, password: str) -> AuthResult:
        body = self._request("POST", "/auth/login", json={"email": email, "password": password})
        return AuthResult(token=body["token"], user=body["user"])

    def list_jobs(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/jobs")

    def create_job(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/jobs", json=data)

    def update_job(self, job_id: Any, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/jobs/{job_id}", json=changes)

    def delete_job(self, job_id: Any) -> str:
        body = self._request("DELETE", f"/jobs/{job_id}")
        return body["message"]

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health", prefixed=False, timeout=self.config.health_timeout)
