"""
Client auth context: owns the session and hands out the matching API client.
"""
import logging
from typing import Any, Dict, Optional

import requests

from pathforge.core.config import ClientSettings, settings
from pathforge.client.api import AuthResult, ClientConfig, HttpJobsApi, JobsApi
from pathforge.client.demo import DemoJobsApi, is_demo_token
from pathforge.client.session import SessionStore, is_token_fresh

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@pathforge.app"


class AuthManager:
    def __init__(
        self,
        store: Optional[SessionStore] = None,
        client_settings: Optional[ClientSettings] = None,
        http: Optional[requests.Session] = None,
    ):
        self.store = store or SessionStore()
        self.settings = client_settings or settings.client
        self._http = http
        self._demo_api: Optional[DemoJobsApi] = None
        self.user: Optional[Dict[str, Any]] = None
        self.login_required = False
        self._restore()

    def _restore(self) -> None:
        token = self.store.token
        if self.store.demo_mode:
            if not is_demo_token(token):
                self.store.set_token(self._demo().login(DEMO_EMAIL, "").token)
            return
        if token and not is_token_fresh(token):
            logger.info("Discarding stale session token")
            self.store.clear_token()
            self.login_required = True

    def _demo(self) -> DemoJobsApi:
        if self._demo_api is None:
            self._demo_api = DemoJobsApi()
        return self._demo_api

    @property
    def demo_mode(self) -> bool:
        return self.store.demo_mode

    @property
    def is_authenticated(self) -> bool:
        token = self.store.token
        if self.demo_mode:
            return is_demo_token(token)
        return is_token_fresh(token)

    def api(self) -> JobsApi:
        """Client for the current session: the demo backend or the real API."""
        if self.demo_mode:
            return self._demo()
        config = ClientConfig.from_session(self.store, self.settings)
        return HttpJobsApi(config, http=self._http, on_unauthorized=self.handle_unauthorized)

    def _start_session(self, result: AuthResult) -> Dict[str, Any]:
        self.store.set_token(result.token)
        self.user = result.user
        self.login_required = False
        return result.user

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._start_session(self.api().login(email, password))

    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return self._start_session(self.api().register(name, email, password))

    def logout(self) -> None:
        self.store.clear_token()
        self.user = None

    def enter_demo_mode(self) -> Dict[str, Any]:
        self.store.set_demo_mode(True)
        logger.info("Entering demo mode")
        return self._start_session(self._demo().login(DEMO_EMAIL, ""))

    def leave_demo_mode(self) -> None:
        self.store.set_demo_mode(False)
        self.logout()
        self._demo_api = None

    def handle_unauthorized(self) -> None:
        """Called on any 401: drop the session and send the user back to login."""
        logger.info("Session rejected by server; login required")
        self.logout()
        self.login_required = True
