"""
Client-side session persistence.

The token lives under the well-known ``token`` key of a small JSON file, the
same shape a browser keeps in local storage. Expiry is read from the token's
claims without verifying the signature; the server remains the authority on
whether a token is actually valid.
"""
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jose import JWTError, jwt

from pathforge.core.config import settings

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
DEMO_MODE_KEY = "demoMode"


def token_expiry(token: str) -> Optional[datetime]:
    """Return the ``exp`` claim as an aware datetime, or None if unreadable."""
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return None
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return None
    return datetime.fromtimestamp(exp, tz=timezone.utc)


def is_token_fresh(token: Optional[str], now: Optional[datetime] = None) -> bool:
    if not token:
        return False
    expiry = token_expiry(token)
    if expiry is None:
        return False
    return expiry > (now or datetime.now(timezone.utc))


class SessionStore:
    """Key/value session storage backed by a JSON file."""

    def __init__(self, path: Union[str, os.PathLike, None] = None):
        self.path = Path(path or settings.client.session_file).expanduser()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def get(self, key: str) -> Any:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    @property
    def token(self) -> Optional[str]:
        return self.get(TOKEN_KEY)

    def set_token(self, token: str) -> None:
        self.set(TOKEN_KEY, token)

    def clear_token(self) -> None:
        self.remove(TOKEN_KEY)

    @property
    def demo_mode(self) -> bool:
        return bool(self.get(DEMO_MODE_KEY))

    def set_demo_mode(self, enabled: bool) -> None:
        if enabled:
            self.set(DEMO_MODE_KEY, True)
        else:
            self.remove(DEMO_MODE_KEY)
