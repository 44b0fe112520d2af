import os
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class ClientSettings(BaseModel):
    """Settings for the board client (session file, API location, timeouts)."""
    api_url: str = Field(default_factory=lambda: os.getenv("PATHFORGE_API_URL", "http://localhost:8000"))
    api_prefix: str = "/api"
    session_file: str = Field(
        default_factory=lambda: os.getenv(
            "PATHFORGE_SESSION_FILE", os.path.join("~", ".pathforge", "session.json")
        )
    )
    request_timeout: Optional[float] = Field(
        default_factory=lambda: float(os.getenv("PATHFORGE_REQUEST_TIMEOUT", "30"))
    )
    health_timeout: float = Field(default_factory=lambda: float(os.getenv("PATHFORGE_HEALTH_TIMEOUT", "5")))


class Config(BaseModel):
    app_name: str = "PathForge"
    environment: str = Field(default_factory=lambda: os.getenv("APP_ENV", "development"))
    api_prefix: str = "/api"

    # Database
    database_url: str = Field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///./pathforge.db"))

    # Auth
    secret_key: str = Field(
        default_factory=lambda: os.getenv("SECRET_KEY", "dev-only-insecure-key-DO-NOT-USE-IN-PROD")
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(
        default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))
    )

    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins loaded from env.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://localhost:5173,"
                "http://127.0.0.1:3000,http://127.0.0.1:5173,"
                "http://localhost:4173,http://localhost",
            ).split(",")
            if o.strip()
        ]
    )

    rate_limit_per_minute: int = Field(default_factory=lambda: int(os.getenv("RATE_LIMIT_PER_MINUTE", "30")))
    rate_limit_enabled: bool = Field(default_factory=lambda: _env_flag("RATE_LIMIT_ENABLED", "true"))

    client: ClientSettings = Field(default_factory=ClientSettings)


settings = Config()

# --- Startup Validation for Production ---
_logger = logging.getLogger(__name__)
if settings.environment not in ("development", "testing"):
    if "dev-only" in settings.secret_key or "change-it" in settings.secret_key:
        raise RuntimeError(
            "FATAL: SECRET_KEY must be set for non-development environments. "
            "Set it as an environment variable."
        )
elif "dev-only" in settings.secret_key:
    _logger.warning("⚠ Using insecure default SECRET_KEY; only acceptable in development.")
