from slowapi import Limiter
from slowapi.util import get_remote_address

from pathforge.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

# Applied to the credential endpoints (register/login)
AUTH_RATE_LIMIT = f"{settings.rate_limit_per_minute}/minute"
