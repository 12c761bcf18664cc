"""Rate limiting configuration for role mutation endpoints."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from school_rbac.config import get_settings

_settings = get_settings()

# In-memory storage; a single process serves the roles backend
limiter = Limiter(
    key_func=get_remote_address,
    enabled=_settings.rate_limit_enabled,
)

# Rate limit constants for different endpoint types
ROLE_MODIFY_LIMIT = _settings.role_modify_limit
