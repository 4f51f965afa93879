import logging
from typing import Any, Optional

from slowapi import Limiter
from slowapi.util import get_remote_address

from string_analyzer.config import get_settings

logger = logging.getLogger("string_analyzer.limiter")


def default_limit() -> str:
    """Current limit from settings, read on every request."""
    settings = get_settings()
    return f"{settings.RATE_LIMIT} per {settings.RATE_LIMIT_WINDOW} seconds"


def create_limiter() -> Limiter:
    settings = get_settings()
    try:
        return Limiter(
            key_func=get_remote_address,
            default_limits=[default_limit],
            enabled=settings.RATE_LIMIT_ENABLED,
        )
    except Exception:
        logger.exception("Failed to create slowapi Limiter")
        raise


limiter = create_limiter()


def get_rate_limit_decorator(limit: Optional[str] = None) -> Any:
    return limiter.limit(limit or default_limit)
