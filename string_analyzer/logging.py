import logging
import time
from logging.config import dictConfig

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from string_analyzer.config import get_settings

# ---------------------------------------------------
# Logging Configuration
# ---------------------------------------------------
def build_logging_config() -> dict:
    settings = get_settings()
    log_level = settings.LOG_LEVEL.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "color": {
                "()": "colorlog.ColoredFormatter",
                "format": "%(log_color)s[%(asctime)s] %(levelname)s [%(name)s] in %(module)s: %(message)s",
                "log_colors": {
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "bold_red",
                },
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "color",
                "level": settings.CONSOLE_LOG_LEVEL.upper(),
            },
        },
        "loggers": {
            # Silence uvicorn noise in console
            "uvicorn": {"level": "WARNING"},
            "uvicorn.error": {"level": "WARNING"},
            "uvicorn.access": {"level": "WARNING"},
            "string_analyzer": {
                "level": log_level,
                "handlers": ["console"],
                "propagate": False,
            },
            "string_analyzer.request": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {
            "level": log_level,
            "handlers": ["console"],
        },
    }


def init_logging() -> None:
    dictConfig(build_logging_config())


def preview(value: str, max_len: int = 40) -> str:
    """Shorten a stored value for debug log lines."""
    return value if len(value) <= max_len else value[: max_len - 1] + "…"


# ---------------------------------------------------
# Request Logging Middleware
# ---------------------------------------------------
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        logger = logging.getLogger("string_analyzer.request")
        start_time = time.time()

        response = await call_next(request)

        duration = (time.time() - start_time) * 1000
        logger.info(
            "%s %s -> %s (%.2f ms)",
            request.method,
            request.url.path,
            response.status_code,
            duration,
        )
        return response
