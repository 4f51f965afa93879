from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from string_analyzer import __version__


class Settings(BaseSettings):
    APP_NAME: str = "String Analyzer Service"
    APP_VERSION: str = __version__

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Logging configuration used by string_analyzer.logging
    LOG_LEVEL: str = "INFO"
    CONSOLE_LOG_LEVEL: str = "INFO"

    # Rate limiting (slowapi, in-memory storage)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT: int = 120
    RATE_LIMIT_WINDOW: int = 60

    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
