"""Application configuration via environment variables."""

import logging
from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "info"
    LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    # Leave policy
    DEFAULT_ALLOWANCE: Decimal = Decimal("20")
    MAX_LEAVE_SPAN_DAYS: int = 365

    @property
    def log_level_value(self) -> int:
        """Translate LOG_LEVEL ("debug", "INFO", ...) into a logging level."""
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()


def configure_logging() -> None:
    """Configure root logging for applications embedding the leave core."""
    logging.basicConfig(
        level=settings.log_level_value,
        format=settings.LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
