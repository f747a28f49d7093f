"""Application configuration loaded from environment variables."""

import logging
import sys
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class Settings(BaseSettings):
    """All configuration is loaded from environment variables (or .env file)."""

    # --- App ---
    app_name: str = "Blosom"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "development"  # development | staging | production

    # --- Tracking ---
    tracking_config_path: Path | None = None  # overrides the bundled tracking_config.yaml

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Install the stdout log handler and apply the configured level.

    Returns the ``blosom`` root logger.
    """
    s = settings or get_settings()
    level = logging.DEBUG if s.debug else logging.getLevelName(s.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {s.log_level!r}")

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stdout,
    )
    logger = logging.getLogger("blosom")
    logger.setLevel(level)
    logger.debug("Logging configured at %s [%s]", logging.getLevelName(level), s.environment)
    return logger
