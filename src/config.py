"""Application configuration loaded from environment variables."""

import logging
import sys
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All configuration is loaded from environment variables (or .env file)."""

    # --- App ---
    app_name: str = "GutCheck Cycle Engine"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    environment: str = "development"  # development | staging | production

    # --- Cycle engine ---
    cycle_config_path: str | None = None  # overrides the bundled cycle_config.yaml

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Route GutCheck logs to stdout at the configured level.

    Intended for host applications and scripts; the engine itself never
    configures logging on import.
    """
    settings = settings or get_settings()
    level = settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("gutcheck").setLevel(level)
    logging.getLogger("gutcheck").info(
        "Logging configured for %s v%s [%s]",
        settings.app_name,
        settings.app_version,
        settings.environment,
    )
