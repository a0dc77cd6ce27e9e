"""Settings loaded from environment variables.

``PORT`` is kept unprefixed so the service runs unchanged on hosts that set it.
Everything else uses the ``TASKS_`` prefix.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

ENV_PREFIX = "TASKS"

logger = logging.getLogger(__name__)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s=%r, using %d", name, raw, default)
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    items = [part.strip() for part in raw.split(",") if part.strip()]
    return items or list(default)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the task API."""

    host: str = "127.0.0.1"
    port: int = 3000
    tasks_file: Path = Path("tasks.json")
    static_dir: Path = Path("public")
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the environment, falling back to defaults."""
    defaults = Settings()
    return Settings(
        host=_env(_k("HOST"), defaults.host),
        port=_env_int("PORT", defaults.port),
        tasks_file=Path(_env(_k("FILE"), str(defaults.tasks_file))),
        static_dir=Path(_env(_k("STATIC_DIR"), str(defaults.static_dir))),
        cors_origins=_env_list(_k("CORS_ORIGINS"), defaults.cors_origins),
        log_level=_env(_k("LOG_LEVEL"), defaults.log_level).upper(),
    )
