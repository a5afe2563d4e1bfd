"""Application settings loaded from environment variables (+ optional .env)."""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_DATABASE_URL = "sqlite:///./database.db"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using {default}")
        return default


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the Taskboard server.

    Attributes:
        host: Address uvicorn binds to
        port: Listening port (PORT, default 3000)
        database_url: SQLAlchemy database URL
        sql_echo: Echo emitted SQL statements
        log_level: Root logging level name
    """
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    database_url: str = DEFAULT_DATABASE_URL
    sql_echo: bool = False
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", DEFAULT_PORT),
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        sql_echo=_env_bool("SQL_ECHO", False),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
