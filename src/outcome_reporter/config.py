"""Process configuration read from the environment.

Settings are loaded once at application startup. A missing required
variable is fatal: the application refuses to start.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from outcome_reporter.errors import ConfigError

DATABASE_URL_VAR = "REPORTER_DATABASE_URL"
TOKEN_VAR = "REPORTER_TOKEN"
REQUESTER_VAR = "REPORTER_REQUESTER"
LOG_LEVEL_VAR = "REPORTER_LOG_LEVEL"

# Caller whose tasks are reported on
DEFAULT_REQUESTER = "filplus"


@dataclass(frozen=True)
class Settings:
    """Reporter settings."""

    database_url: str
    token: str
    requester: str = DEFAULT_REQUESTER
    log_level: str = "INFO"


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name, "").strip()
    if not value:
        raise ConfigError(f"{name} must be set")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Load settings from environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        Settings instance.

    Raises:
        ConfigError: If the database URL or the token is missing.
    """
    if environ is None:
        environ = os.environ

    return Settings(
        database_url=_require(environ, DATABASE_URL_VAR),
        token=_require(environ, TOKEN_VAR),
        requester=environ.get(REQUESTER_VAR, "").strip() or DEFAULT_REQUESTER,
        log_level=environ.get(LOG_LEVEL_VAR, "").strip().upper() or "INFO",
    )
