"""
Environment configuration. A ``.env`` file in the working directory is
honoured, real environment variables win.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///community_auth.db"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    log_json: bool = False


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        database_url=os.environ.get("COMMUNITY_AUTH_DATABASE_URL", DEFAULT_DATABASE_URL),
        log_level=os.environ.get("COMMUNITY_AUTH_LOG_LEVEL", "INFO").upper(),
        log_json=os.environ.get("COMMUNITY_AUTH_LOG_JSON", "0") in ("1", "true", "yes"),
    )
