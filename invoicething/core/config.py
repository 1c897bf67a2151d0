# invoicething/core/config.py
"""Runtime configuration, read from the environment (and .env)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from invoicething.core.exceptions import ConfigurationError

load_dotenv()

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_URL: str
    ATTACHMENT_DIR: str
    UPLOAD_URL_TTL_SECONDS: int
    ENFORCE_STATUS_TRANSITIONS: bool
    LOG_LEVEL: str

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def _build_config() -> Config:
    env = os.getenv("ENV", "development").strip().lower()

    config = Config(
        APP_NAME=os.getenv("APP_NAME", "InvoiceThing"),
        APP_VERSION=os.getenv("APP_VERSION", "0.1.0"),
        ENV=env,
        DEBUG=_as_bool(os.getenv("DEBUG"), default=True) and env != "production",
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///db.sqlite"),
        ATTACHMENT_DIR=os.getenv("ATTACHMENT_DIR", "attachments"),
        UPLOAD_URL_TTL_SECONDS=int(os.getenv("UPLOAD_URL_TTL_SECONDS", "3600")),
        ENFORCE_STATUS_TRANSITIONS=_as_bool(os.getenv("ENFORCE_STATUS_TRANSITIONS")),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )
    _validate_config(config)
    return config


def _validate_config(config: Config) -> None:
    scheme = urlparse(config.DATABASE_URL).scheme
    if not (scheme.startswith("sqlite") or scheme.startswith("postgresql")):
        raise ConfigurationError(
            "DATABASE_URL must use a sqlite:// or postgresql:// style URL."
        )
    if not config.ATTACHMENT_DIR.strip():
        raise ConfigurationError("ATTACHMENT_DIR must not be empty.")
    if config.UPLOAD_URL_TTL_SECONDS < 1:
        raise ConfigurationError("UPLOAD_URL_TTL_SECONDS must be >= 1.")
    if config.LOG_LEVEL not in LOG_LEVELS:
        raise ConfigurationError(
            "LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL."
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Return the validated configuration (built once per process)."""
    return _build_config()
