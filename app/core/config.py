# app/core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv, find_dotenv

# ---------------------------
# Env loading (root .env first, then app/.env as fallback)
# ---------------------------
load_dotenv(find_dotenv(usecwd=True))
load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=False)


BASE_STATUSES: Tuple[str, ...] = ("Pending", "In Progress", "Resolved", "Closed")
UNDER_REVIEW = "Under Review"


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    app_name: str
    environment: str
    database_url: str
    db_pool_size: int
    db_max_overflow: int
    db_pool_timeout: float
    db_echo: bool
    enable_create_all: bool
    allow_under_review: bool
    stats_include_empty_categories: bool
    log_level: str

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def valid_statuses(self) -> Tuple[str, ...]:
        """
        Status whitelist used by update/filter endpoints.
        "Under Review" sits between In Progress and Resolved when enabled.
        """
        if not self.allow_under_review:
            return BASE_STATUSES
        return ("Pending", "In Progress", UNDER_REVIEW, "Resolved", "Closed")


def load_settings() -> Settings:
    return Settings(
        app_name=os.getenv("APP_NAME", "Incident Reporting API"),
        environment=os.getenv("ENVIRONMENT", "development"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./incidents.db"),
        db_pool_size=int(os.getenv("DB_POOL_SIZE", "10")),
        db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "0")),
        db_pool_timeout=float(os.getenv("DB_POOL_TIMEOUT", "30")),
        db_echo=_flag("DB_ECHO", "0"),
        enable_create_all=_flag("ENABLE_CREATE_ALL", "1"),
        allow_under_review=_flag("ALLOW_UNDER_REVIEW_STATUS", "1"),
        stats_include_empty_categories=_flag("STATS_INCLUDE_EMPTY_CATEGORIES", "0"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache()
def get_settings() -> Settings:
    return load_settings()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
