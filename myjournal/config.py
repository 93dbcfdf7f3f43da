"""Application configuration for MyJournal."""

from __future__ import annotations

import os
from typing import Dict, Type

from dotenv import load_dotenv
from sqlalchemy.engine.url import make_url

load_dotenv()


def engine_options_from_uri(uri: str) -> dict:
    url = make_url(uri)
    # Always keep pool_pre_ping, vary connect_args by dialect.
    if url.get_backend_name() == "sqlite":
        return {"pool_pre_ping": True, "connect_args": {"timeout": 30}}
    if url.get_backend_name() in {"postgresql", "postgres"}:
        timeout = int(os.environ.get("DB_CONNECT_TIMEOUT_SECONDS", "10"))
        return {"pool_pre_ping": True, "connect_args": {"connect_timeout": timeout}}
    return {"pool_pre_ping": True}


class BaseConfig:
    """Base configuration loaded for all environments."""

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///instance/myjournal.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = engine_options_from_uri(SQLALCHEMY_DATABASE_URI)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    JOURNAL_DEFAULT_PAGE_SIZE = int(os.environ.get("JOURNAL_DEFAULT_PAGE_SIZE", "10"))
    JOURNAL_RECENT_LIMIT = int(os.environ.get("JOURNAL_RECENT_LIMIT", "20"))
    # Unlocked PIN entries stay readable for five minutes.
    JOURNAL_UNLOCK_TTL_SECONDS = int(os.environ.get("JOURNAL_UNLOCK_TTL_SECONDS", "300"))
    JOURNAL_DASHBOARD_TOP_N = int(os.environ.get("JOURNAL_DASHBOARD_TOP_N", "8"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    ENV = "development"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG").upper()


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite:///instance/test.db")
    SQLALCHEMY_ENGINE_OPTIONS = engine_options_from_uri(SQLALCHEMY_DATABASE_URI)


class ProductionConfig(BaseConfig):
    ENV = "production"


config_by_name: Dict[str, Type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    # CI pipelines set APP_ENV=ci; map to testing defaults.
    "ci": TestingConfig,
}
