"""MyJournal application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from flask import Flask

from myjournal.config import config_by_name, engine_options_from_uri
from myjournal.extensions import init_extensions


def create_app(config_name: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Create and configure the MyJournal Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(
        __name__,
        instance_path=str(instance_root),
        instance_relative_config=True,
    )
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    if overrides:
        app.config.update(overrides)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config["SQLALCHEMY_DATABASE_URI"]
    if db_uri.startswith("sqlite:///") and not db_uri.endswith(":memory:"):
        db_path = db_uri.replace("sqlite:///", "", 1)
        abs_path = project_root / db_path
        abs_path.parent.mkdir(parents=True, exist_ok=True)
        db_uri = f"sqlite:///{abs_path}"
        app.config["SQLALCHEMY_DATABASE_URI"] = db_uri
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options_from_uri(db_uri)

    _configure_logging(app)
    init_extensions(app)
    _register_models()
    return app


def _configure_logging(app: Flask) -> None:
    level = app.config.get("LOG_LEVEL", "INFO")
    logging.getLogger("myjournal").setLevel(level)
    app.logger.setLevel(level)


def _register_models() -> None:
    """Import models so metadata is complete for migrations and queries."""
    from myjournal.domains.journal.models import custom_tag, journal_entry  # noqa: F401
