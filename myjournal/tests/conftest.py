from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config as AlembicConfig

from myjournal import create_app
from myjournal.domains.journal.services import journal_service
from myjournal.extensions import db

ROOT = Path(__file__).resolve().parents[2]
MIGRATIONS_DIR = ROOT / "myjournal" / "migrations"


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database)")


def _alembic_config(db_url: str) -> AlembicConfig:
    cfg = AlembicConfig()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("myjournal_env", "testing")
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


@pytest.fixture()
def alembic_config():
    """Build an Alembic config for a given database URL."""
    return _alembic_config


@pytest.fixture()
def app(tmp_path):
    """
    Create a per-test app backed by its own migrated SQLite file.

    Running the real migrations keeps the unique date_key index (which the
    upsert relies on) identical to production.
    """
    db_url = f"sqlite:///{tmp_path / 'journal.db'}"
    command.upgrade(_alembic_config(db_url), "head")

    app = create_app("testing", {"SQLALCHEMY_DATABASE_URI": db_url})
    ctx = app.app_context()
    ctx.push()
    try:
        yield app
    finally:
        db.session.remove()
        db.engine.dispose()
        ctx.pop()


@pytest.fixture()
def make_entry(app):
    """Save an entry with sensible defaults for the fields a test ignores."""

    def _make(day, title="Entry", primary_mood="Happy", **kwargs):
        kwargs.setdefault("content", f"Notes for {day}")
        return journal_service.save(day, title=title, primary_mood=primary_mood, **kwargs)

    return _make
