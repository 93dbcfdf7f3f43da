"""Custom tag vocabulary CRUD."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from myjournal.core.errors import StorageError
from myjournal.domains.journal.csv_fields import DELIMITER
from myjournal.domains.journal.models import CustomTag
from myjournal.extensions import db

logger = logging.getLogger(__name__)


def _normalize(name: str) -> str:
    return name.strip().casefold()


def list_custom_tags() -> List[CustomTag]:
    return list(db.session.scalars(select(CustomTag).order_by(CustomTag.name)))


def add_custom_tag(name: str) -> bool:
    """Add a tag; returns False for blank names, names containing the
    delimiter, or case-insensitive duplicates."""
    name = (name or "").strip()
    if not name or DELIMITER in name:
        return False
    normalized = _normalize(name)
    if db.session.scalars(select(CustomTag).filter_by(name_normalized=normalized)).first():
        return False
    db.session.add(
        CustomTag(
            name=name,
            name_normalized=normalized,
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
        )
    )
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with another insert of the same name.
        db.session.rollback()
        return False
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Database error while adding custom tag")
        raise StorageError(f"Failed to add custom tag: {exc}") from exc
    return True


def delete_custom_tag(tag_id: int) -> int:
    return _delete(CustomTag.id == tag_id)


def delete_custom_tag_by_name(name: str) -> int:
    return _delete(CustomTag.name_normalized == _normalize(name or ""))


def _delete(condition) -> int:
    try:
        result = db.session.execute(
            delete(CustomTag).where(condition).execution_options(synchronize_session=False)
        )
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Database error while deleting custom tag")
        raise StorageError(f"Failed to delete custom tag: {exc}") from exc
    return int(result.rowcount or 0)
