"""
Error taxonomy for the persistence layer.

Lookups that find nothing return ``None``; every other failure surfaces as one
of the exceptions below. Integrity errors raised by the database at commit time
are rolled back and translated so callers never handle driver exceptions.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base class for persistence failures surfaced to callers."""


class ConstraintViolation(RepositoryError, ValueError):
    """A blank, size, positivity, format, enum or uniqueness rule was broken."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ReferentialIntegrityViolation(RepositoryError):
    """A row referenced a user or project that does not exist."""


class InvalidStatusTransition(RepositoryError):
    """A status change that the entity's lifecycle does not allow."""

    def __init__(self, entity: str, current, target):
        super().__init__(f"{entity} cannot move from {current.value} to {target.value}")
        self.entity = entity
        self.current = current
        self.target = target


class BusinessRuleViolation(RepositoryError):
    """A marketplace rule enforced by the service layer was broken."""


def translate_integrity_error(exc: IntegrityError) -> RepositoryError:
    message = str(getattr(exc, "orig", exc))
    pgcode = getattr(getattr(exc, "orig", None), "pgcode", None)
    # 23503 is foreign_key_violation in PostgreSQL
    if pgcode == "23503" or "foreign key" in message.lower():
        return ReferentialIntegrityViolation(message)
    return ConstraintViolation(message)


def commit_or_raise(db: Session, action: str) -> None:
    """Commit the session; on integrity failure roll back and raise a translated error."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        translated = translate_integrity_error(exc)
        logger.warning("%s rejected by database: %s", action, translated)
        raise translated from exc


def assign_or_rollback(db: Session, obj, changes: Dict[str, Any]) -> None:
    """Apply attribute ``changes`` to ``obj``; a validation failure discards all of them."""
    try:
        for key, value in changes.items():
            setattr(obj, key, value)
    except ConstraintViolation:
        db.rollback()
        raise
