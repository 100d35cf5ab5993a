from unittest.mock import Mock

import pytest
from sqlalchemy.exc import IntegrityError

from skillbridge.db import models
from skillbridge.db.errors import (
    ConstraintViolation,
    InvalidStatusTransition,
    ReferentialIntegrityViolation,
    RepositoryError,
    assign_or_rollback,
    commit_or_raise,
    translate_integrity_error,
)


class _PgError(Exception):
    def __init__(self, message, pgcode):
        super().__init__(message)
        self.pgcode = pgcode


def test_sqlite_foreign_key_message_maps_to_referential():
    exc = IntegrityError("INSERT ...", {}, Exception("FOREIGN KEY constraint failed"))
    assert isinstance(translate_integrity_error(exc), ReferentialIntegrityViolation)


def test_postgres_foreign_key_code_maps_to_referential():
    exc = IntegrityError("INSERT ...", {}, _PgError("insert violates fk_projects_client", "23503"))
    assert isinstance(translate_integrity_error(exc), ReferentialIntegrityViolation)


def test_other_integrity_errors_are_constraint_violations():
    exc = IntegrityError("INSERT ...", {}, _PgError("duplicate key value violates unique constraint", "23505"))
    translated = translate_integrity_error(exc)
    assert isinstance(translated, ConstraintViolation)
    assert isinstance(translated, ValueError)
    assert isinstance(translated, RepositoryError)


def test_commit_or_raise_rolls_back():
    db = Mock()
    db.commit.side_effect = IntegrityError("UPDATE ...", {}, Exception("UNIQUE constraint failed: users.email"))
    with pytest.raises(ConstraintViolation) as exc:
        commit_or_raise(db, "update_user")
    db.rollback.assert_called_once()
    assert isinstance(exc.value.__cause__, IntegrityError)


def test_commit_or_raise_passes_through_success():
    db = Mock()
    commit_or_raise(db, "create_user")
    db.commit.assert_called_once()
    db.rollback.assert_not_called()


def test_assign_or_rollback_discards_partial_changes():
    db = Mock()
    user = models.User(name="Ann", email="a@example.com", password="secret123", user_type="CLIENT")
    with pytest.raises(ConstraintViolation):
        assign_or_rollback(db, user, {"bio": "hello", "name": ""})
    db.rollback.assert_called_once()


def test_invalid_transition_message():
    err = InvalidStatusTransition("project", models.ProjectStatus.COMPLETED, models.ProjectStatus.OPEN)
    assert str(err) == "project cannot move from COMPLETED to OPEN"
    assert err.target == models.ProjectStatus.OPEN
