import itertools
import os
from datetime import date

import pytest

# Force the in-memory SQLite engine before the database module is imported
os.environ.setdefault("PYTEST_RUNNING", "1")

from fastapi.testclient import TestClient

import skillbridge.db.database as db_module
from skillbridge.db import models, schemas
from skillbridge.db.repositories import projects as project_repo
from skillbridge.db.repositories import proposals as proposal_repo
from skillbridge.db.repositories import users as user_repo


@pytest.fixture(autouse=True)
def _schema():
    """Fresh tables for every test."""
    db_module.create_schema()
    yield
    db_module.drop_schema()


@pytest.fixture
def db_session(_schema):
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


# Backwards compatibility: some tests expect a 'db' fixture name
@pytest.fixture
def db(db_session):
    return db_session


@pytest.fixture
def user_factory(db_session):
    counter = itertools.count(1)

    def _create(user_type=models.UserType.CLIENT, email=None, name=None, password="secret123", **extra):
        n = next(counter)
        payload = schemas.UserCreate(
            name=name or f"User {n}",
            email=email or f"user{n}@example.com",
            password=password,
            user_type=user_type,
            **extra,
        )
        return user_repo.create_user(db_session, payload)
    return _create


@pytest.fixture
def project_factory(db_session):
    counter = itertools.count(1)

    def _create(client, **overrides):
        n = next(counter)
        fields = dict(
            title=f"Project {n}",
            description=f"Description for project {n}",
            budget=1000,
            category="web",
            skills=["python"],
            deadline=date(2025, 1, 1),
        )
        fields.update(overrides)
        return project_repo.create_project(db_session, schemas.ProjectCreate(**fields), client_id=client.id)
    return _create


@pytest.fixture
def proposal_factory(db_session):
    def _create(project, freelancer, **overrides):
        fields = dict(
            project_id=project.id,
            cover_letter="I have done this before.",
            proposed_budget=900,
            timeline="2 weeks",
        )
        fields.update(overrides)
        return proposal_repo.create_proposal(db_session, schemas.ProposalCreate(**fields), freelancer_id=freelancer.id)
    return _create


@pytest.fixture
def client_user(user_factory):
    return user_factory(models.UserType.CLIENT, email="client@example.com", name="Alice Client")


@pytest.fixture
def freelancer(user_factory):
    return user_factory(models.UserType.FREELANCER, email="freelancer@example.com", name="Bob Freelancer")


@pytest.fixture
def client(db_session):
    from skillbridge.api.main import app

    def _override_get_db():
        yield db_session

    app.dependency_overrides[db_module.get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(db_module.get_db, None)
