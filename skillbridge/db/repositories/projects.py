"""
Project repository functions.

CRUD, status changes and the filtered listing queries for projects. Listings
are newest first (``created_at`` then ``id`` descending).
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from skillbridge.db import models, schemas
from skillbridge.db.errors import InvalidStatusTransition, assign_or_rollback, commit_or_raise
from skillbridge.db.pagination import DEFAULT_PAGE_SIZE, Page, paginate
from skillbridge.db.validation import require_member

logger = logging.getLogger(__name__)

_NEWEST_FIRST = (models.Project.created_at.desc(), models.Project.id.desc())


def create_project(db: Session, project: schemas.ProjectCreate, client_id: int) -> models.Project:
    data = project.model_dump()
    db_project = models.Project(
        title=data['title'],
        description=data['description'],
        budget=data['budget'],
        category=data['category'],
        deadline=data['deadline'],
        skills=data.get('skills') or [],
        client_id=client_id,
    )
    db.add(db_project)
    commit_or_raise(db, "create_project")
    db.refresh(db_project)
    logger.info("project_created: id=%s client_id=%s", db_project.id, client_id)
    return db_project


def get_project(db: Session, project_id: int) -> Optional[models.Project]:
    return db.get(models.Project, project_id)


def get_projects(db: Session, skip: int = 0, limit: int = 100) -> List[models.Project]:
    return db.query(models.Project).order_by(*_NEWEST_FIRST).offset(skip).limit(limit).all()


def update_project(db: Session, project_id: int, project: schemas.ProjectUpdate) -> Optional[models.Project]:
    db_project = db.get(models.Project, project_id)
    if db_project:
        changes = project.model_dump(exclude_unset=True)
        if 'skills' in changes:
            changes['skills'] = changes['skills'] or []
        assign_or_rollback(db, db_project, changes)
        commit_or_raise(db, "update_project")
        db.refresh(db_project)
        logger.info("project_updated: id=%s", project_id)
    return db_project


def update_project_status(
    db: Session, project_id: int, status: models.ProjectStatus
) -> Optional[models.Project]:
    """Move a project along its lifecycle; illegal moves raise ``InvalidStatusTransition``."""
    db_project = db.get(models.Project, project_id)
    if not db_project:
        return None
    target = require_member("status", status, models.ProjectStatus)
    if db_project.status == target:
        return db_project
    if not db_project.status.can_transition_to(target):
        raise InvalidStatusTransition("project", db_project.status, target)
    db_project.status = target
    commit_or_raise(db, "update_project_status")
    db.refresh(db_project)
    logger.info("project_status_changed: id=%s status=%s", project_id, target.value)
    return db_project


def delete_project(db: Session, project_id: int) -> bool:
    """Delete a project; its proposals go with it."""
    db_project = db.get(models.Project, project_id)
    if not db_project:
        return False
    db.delete(db_project)
    commit_or_raise(db, "delete_project")
    logger.info("project_deleted: id=%s", project_id)
    return True


def find_by_client(db: Session, client_id: int) -> List[models.Project]:
    return (
        db.query(models.Project)
        .filter(models.Project.client_id == client_id)
        .order_by(*_NEWEST_FIRST)
        .all()
    )


def find_by_status(
    db: Session, status: models.ProjectStatus, skip: int = 0, limit: int = DEFAULT_PAGE_SIZE
) -> Page[models.Project]:
    query = db.query(models.Project).filter(models.Project.status == status).order_by(*_NEWEST_FIRST)
    return paginate(query, skip=skip, limit=limit)


def find_projects_with_filters(
    db: Session,
    status: models.ProjectStatus,
    category: Optional[str] = None,
    min_budget: Optional[int] = None,
    max_budget: Optional[int] = None,
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = DEFAULT_PAGE_SIZE,
) -> Page[models.Project]:
    """Projects in ``status`` narrowed by whichever optional filters are given.

    Budget bounds are inclusive; ``search`` matches title or description as a
    case-insensitive substring.
    """
    query = db.query(models.Project).filter(models.Project.status == status)
    if category is not None:
        query = query.filter(models.Project.category == category)
    if min_budget is not None:
        query = query.filter(models.Project.budget >= min_budget)
    if max_budget is not None:
        query = query.filter(models.Project.budget <= max_budget)
    if search is not None:
        query = query.filter(
            or_(
                models.Project.title.icontains(search, autoescape=True),
                models.Project.description.icontains(search, autoescape=True),
            )
        )
    return paginate(query.order_by(*_NEWEST_FIRST), skip=skip, limit=limit)


def find_by_skills(
    db: Session, skills: Iterable[str], skip: int = 0, limit: int = DEFAULT_PAGE_SIZE
) -> Page[models.Project]:
    """Open projects asking for at least one of ``skills`` (case-insensitive)."""
    wanted = sorted({s.lower() for s in skills if s})
    query = db.query(models.Project).filter(
        models.Project.status == models.ProjectStatus.OPEN,
        models.Project.skill_rows.any(func.lower(models.ProjectSkill.skill).in_(wanted)),
    )
    return paginate(query.order_by(*_NEWEST_FIRST), skip=skip, limit=limit)


def count_by_client_and_status(db: Session, client_id: int, status: models.ProjectStatus) -> int:
    return (
        db.query(func.count(models.Project.id))
        .filter(models.Project.client_id == client_id, models.Project.status == status)
        .scalar()
    )
