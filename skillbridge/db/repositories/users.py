"""
User repository functions.

CRUD for users plus the lookup and freelancer search queries. Optional filters
are appended to the query only when present.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from skillbridge.db import models, schemas
from skillbridge.db.errors import assign_or_rollback, commit_or_raise
from skillbridge.db.pagination import DEFAULT_PAGE_SIZE, Page, paginate

logger = logging.getLogger(__name__)


def create_user(db: Session, user: schemas.UserCreate) -> models.User:
    data = user.model_dump()
    db_user = models.User(
        name=data['name'],
        email=data['email'],
        password=data['password'],
        user_type=data['user_type'],
        bio=data.get('bio'),
        company=data.get('company'),
        location=data.get('location'),
        hourly_rate=data.get('hourly_rate'),
        availability=data.get('availability') or models.DEFAULT_AVAILABILITY,
        skills=data.get('skills') or [],
        portfolio=data.get('portfolio') or [],
    )
    db.add(db_user)
    commit_or_raise(db, "create_user")
    db.refresh(db_user)
    logger.info("user_created: id=%s type=%s", db_user.id, db_user.user_type.value)
    return db_user


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.get(models.User, user_id)


def get_users(db: Session, skip: int = 0, limit: int = 100) -> List[models.User]:
    return db.query(models.User).order_by(models.User.id).offset(skip).limit(limit).all()


def update_user(db: Session, user_id: int, user: schemas.UserUpdate) -> Optional[models.User]:
    db_user = db.get(models.User, user_id)
    if db_user:
        changes = user.model_dump(exclude_unset=True)
        for key in ('skills', 'portfolio'):
            if key in changes:
                changes[key] = changes[key] or []
        if 'availability' in changes:
            changes['availability'] = changes['availability'] or models.DEFAULT_AVAILABILITY
        assign_or_rollback(db, db_user, changes)
        commit_or_raise(db, "update_user")
        db.refresh(db_user)
        logger.info("user_updated: id=%s", user_id)
    return db_user


def delete_user(db: Session, user_id: int) -> bool:
    """Delete a user together with the projects and proposals they own."""
    db_user = db.get(models.User, user_id)
    if not db_user:
        return False
    db.delete(db_user)
    commit_or_raise(db, "delete_user")
    logger.info("user_deleted: id=%s", user_id)
    return True


def find_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email).first()


def find_by_email_and_user_type(db: Session, email: str, user_type: models.UserType) -> Optional[models.User]:
    return (
        db.query(models.User)
        .filter(models.User.email == email, models.User.user_type == user_type)
        .first()
    )


def exists_by_email(db: Session, email: str) -> bool:
    q = db.query(models.User).filter(models.User.email == email)
    return bool(db.query(q.exists()).scalar())


def find_freelancers(
    db: Session,
    location: Optional[str] = None,
    min_rate: Optional[float] = None,
    max_rate: Optional[float] = None,
    availability: Optional[str] = None,
    skip: int = 0,
    limit: int = DEFAULT_PAGE_SIZE,
) -> Page[models.User]:
    """Page through freelancers; every ``None`` filter matches all rows."""
    query = db.query(models.User).filter(models.User.user_type == models.UserType.FREELANCER)
    if location is not None:
        query = query.filter(models.User.location.icontains(location, autoescape=True))
    if min_rate is not None:
        query = query.filter(models.User.hourly_rate >= min_rate)
    if max_rate is not None:
        query = query.filter(models.User.hourly_rate <= max_rate)
    if availability is not None:
        query = query.filter(models.User.availability == availability)
    return paginate(query.order_by(models.User.id), skip=skip, limit=limit)


def find_freelancers_by_skills(
    db: Session,
    skills: Iterable[str],
    skip: int = 0,
    limit: int = DEFAULT_PAGE_SIZE,
) -> Page[models.User]:
    """Freelancers holding at least one of ``skills``, compared case-insensitively."""
    wanted = sorted({s.lower() for s in skills if s})
    query = db.query(models.User).filter(
        models.User.user_type == models.UserType.FREELANCER,
        models.User.skill_rows.any(func.lower(models.UserSkill.skill).in_(wanted)),
    )
    return paginate(query.order_by(models.User.id), skip=skip, limit=limit)
