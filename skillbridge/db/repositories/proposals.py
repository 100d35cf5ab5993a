"""
Proposal repository functions.

CRUD and the lookup/count queries for proposals. The one-proposal-per-pair
rule lives in the ``uq_proposals_project_freelancer`` constraint; a duplicate
insert surfaces as ``ConstraintViolation`` from ``create_proposal``.
"""
from __future__ import annotations

import logging
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from skillbridge.db import models, schemas
from skillbridge.db.errors import InvalidStatusTransition, assign_or_rollback, commit_or_raise
from skillbridge.db.validation import require_member

logger = logging.getLogger(__name__)

_NEWEST_FIRST = (models.Proposal.created_at.desc(), models.Proposal.id.desc())


def create_proposal(db: Session, proposal: schemas.ProposalCreate, freelancer_id: int) -> models.Proposal:
    data = proposal.model_dump()
    db_proposal = models.Proposal(
        project_id=data['project_id'],
        freelancer_id=freelancer_id,
        cover_letter=data['cover_letter'],
        proposed_budget=data['proposed_budget'],
        timeline=data['timeline'],
    )
    db.add(db_proposal)
    commit_or_raise(db, "create_proposal")
    db.refresh(db_proposal)
    logger.info(
        "proposal_created: id=%s project_id=%s freelancer_id=%s",
        db_proposal.id, db_proposal.project_id, freelancer_id,
    )
    return db_proposal


def get_proposal(db: Session, proposal_id: int) -> Optional[models.Proposal]:
    return db.get(models.Proposal, proposal_id)


def update_proposal(db: Session, proposal_id: int, proposal: schemas.ProposalUpdate) -> Optional[models.Proposal]:
    db_proposal = db.get(models.Proposal, proposal_id)
    if db_proposal:
        assign_or_rollback(db, db_proposal, proposal.model_dump(exclude_unset=True))
        commit_or_raise(db, "update_proposal")
        db.refresh(db_proposal)
    return db_proposal


def set_proposal_status(db_proposal: models.Proposal, status) -> bool:
    """Apply a legal status change to a loaded proposal without committing.

    Returns False when the proposal already has ``status``.
    """
    target = require_member("status", status, models.ProposalStatus)
    if db_proposal.status == target:
        return False
    if not db_proposal.status.can_transition_to(target):
        raise InvalidStatusTransition("proposal", db_proposal.status, target)
    db_proposal.status = target
    return True


def update_proposal_status(
    db: Session, proposal_id: int, status: models.ProposalStatus
) -> Optional[models.Proposal]:
    db_proposal = db.get(models.Proposal, proposal_id)
    if not db_proposal:
        return None
    if set_proposal_status(db_proposal, status):
        commit_or_raise(db, "update_proposal_status")
        db.refresh(db_proposal)
        logger.info("proposal_status_changed: id=%s status=%s", proposal_id, db_proposal.status.value)
    return db_proposal


def delete_proposal(db: Session, proposal_id: int) -> bool:
    db_proposal = db.get(models.Proposal, proposal_id)
    if not db_proposal:
        return False
    db.delete(db_proposal)
    commit_or_raise(db, "delete_proposal")
    logger.info("proposal_deleted: id=%s", proposal_id)
    return True


def find_by_project(db: Session, project_id: int) -> List[models.Proposal]:
    return (
        db.query(models.Proposal)
        .filter(models.Proposal.project_id == project_id)
        .order_by(*_NEWEST_FIRST)
        .all()
    )


def find_by_freelancer(db: Session, freelancer_id: int) -> List[models.Proposal]:
    return (
        db.query(models.Proposal)
        .filter(models.Proposal.freelancer_id == freelancer_id)
        .order_by(*_NEWEST_FIRST)
        .all()
    )


def find_by_project_and_freelancer(db: Session, project_id: int, freelancer_id: int) -> Optional[models.Proposal]:
    return (
        db.query(models.Proposal)
        .filter(models.Proposal.project_id == project_id, models.Proposal.freelancer_id == freelancer_id)
        .first()
    )


def exists_by_project_and_freelancer(db: Session, project_id: int, freelancer_id: int) -> bool:
    q = db.query(models.Proposal).filter(
        models.Proposal.project_id == project_id, models.Proposal.freelancer_id == freelancer_id
    )
    return bool(db.query(q.exists()).scalar())


def count_by_freelancer_and_status(db: Session, freelancer_id: int, status: models.ProposalStatus) -> int:
    return (
        db.query(func.count(models.Proposal.id))
        .filter(models.Proposal.freelancer_id == freelancer_id, models.Proposal.status == status)
        .scalar()
    )


def count_by_client(db: Session, client_id: int) -> int:
    """Proposals received across every project owned by ``client_id``."""
    return (
        db.query(func.count(models.Proposal.id))
        .join(models.Project, models.Proposal.project_id == models.Project.id)
        .filter(models.Project.client_id == client_id)
        .scalar()
    )


def count_by_client_and_status(db: Session, client_id: int, status: models.ProposalStatus) -> int:
    return (
        db.query(func.count(models.Proposal.id))
        .join(models.Project, models.Proposal.project_id == models.Project.id)
        .filter(models.Project.client_id == client_id, models.Proposal.status == status)
        .scalar()
    )


def find_by_project_and_status_not(
    db: Session, project_id: int, status: models.ProposalStatus
) -> List[models.Proposal]:
    return (
        db.query(models.Proposal)
        .filter(models.Proposal.project_id == project_id, models.Proposal.status != status)
        .order_by(*_NEWEST_FIRST)
        .all()
    )
