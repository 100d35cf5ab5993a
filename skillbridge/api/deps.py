"""
API dependency helpers.

Request-scoped providers for the session and the service objects built on it.
Route handlers declare these with ``Depends`` and never construct sessions.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from skillbridge.db.database import get_db
from skillbridge.services.proposal_service import ProposalService
from skillbridge.services.stats_service import StatsService


def get_proposal_service(db: Session = Depends(get_db)) -> ProposalService:
    return ProposalService(db)


def get_stats_service(db: Session = Depends(get_db)) -> StatsService:
    return StatsService(db)
