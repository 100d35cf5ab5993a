"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc`, the ORM classes and their status enums.
"""

from .base import Base, now_utc  # re-export

from .users import User, UserType, UserSkill, UserPortfolioItem, DEFAULT_AVAILABILITY
from .projects import Project, ProjectStatus, ProjectSkill
from .proposals import Proposal, ProposalStatus

__all__ = [
    # base
    "Base",
    "now_utc",
    # users
    "User",
    "UserType",
    "UserSkill",
    "UserPortfolioItem",
    "DEFAULT_AVAILABILITY",
    # projects
    "Project",
    "ProjectStatus",
    "ProjectSkill",
    # proposals
    "Proposal",
    "ProposalStatus",
]
