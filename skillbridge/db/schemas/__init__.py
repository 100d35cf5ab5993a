"""
Domain-split Pydantic schemas.

Create/update shapes validate input before it reaches the repositories; read
shapes serialize ORM rows (``from_attributes``) and never carry passwords.
"""

from .users import UserBase, UserCreate, UserUpdate, User, PaginatedUsers
from .projects import ProjectBase, ProjectCreate, ProjectUpdate, Project, PaginatedProjects
from .proposals import ProposalBase, ProposalCreate, ProposalUpdate, Proposal
from .stats import ClientStats, FreelancerStats

__all__ = [
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "User",
    "PaginatedUsers",
    "ProjectBase",
    "ProjectCreate",
    "ProjectUpdate",
    "Project",
    "PaginatedProjects",
    "ProposalBase",
    "ProposalCreate",
    "ProposalUpdate",
    "Proposal",
    "ClientStats",
    "FreelancerStats",
]
