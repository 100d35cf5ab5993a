"""
Proposal workflows that touch more than one entity.

Submission checks, acceptance (which closes the rest of the bidding and starts
the project) and withdrawal. Each public method commits at most once.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from skillbridge.db import models, schemas
from skillbridge.db.errors import BusinessRuleViolation, commit_or_raise
from skillbridge.db.repositories import projects as project_repo
from skillbridge.db.repositories import proposals as proposal_repo
from skillbridge.db.repositories import users as user_repo

logger = logging.getLogger(__name__)


class ProposalService:
    """Service class for proposal lifecycle operations."""

    def __init__(self, db: Session):
        self.db = db

    def submit_proposal(self, freelancer_id: int, proposal: schemas.ProposalCreate) -> models.Proposal:
        """Submit a bid on an open project.

        A repeated bid by the same freelancer is rejected by the unique
        constraint and raises ``ConstraintViolation``.
        """
        freelancer = user_repo.get_user(self.db, freelancer_id)
        if not freelancer:
            raise BusinessRuleViolation(f"User {freelancer_id} not found")
        if not freelancer.is_freelancer:
            raise BusinessRuleViolation("Only freelancers can submit proposals")

        project = project_repo.get_project(self.db, proposal.project_id)
        if not project:
            raise BusinessRuleViolation(f"Project {proposal.project_id} not found")
        if project.status != models.ProjectStatus.OPEN:
            raise BusinessRuleViolation("Project is not accepting proposals")
        if project.client_id == freelancer_id:
            raise BusinessRuleViolation("Cannot submit proposal to your own project")

        return proposal_repo.create_proposal(self.db, proposal, freelancer_id=freelancer_id)

    def accept_proposal(self, proposal_id: int) -> Optional[models.Proposal]:
        """Accept a proposal, reject the other pending ones and start the project."""
        proposal = proposal_repo.get_proposal(self.db, proposal_id)
        if not proposal:
            return None
        project = proposal.project

        proposal_repo.set_proposal_status(proposal, models.ProposalStatus.ACCEPTED)
        rejected = 0
        for other in proposal_repo.find_by_project_and_status_not(
            self.db, project.id, models.ProposalStatus.REJECTED
        ):
            if other.id != proposal.id and other.status == models.ProposalStatus.PENDING:
                proposal_repo.set_proposal_status(other, models.ProposalStatus.REJECTED)
                rejected += 1
        if project.status != models.ProjectStatus.IN_PROGRESS:
            if not project.status.can_transition_to(models.ProjectStatus.IN_PROGRESS):
                self.db.rollback()
                raise BusinessRuleViolation(
                    f"Project {project.id} is {project.status.value} and cannot start work"
                )
            project.status = models.ProjectStatus.IN_PROGRESS

        commit_or_raise(self.db, "accept_proposal")
        self.db.refresh(proposal)
        logger.info(
            "proposal_accepted: id=%s project_id=%s rejected_others=%d",
            proposal.id, project.id, rejected,
        )
        return proposal

    def reject_proposal(self, proposal_id: int) -> Optional[models.Proposal]:
        return proposal_repo.update_proposal_status(self.db, proposal_id, models.ProposalStatus.REJECTED)

    def withdraw_proposal(self, proposal_id: int) -> bool:
        """Delete a proposal that has not been accepted."""
        proposal = proposal_repo.get_proposal(self.db, proposal_id)
        if not proposal:
            return False
        if proposal.status == models.ProposalStatus.ACCEPTED:
            raise BusinessRuleViolation("Cannot delete accepted proposal")
        return proposal_repo.delete_proposal(self.db, proposal_id)
