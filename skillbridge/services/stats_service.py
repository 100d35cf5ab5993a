"""
Dashboard statistics for clients and freelancers, built from repository counts.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session

from skillbridge.db import models, schemas
from skillbridge.db.repositories import projects as project_repo
from skillbridge.db.repositories import proposals as proposal_repo


class StatsService:
    def __init__(self, db: Session):
        self.db = db

    def client_stats(self, client_id: int) -> schemas.ClientStats:
        total_projects = (
            self.db.query(func.count(models.Project.id))
            .filter(models.Project.client_id == client_id)
            .scalar()
        )
        return schemas.ClientStats(
            total_projects=total_projects,
            active_projects=project_repo.count_by_client_and_status(
                self.db, client_id, models.ProjectStatus.IN_PROGRESS
            ),
            completed_projects=project_repo.count_by_client_and_status(
                self.db, client_id, models.ProjectStatus.COMPLETED
            ),
            total_proposals=proposal_repo.count_by_client(self.db, client_id),
            pending_proposals=proposal_repo.count_by_client_and_status(
                self.db, client_id, models.ProposalStatus.PENDING
            ),
        )

    def freelancer_stats(self, freelancer_id: int) -> schemas.FreelancerStats:
        counts = {
            status: proposal_repo.count_by_freelancer_and_status(self.db, freelancer_id, status)
            for status in models.ProposalStatus
        }
        total = sum(counts.values())
        accepted = counts[models.ProposalStatus.ACCEPTED]
        earnings = (
            self.db.query(func.coalesce(func.sum(models.Proposal.proposed_budget), 0))
            .filter(
                models.Proposal.freelancer_id == freelancer_id,
                models.Proposal.status == models.ProposalStatus.ACCEPTED,
            )
            .scalar()
        )
        return schemas.FreelancerStats(
            total_proposals=total,
            accepted_proposals=accepted,
            pending_proposals=counts[models.ProposalStatus.PENDING],
            rejected_proposals=counts[models.ProposalStatus.REJECTED],
            # Half-up rounding
            success_rate=int(accepted * 100 / total + 0.5) if total else 0,
            total_earnings=int(earnings),
        )
