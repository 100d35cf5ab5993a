from pydantic import BaseModel


class ClientStats(BaseModel):
    total_projects: int = 0
    active_projects: int = 0
    completed_projects: int = 0
    total_proposals: int = 0
    pending_proposals: int = 0


class FreelancerStats(BaseModel):
    total_proposals: int = 0
    accepted_proposals: int = 0
    pending_proposals: int = 0
    rejected_proposals: int = 0
    # Whole percentage, 0 when nothing was submitted
    success_rate: int = 0
    total_earnings: int = 0
