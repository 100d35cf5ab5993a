from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from skillbridge.db.models import ProposalStatus


class ProposalBase(BaseModel):
    project_id: int
    cover_letter: str = Field(min_length=1)
    proposed_budget: int = Field(gt=0)
    timeline: str = Field(min_length=1)


class ProposalCreate(ProposalBase):
    pass


class ProposalUpdate(BaseModel):
    cover_letter: Optional[str] = Field(default=None, min_length=1)
    proposed_budget: Optional[int] = Field(default=None, gt=0)
    timeline: Optional[str] = Field(default=None, min_length=1)


class Proposal(ProposalBase):
    id: int
    freelancer_id: int
    status: ProposalStatus
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
