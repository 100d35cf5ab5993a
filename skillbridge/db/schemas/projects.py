from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from skillbridge.db.models import ProjectStatus


class ProjectBase(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    budget: int = Field(gt=0)
    category: str = Field(min_length=1)
    skills: List[str] = Field(default_factory=list)
    deadline: date


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    budget: Optional[int] = Field(default=None, gt=0)
    category: Optional[str] = Field(default=None, min_length=1)
    skills: Optional[List[str]] = None
    deadline: Optional[date] = None


class Project(ProjectBase):
    id: int
    status: ProjectStatus
    client_id: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)

    @field_validator('skills', mode='before')
    @classmethod
    def _materialize(cls, value):
        return list(value) if value is not None else []


class PaginatedProjects(BaseModel):
    items: List[Project]
    total_items: int
    total_pages: int
    skip: int
    limit: int
