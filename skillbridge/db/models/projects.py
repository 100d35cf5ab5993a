import enum
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Enum, ForeignKey, CheckConstraint, Index
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import relationship, validates

from skillbridge.db.errors import ConstraintViolation
from skillbridge.db.validation import require_member, require_positive, require_text
from .base import Base, now_utc


class ProjectStatus(str, enum.Enum):
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    def can_transition_to(self, target: "ProjectStatus") -> bool:
        return target in _PROJECT_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not _PROJECT_TRANSITIONS[self]


_PROJECT_TRANSITIONS = {
    ProjectStatus.OPEN: {ProjectStatus.IN_PROGRESS, ProjectStatus.CANCELLED},
    ProjectStatus.IN_PROGRESS: {ProjectStatus.COMPLETED, ProjectStatus.CANCELLED},
    ProjectStatus.COMPLETED: set(),
    ProjectStatus.CANCELLED: set(),
}


class Project(Base):
    __tablename__ = 'projects'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    budget = Column(Integer, nullable=False)
    category = Column(String, nullable=False)
    deadline = Column(Date, nullable=False)
    status = Column(
        Enum(ProjectStatus, name='project_status', native_enum=False, create_constraint=True, length=20),
        nullable=False,
        default=ProjectStatus.OPEN,
    )
    client_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc)

    client = relationship("User", back_populates="projects")
    proposals = relationship("Proposal", back_populates="project", cascade="save-update, merge, delete")
    skill_rows = relationship(
        "ProjectSkill", order_by="ProjectSkill.id", cascade="all, delete-orphan", lazy="selectin",
    )
    skills = association_proxy("skill_rows", "skill", creator=lambda skill: ProjectSkill(skill=skill))

    __table_args__ = (
        CheckConstraint("budget > 0", name='ck_projects_budget_positive'),
        Index('idx_projects_client_id', 'client_id'),
        Index('idx_projects_status_created_at', 'status', 'created_at'),
    )

    @validates('title', 'description', 'category')
    def _validate_text(self, key, value):
        return require_text(key, value)

    @validates('budget')
    def _validate_budget(self, key, value):
        return require_positive(key, value)

    @validates('status')
    def _validate_status(self, key, value):
        return require_member(key, value, ProjectStatus)

    @validates('deadline')
    def _validate_deadline(self, key, value):
        if value is None:
            raise ConstraintViolation("deadline is required", field=key)
        return value


class ProjectSkill(Base):
    __tablename__ = 'project_skills'
    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)
    skill = Column(String, nullable=False)

    __table_args__ = (
        Index('idx_project_skills_project_id', 'project_id'),
    )
