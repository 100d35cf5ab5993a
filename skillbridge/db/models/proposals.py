import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, ForeignKey, CheckConstraint, Index, UniqueConstraint
from sqlalchemy.orm import relationship, validates

from skillbridge.db.validation import require_member, require_positive, require_text
from .base import Base, now_utc


class ProposalStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"

    def can_transition_to(self, target: "ProposalStatus") -> bool:
        return target in _PROPOSAL_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not _PROPOSAL_TRANSITIONS[self]


_PROPOSAL_TRANSITIONS = {
    ProposalStatus.PENDING: {ProposalStatus.ACCEPTED, ProposalStatus.REJECTED},
    ProposalStatus.ACCEPTED: set(),
    ProposalStatus.REJECTED: set(),
}


class Proposal(Base):
    __tablename__ = 'proposals'
    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)
    freelancer_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    cover_letter = Column(Text, nullable=False)
    proposed_budget = Column(Integer, nullable=False)
    timeline = Column(String, nullable=False)
    status = Column(
        Enum(ProposalStatus, name='proposal_status', native_enum=False, create_constraint=True, length=20),
        nullable=False,
        default=ProposalStatus.PENDING,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc)

    project = relationship("Project", back_populates="proposals")
    freelancer = relationship("User", back_populates="proposals")

    __table_args__ = (
        # One proposal per freelancer per project, enforced by the database
        UniqueConstraint('project_id', 'freelancer_id', name='uq_proposals_project_freelancer'),
        CheckConstraint("proposed_budget > 0", name='ck_proposals_budget_positive'),
        Index('idx_proposals_freelancer_id', 'freelancer_id'),
        Index('idx_proposals_status', 'status'),
    )

    @validates('cover_letter', 'timeline')
    def _validate_text(self, key, value):
        return require_text(key, value)

    @validates('proposed_budget')
    def _validate_budget(self, key, value):
        return require_positive(key, value)

    @validates('status')
    def _validate_status(self, key, value):
        return require_member(key, value, ProposalStatus)
