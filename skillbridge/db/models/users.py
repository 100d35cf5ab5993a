import enum
from sqlalchemy import Column, Integer, String, Text, Float, DateTime, Enum, ForeignKey, CheckConstraint, Index, UniqueConstraint
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import relationship, validates

from skillbridge.db.validation import require_email, require_member, require_text
from .base import Base, now_utc


class UserType(str, enum.Enum):
    CLIENT = "CLIENT"
    FREELANCER = "FREELANCER"


DEFAULT_AVAILABILITY = "available"


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False)
    # Never exposed through the read schemas
    password = Column(String, nullable=False)
    user_type = Column(
        Enum(UserType, name='user_type', native_enum=False, create_constraint=True, length=20),
        nullable=False,
    )
    bio = Column(Text, nullable=True)
    company = Column(String, nullable=True)
    location = Column(String, nullable=True)
    hourly_rate = Column(Float, nullable=True)
    availability = Column(String, nullable=True, default=DEFAULT_AVAILABILITY)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc)

    skill_rows = relationship(
        "UserSkill", order_by="UserSkill.id", cascade="all, delete-orphan", lazy="selectin",
    )
    portfolio_rows = relationship(
        "UserPortfolioItem", order_by="UserPortfolioItem.id", cascade="all, delete-orphan", lazy="selectin",
    )
    skills = association_proxy("skill_rows", "skill", creator=lambda skill: UserSkill(skill=skill))
    portfolio = association_proxy(
        "portfolio_rows", "portfolio_item", creator=lambda item: UserPortfolioItem(portfolio_item=item)
    )

    projects = relationship("Project", back_populates="client", cascade="save-update, merge, delete")
    proposals = relationship("Proposal", back_populates="freelancer", cascade="save-update, merge, delete")

    __table_args__ = (
        CheckConstraint("length(name) >= 2", name='ck_users_name_length'),
        CheckConstraint("length(password) >= 6", name='ck_users_password_length'),
        UniqueConstraint('email', name='uq_users_email'),
        Index('idx_users_user_type', 'user_type'),
    )

    @validates('name')
    def _validate_name(self, key, value):
        return require_text(key, value, min_length=2, max_length=100)

    @validates('email')
    def _validate_email(self, key, value):
        return require_email(key, value)

    @validates('password')
    def _validate_password(self, key, value):
        return require_text(key, value, min_length=6)

    @validates('user_type')
    def _validate_user_type(self, key, value):
        return require_member(key, value, UserType)

    @property
    def is_freelancer(self) -> bool:
        return self.user_type == UserType.FREELANCER

    def __repr__(self):
        return f"<User id={self.id} email={self.email!r} type={self.user_type}>"


class UserSkill(Base):
    __tablename__ = 'user_skills'
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    skill = Column(String, nullable=False)

    __table_args__ = (
        Index('idx_user_skills_user_id', 'user_id'),
    )


class UserPortfolioItem(Base):
    __tablename__ = 'user_portfolio'
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    portfolio_item = Column(String, nullable=False)

    __table_args__ = (
        Index('idx_user_portfolio_user_id', 'user_id'),
    )
