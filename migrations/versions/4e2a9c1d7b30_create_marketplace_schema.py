"""Create users, projects and proposals with their skill/portfolio tables

Revision ID: 4e2a9c1d7b30
Revises:
Create Date: 2025-10-02 18:42:11.204113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4e2a9c1d7b30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _status_enum(name: str, *values: str) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True, length=20)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('user_type', _status_enum('user_type', 'CLIENT', 'FREELANCER'), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('company', sa.String(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('hourly_rate', sa.Float(), nullable=True),
        sa.Column('availability', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('length(name) >= 2', name='ck_users_name_length'),
        sa.CheckConstraint('length(password) >= 6', name='ck_users_password_length'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('idx_users_user_type', 'users', ['user_type'], unique=False)

    op.create_table(
        'user_skills',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('skill', sa.String(), nullable=False),
    )
    op.create_index('idx_user_skills_user_id', 'user_skills', ['user_id'], unique=False)

    op.create_table(
        'user_portfolio',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('portfolio_item', sa.String(), nullable=False),
    )
    op.create_index('idx_user_portfolio_user_id', 'user_portfolio', ['user_id'], unique=False)

    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('budget', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('deadline', sa.Date(), nullable=False),
        sa.Column(
            'status',
            _status_enum('project_status', 'OPEN', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED'),
            nullable=False,
        ),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('budget > 0', name='ck_projects_budget_positive'),
    )
    op.create_index('idx_projects_client_id', 'projects', ['client_id'], unique=False)
    op.create_index('idx_projects_status_created_at', 'projects', ['status', 'created_at'], unique=False)

    op.create_table(
        'project_skills',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('skill', sa.String(), nullable=False),
    )
    op.create_index('idx_project_skills_project_id', 'project_skills', ['project_id'], unique=False)

    op.create_table(
        'proposals',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('freelancer_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('cover_letter', sa.Text(), nullable=False),
        sa.Column('proposed_budget', sa.Integer(), nullable=False),
        sa.Column('timeline', sa.String(), nullable=False),
        sa.Column('status', _status_enum('proposal_status', 'PENDING', 'ACCEPTED', 'REJECTED'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('project_id', 'freelancer_id', name='uq_proposals_project_freelancer'),
        sa.CheckConstraint('proposed_budget > 0', name='ck_proposals_budget_positive'),
    )
    op.create_index('idx_proposals_freelancer_id', 'proposals', ['freelancer_id'], unique=False)
    op.create_index('idx_proposals_status', 'proposals', ['status'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_proposals_status', table_name='proposals')
    op.drop_index('idx_proposals_freelancer_id', table_name='proposals')
    op.drop_table('proposals')
    op.drop_index('idx_project_skills_project_id', table_name='project_skills')
    op.drop_table('project_skills')
    op.drop_index('idx_projects_status_created_at', table_name='projects')
    op.drop_index('idx_projects_client_id', table_name='projects')
    op.drop_table('projects')
    op.drop_index('idx_user_portfolio_user_id', table_name='user_portfolio')
    op.drop_table('user_portfolio')
    op.drop_index('idx_user_skills_user_id', table_name='user_skills')
    op.drop_table('user_skills')
    op.drop_index('idx_users_user_type', table_name='users')
    op.drop_table('users')
