"""baseline_migration

Revision ID: 1a7c3e9b2d10
Revises:
Create Date: 2026-03-02 10:12:41.118204

Creates every table that does not exist yet; existing tables are left alone.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '1a7c3e9b2d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    ]


def owner():
    return [
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
    ]


def owned_indexes(table_name: str):
    op.create_index(op.f(f'ix_{table_name}_id'), table_name, ['id'], unique=False)
    op.create_index(op.f(f'ix_{table_name}_user_id'), table_name, ['user_id'], unique=False)


def upgrade() -> None:
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('full_name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=False),
            sa.Column('avatar_url', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)

    if not table_exists('job_listings'):
        op.create_table('job_listings',
            *owner(),
            sa.Column('company', sa.String(), nullable=False),
            sa.Column('position', sa.String(), nullable=False),
            sa.Column('location', sa.String(), nullable=False),
            sa.Column('industry', sa.String(), nullable=False),
            sa.Column('company_size', sa.String(), nullable=True),
            sa.Column('status', sa.String(), nullable=False),
            sa.Column('deadline', sa.String(length=10), nullable=True),
            sa.Column('job_post_url', sa.String(), nullable=False),
            *timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        owned_indexes('job_listings')
        op.create_index(op.f('ix_job_listings_created_at'), 'job_listings', ['created_at'], unique=False)
        op.create_index('idx_job_listings_user_deadline', 'job_listings', ['user_id', 'deadline'], unique=False)

    if not table_exists('applications'):
        op.create_table('applications',
            *owner(),
            sa.Column('company', sa.String(), nullable=False),
            sa.Column('position', sa.String(), nullable=False),
            sa.Column('stage', sa.String(), nullable=False),
            sa.Column('progress', sa.Integer(), nullable=False),
            sa.Column('deadline', sa.String(length=10), nullable=True),
            sa.Column('applied_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('status', sa.String(), nullable=False),
            sa.Column('url', sa.String(), nullable=True),
            *timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        owned_indexes('applications')
        op.create_index('idx_applications_user_applied', 'applications', ['user_id', 'applied_at'], unique=False)

    if not table_exists('schedules'):
        op.create_table('schedules',
            *owner(),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('date', sa.String(length=10), nullable=False),
            *timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        owned_indexes('schedules')
        op.create_index('idx_schedules_user_date', 'schedules', ['user_id', 'date'], unique=False)

    if not table_exists('daily_routine_status'):
        op.create_table('daily_routine_status',
            *owner(),
            sa.Column('date', sa.String(length=10), nullable=False),
            sa.Column('routine_key', sa.String(), nullable=False),
            sa.Column('check_type', sa.String(), nullable=False),
            sa.Column('is_completed', sa.Boolean(), nullable=False),
            sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
            *timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('user_id', 'date', 'routine_key', name='uq_routine_user_date_key')
        )
        owned_indexes('daily_routine_status')
        op.create_index(op.f('ix_daily_routine_status_date'), 'daily_routine_status', ['date'], unique=False)

    if not table_exists('news_scraps'):
        op.create_table('news_scraps',
            *owner(),
            sa.Column('article_url', sa.String(), nullable=False),
            sa.Column('headline', sa.String(), nullable=False),
            sa.Column('content', sa.Text(), nullable=False),
            sa.Column('applied_role', sa.String(), nullable=True),
            sa.Column('industry', sa.String(), nullable=True),
            sa.Column('company_name', sa.String(), nullable=True),
            *timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        owned_indexes('news_scraps')
        op.create_index(op.f('ix_news_scraps_created_at'), 'news_scraps', ['created_at'], unique=False)

    if not table_exists('time_logs'):
        op.create_table('time_logs',
            *owner(),
            sa.Column('category', sa.String(), nullable=False),
            sa.Column('content', sa.Text(), nullable=False),
            sa.Column('date', sa.String(length=10), nullable=False),
            sa.Column('start_hour', sa.Integer(), nullable=False),
            sa.Column('end_hour', sa.Integer(), nullable=False),
            *timestamps(),
            sa.CheckConstraint('start_hour >= 0 AND end_hour <= 23 AND end_hour > start_hour', name='ck_time_logs_hours'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        owned_indexes('time_logs')
        op.create_index('idx_time_logs_user_date', 'time_logs', ['user_id', 'date'], unique=False)

    if not table_exists('weekly_goals'):
        op.create_table('weekly_goals',
            *owner(),
            sa.Column('year_month', sa.String(length=7), nullable=False),
            sa.Column('week', sa.Integer(), nullable=False),
            sa.Column('goal', sa.Text(), nullable=False),
            *timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('user_id', 'year_month', 'week', name='uq_weekly_goal_user_month_week')
        )
        owned_indexes('weekly_goals')

    if not table_exists('stickers'):
        op.create_table('stickers',
            *owner(),
            sa.Column('text', sa.String(), nullable=False),
            sa.Column('is_completed', sa.Boolean(), nullable=False),
            *timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        owned_indexes('stickers')


def downgrade() -> None:
    """Drop every table, dependents first."""
    for table_name in (
        'stickers',
        'weekly_goals',
        'time_logs',
        'news_scraps',
        'daily_routine_status',
        'schedules',
        'applications',
        'job_listings',
        'users',
    ):
        op.drop_table(table_name)
