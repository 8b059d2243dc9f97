"""initial schema: users, jobs, applications and the stage pipeline

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('name', sa.String(120)),
        sa.Column('role', sa.String(20), nullable=False, server_default='candidate'),
        sa.Column('company', sa.String(200)),
        sa.Column('skills', sa.JSON()),
        sa.Column('experience_years', sa.Integer()),
        *_timestamps(),
    )
    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('company', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location', sa.String(200), nullable=False),
        sa.Column('job_type', sa.String(20), nullable=False, server_default='full_time'),
        sa.Column('experience_level', sa.String(20), nullable=False, server_default='entry'),
        sa.Column('salary_min', sa.Integer()),
        sa.Column('salary_max', sa.Integer()),
        sa.Column('required_skills', sa.JSON()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('posted_by', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('posted_date', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('application_deadline', sa.Date()),
        *_timestamps(),
    )
    op.create_index('ix_jobs_is_active', 'jobs', ['is_active'])

    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('job_id', sa.Integer(), sa.ForeignKey('jobs.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('status', sa.String(30), nullable=False, server_default='applied'),
        sa.Column('current_stage', sa.String(30), nullable=False, server_default='resume_upload'),
        sa.Column('progress_percentage', sa.Integer(), nullable=False, server_default='10'),
        sa.Column('qualification_score', sa.Float()),
        sa.Column('resume_summary', sa.Text()),
        sa.Column('resume_url', sa.String(512)),
        sa.Column('cover_letter', sa.Text()),
        sa.Column('notes', sa.Text()),
        sa.Column('applied_date', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('next_interview_date', sa.Date()),
        sa.Column('next_interview_time', sa.Time()),
        sa.Column('next_interview_stage', sa.String(30)),
        *_timestamps(),
        sa.UniqueConstraint('job_id', 'user_id', name='uq_applications_job_user'),
    )
    op.create_index('ix_applications_job_id', 'applications', ['job_id'])
    op.create_index('ix_applications_user_id', 'applications', ['user_id'])
    op.create_index('ix_applications_status', 'applications', ['status'])

    op.create_table(
        'application_stages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('application_id', sa.Integer(), sa.ForeignKey('applications.id'), nullable=False),
        sa.Column('stage_name', sa.String(30), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('score', sa.Float(), nullable=False, server_default='0'),
        sa.Column('feedback', sa.Text()),
        sa.Column('completed_at', sa.DateTime()),
        *_timestamps(),
        sa.UniqueConstraint('application_id', 'stage_name', name='uq_application_stages_app_stage'),
    )
    op.create_index('ix_application_stages_application_id', 'application_stages', ['application_id'])

    op.create_table(
        'interviews',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('application_id', sa.Integer(), sa.ForeignKey('applications.id'), nullable=False),
        sa.Column('stage', sa.String(30), nullable=False),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('scheduled_time', sa.Time(), nullable=False),
        sa.Column('interviewer_id', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('location', sa.String(255)),
        sa.Column('meeting_link', sa.String(512)),
        sa.Column('status', sa.String(20), nullable=False, server_default='scheduled'),
        sa.Column('feedback', sa.Text()),
        sa.Column('rating', sa.Integer()),
        *_timestamps(),
    )
    op.create_index('ix_interviews_application_id', 'interviews', ['application_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('related_application_id', sa.Integer(), sa.ForeignKey('applications.id')),
        sa.Column('type', sa.String(50)),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sent_to', sa.String(255)),
        sa.Column('provider_message_id', sa.String(255)),
        sa.Column('sent_at', sa.DateTime()),
        *_timestamps(),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])

    op.create_table(
        'status_overrides',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('application_id', sa.Integer(), sa.ForeignKey('applications.id'), nullable=False),
        sa.Column('actor_id', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('old_status', sa.String(30)),
        sa.Column('new_status', sa.String(30), nullable=False),
        sa.Column('old_progress', sa.Integer()),
        sa.Column('new_progress', sa.Integer()),
        sa.Column('reason', sa.Text()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_status_overrides_application_id', 'status_overrides', ['application_id'])


def downgrade() -> None:
    for table in ('status_overrides', 'notifications', 'interviews', 'application_stages',
                  'applications', 'jobs', 'users'):
        op.drop_table(table)
