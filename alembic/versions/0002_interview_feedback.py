"""interview feedback and reminder flag

Revision ID: 0002_interview_feedback
Revises: 0001_initial
Create Date: 2026-10-19 12:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

revision = '0002_interview_feedback'
down_revision = '0001_initial'
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table('interviews') as batch_op:
        batch_op.add_column(sa.Column('reminder_sent', sa.Boolean(), nullable=False, server_default=sa.false()))

    op.create_table(
        'interview_feedback',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('interview_id', sa.Integer(), sa.ForeignKey('interviews.id'), nullable=False),
        sa.Column('interviewer_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('technical_score', sa.Integer(), nullable=False),
        sa.Column('communication_score', sa.Integer(), nullable=False),
        sa.Column('problem_solving_score', sa.Integer(), nullable=False),
        sa.Column('cultural_fit_score', sa.Integer(), nullable=False),
        sa.Column('overall_recommendation', sa.String(20), nullable=False),
        sa.Column('detailed_feedback', sa.Text()),
        sa.Column('strengths', sa.JSON()),
        sa.Column('areas_for_improvement', sa.JSON()),
        sa.Column('follow_up_questions', sa.JSON()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint('interview_id', 'interviewer_id', name='uq_interview_feedback_interviewer'),
    )
    op.create_index('ix_interview_feedback_interview_id', 'interview_feedback', ['interview_id'])


def downgrade() -> None:
    op.drop_index('ix_interview_feedback_interview_id', table_name='interview_feedback')
    op.drop_table('interview_feedback')
    with op.batch_alter_table('interviews') as batch_op:
        batch_op.drop_column('reminder_sent')
