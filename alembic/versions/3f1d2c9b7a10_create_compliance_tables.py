"""create_compliance_tables

Revision ID: 3f1d2c9b7a10
Revises:
Create Date: 2026-10-19 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1d2c9b7a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

response_value = sa.Enum('Yes', 'No', 'NotApplicable', name='responsevalue')
compliance_type = sa.Enum('Required', 'Recommended', 'Optional', name='compliancetype')
item_status = sa.Enum('Completed', 'Pending', name='itemstatus')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create identity, question bank, onboarding, response and item tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('company', sa.String(), nullable=True),
        sa.Column('industry', sa.String(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'compliance_questions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('question_key', sa.String(), nullable=False),
        sa.Column('question', sa.Text(), nullable=False),
        sa.Column('industry', sa.String(), nullable=True),
        sa.Column('compliance_requirement', sa.String(), nullable=False),
        sa.Column('implementation_steps', sa.Text(), nullable=False),
        sa.Column('documentation_required', sa.Text(), nullable=False),
        sa.Column('submission_details', sa.Text(), nullable=False),
        sa.Column('deadlines_renewals', sa.Text(), nullable=False),
        sa.Column('law_requirement', sa.String(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_compliance_questions_id', 'compliance_questions', ['id'])
    op.create_index('ix_compliance_questions_question_key', 'compliance_questions', ['question_key'], unique=True)
    op.create_index('ix_compliance_questions_industry', 'compliance_questions', ['industry'])

    op.create_table(
        'onboarding_sessions',
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('current_step', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('industry', sa.String(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'user_responses',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('question_id', sa.Integer(), sa.ForeignKey('compliance_questions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('response', response_value, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'question_id', name='uix_user_response_question'),
    )
    op.create_index('ix_user_responses_id', 'user_responses', ['id'])
    op.create_index('ix_user_responses_user_id', 'user_responses', ['user_id'])

    op.create_table(
        'compliance_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('question_id', sa.Integer(), sa.ForeignKey('compliance_questions.id', ondelete='SET NULL'), nullable=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('type', compliance_type, nullable=False),
        sa.Column('status', item_status, nullable=False),
        sa.Column('industry', sa.String(), nullable=True),
        sa.Column('document_url', sa.String(), nullable=True),
        sa.Column('official_site_url', sa.String(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'question_id', name='uix_user_item_question'),
    )
    op.create_index('ix_compliance_items_id', 'compliance_items', ['id'])
    op.create_index('ix_compliance_items_user_id', 'compliance_items', ['user_id'])


def downgrade() -> None:
    """Drop all compliance tables and enum types."""
    op.drop_table('compliance_items')
    op.drop_table('user_responses')
    op.drop_table('onboarding_sessions')
    op.drop_table('compliance_questions')
    op.drop_table('profiles')
    op.drop_table('users')
    bind = op.get_bind()
    item_status.drop(bind, checkfirst=True)
    compliance_type.drop(bind, checkfirst=True)
    response_value.drop(bind, checkfirst=True)
