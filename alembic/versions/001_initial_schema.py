"""initial_schema_companies_channels

Revision ID: 001
Revises: 
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

subscription_status = sa.Enum('TRIAL', 'ACTIVE', 'CANCELLED', name='subscriptionstatus')
channel_kind = sa.Enum('company', 'employee', name='channelkind')
channel_type = sa.Enum('x', 'telegram', 'website', 'email', 'phone', name='channeltype')
channel_status = sa.Enum('unverified', 'verified', 'failed', name='channelstatus')
employee_status = sa.Enum('pending', 'verified', 'rejected', name='employeeverificationstatus')
report_status = sa.Enum('open', 'reviewed', 'dismissed', name='reportstatus')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'companies',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('verification_token', sa.String(255), nullable=True),
        sa.Column('verification_token_expires', sa.DateTime(), nullable=True),
        sa.Column('reset_token', sa.String(255), nullable=True),
        sa.Column('reset_token_expires', sa.DateTime(), nullable=True),
        sa.Column('subscription_status', subscription_status, nullable=False),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_companies')),
    )
    op.create_index(op.f('ix_companies_id'), 'companies', ['id'], unique=False)
    op.create_index(op.f('ix_companies_email'), 'companies', ['email'], unique=True)
    op.create_index(op.f('ix_companies_verification_token'), 'companies', ['verification_token'], unique=False)
    op.create_index(op.f('ix_companies_reset_token'), 'companies', ['reset_token'], unique=False)

    op.create_table(
        'channels',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('company_id', sa.String(), nullable=False),
        sa.Column('kind', channel_kind, nullable=False),
        sa.Column('type', channel_type, nullable=False),
        sa.Column('value', sa.String(512), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', channel_status, nullable=False),
        sa.Column('verified_at', sa.DateTime(), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE', name=op.f('fk_channels_company_id_companies')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_channels')),
    )
    op.create_index(op.f('ix_channels_id'), 'channels', ['id'], unique=False)
    op.create_index(op.f('ix_channels_company_id'), 'channels', ['company_id'], unique=False)
    op.create_index(op.f('ix_channels_status'), 'channels', ['status'], unique=False)
    op.create_index('ix_channels_company_created', 'channels', ['company_id', 'created_at'], unique=False)

    op.create_table(
        'employee_channel_info',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('channel_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(512), nullable=False),
        sa.Column('role', sa.String(255), nullable=False),
        sa.Column('department', sa.String(255), nullable=True),
        sa.Column('verification_status', employee_status, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['channel_id'], ['channels.id'], ondelete='CASCADE', name=op.f('fk_employee_channel_info_channel_id_channels')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_employee_channel_info')),
        sa.UniqueConstraint('channel_id', name=op.f('uq_employee_channel_info_channel_id')),
    )
    op.create_index(op.f('ix_employee_channel_info_id'), 'employee_channel_info', ['id'], unique=False)

    op.create_table(
        'verification_attempts',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('input_value', sa.String(1024), nullable=False),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('match_type', sa.String(20), nullable=True),
        sa.Column('company_id', sa.String(), nullable=True),
        sa.Column('channel_id', sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='SET NULL', name=op.f('fk_verification_attempts_company_id_companies')),
        sa.ForeignKeyConstraint(['channel_id'], ['channels.id'], ondelete='SET NULL', name=op.f('fk_verification_attempts_channel_id_channels')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_verification_attempts')),
    )
    op.create_index(op.f('ix_verification_attempts_id'), 'verification_attempts', ['id'], unique=False)
    op.create_index(op.f('ix_verification_attempts_company_id'), 'verification_attempts', ['company_id'], unique=False)

    op.create_table(
        'reports',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('reporter_name', sa.String(512), nullable=False),
        sa.Column('reported_channel', sa.String(512), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('status', report_status, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_reports')),
    )
    op.create_index(op.f('ix_reports_id'), 'reports', ['id'], unique=False)
    op.create_index(op.f('ix_reports_reported_channel'), 'reports', ['reported_channel'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('reports')
    op.drop_table('verification_attempts')
    op.drop_table('employee_channel_info')
    op.drop_table('channels')
    op.drop_table('companies')
    for enum_type in (report_status, employee_status, channel_status, channel_type, channel_kind, subscription_status):
        enum_type.drop(op.get_bind(), checkfirst=True)
