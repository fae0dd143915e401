"""create fintrack core tables

Revision ID: 4e1a9c2b7d30
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4e1a9c2b7d30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('username', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'sms_logs',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('raw_message', sa.Text(), nullable=False),
        sa.Column('amount', sa.BigInteger(), nullable=True),
        sa.Column('direction', sa.String(length=10), nullable=True),
        sa.Column('counterparty', sa.String(length=255), nullable=True),
        sa.Column('channel', sa.String(length=20), nullable=True),
        sa.Column('reference_id', sa.String(length=64), nullable=True),
        sa.Column('category', sa.String(length=32), nullable=False),
        sa.Column('risk_score', sa.Integer(), nullable=False),
        sa.Column('is_fraud', sa.Boolean(), nullable=False),
        sa.Column('flags', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    # Trailing-window frequency lookups filter by user and creation time
    op.create_index('ix_sms_logs_user_id_created_at', 'sms_logs', ['user_id', 'created_at'])

    op.create_table(
        'fraud_alerts',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sms_log_id', sa.Uuid(), sa.ForeignKey('sms_logs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('risk_score', sa.Integer(), nullable=False),
        sa.Column('flags', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='OPEN'),
        *_timestamps(),
    )
    op.create_index('ix_fraud_alerts_user_id', 'fraud_alerts', ['user_id'])
    op.create_index('ix_fraud_alerts_sms_log_id', 'fraud_alerts', ['sms_log_id'])

    op.create_table(
        'expenses',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('amount', sa.BigInteger(), nullable=False),
        sa.Column('category', sa.String(length=32), nullable=False),
        sa.Column('sms_log_id', sa.Uuid(), sa.ForeignKey('sms_logs.id', ondelete='SET NULL'), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_expenses_user_id', 'expenses', ['user_id'])
    op.create_index('ix_expenses_category', 'expenses', ['category'])

    op.create_table(
        'ledger_entries',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('kind', sa.String(length=20), nullable=False),
        sa.Column('period_year', sa.Integer(), nullable=False),
        sa.Column('period_month', sa.Integer(), nullable=False),
        sa.Column('amount', sa.BigInteger(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.UniqueConstraint(
            'user_id', 'kind', 'period_year', 'period_month', name='uq_ledger_user_kind_period'
        ),
    )
    op.create_index('ix_ledger_entries_user_id', 'ledger_entries', ['user_id'])

    op.create_table(
        'goals',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('target_amount', sa.BigInteger(), nullable=False),
        sa.Column('invested_amount', sa.BigInteger(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('ix_goals_user_id', 'goals', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_goals_user_id', table_name='goals')
    op.drop_table('goals')
    op.drop_index('ix_ledger_entries_user_id', table_name='ledger_entries')
    op.drop_table('ledger_entries')
    op.drop_index('ix_expenses_category', table_name='expenses')
    op.drop_index('ix_expenses_user_id', table_name='expenses')
    op.drop_table('expenses')
    op.drop_index('ix_fraud_alerts_sms_log_id', table_name='fraud_alerts')
    op.drop_index('ix_fraud_alerts_user_id', table_name='fraud_alerts')
    op.drop_table('fraud_alerts')
    op.drop_index('ix_sms_logs_user_id_created_at', table_name='sms_logs')
    op.drop_table('sms_logs')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
