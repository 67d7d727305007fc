"""Create users, properties, payments, repairs, contractors, shares, notifications

Revision ID: 20261017_000001
Revises: None
Create Date: 2026-10-17

Initial schema: one payment record per property per month, utility lines
per record, repairs, contractors, read-only shares and notifications.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261017_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

REPAIR_STATUSES = ('Pending Repairmen', 'Pending Supply', 'In Progress', 'Complete')


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('lease_start', sa.Date(), nullable=True),
        sa.Column('lease_end', sa.Date(), nullable=True),
        sa.Column('security_deposit', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('rent_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('utilities_to_track', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_properties_owner_id', ondelete='CASCADE'),
    )
    op.create_index('ix_properties_owner_id', 'properties', ['owner_id'])

    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_tenants_property_id', ondelete='CASCADE'),
    )
    op.create_index('ix_tenants_property_id', 'tenants', ['property_id'])

    op.create_table(
        'contractors',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('contact', sa.String(50), nullable=False),
        sa.Column('company_name', sa.String(255), nullable=True),
        sa.Column('company_address', sa.String(500), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_contractors_owner_id', ondelete='CASCADE'),
    )
    op.create_index('ix_contractors_owner_id', 'contractors', ['owner_id'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('rent_bill_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('rent_paid_amount', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('payment_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_payments_property_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_payments_owner_id', ondelete='NO ACTION'),
        sa.UniqueConstraint('property_id', 'year', 'month', name='uq_payments_property_period'),
        sa.CheckConstraint('month >= 1 AND month <= 12', name='ck_payments_month'),
    )
    op.create_index('ix_payments_property_id', 'payments', ['property_id'])
    op.create_index('ix_payments_owner_id', 'payments', ['owner_id'])

    op.create_table(
        'utility_payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('payment_id', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('bill_amount', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('paid_amount', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['payment_id'], ['payments.id'], name='fk_utility_payments_payment_id', ondelete='CASCADE'),
    )
    op.create_index('ix_utility_payments_payment_id', 'utility_payments', ['payment_id'])

    op.create_table(
        'repairs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('contractor_id', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column(
            'status',
            sa.Enum(*REPAIR_STATUSES, name='repair_status'),
            nullable=False,
            server_default='Pending Repairmen'
        ),
        sa.Column('cost', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('request_date', sa.DateTime(), nullable=False),
        sa.Column('repair_date', sa.DateTime(), nullable=True),
        sa.Column('completion_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_repairs_property_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_repairs_owner_id', ondelete='NO ACTION'),
        sa.ForeignKeyConstraint(['contractor_id'], ['contractors.id'], name='fk_repairs_contractor_id', ondelete='SET NULL'),
    )
    op.create_index('ix_repairs_property_id', 'repairs', ['property_id'])
    op.create_index('ix_repairs_owner_id', 'repairs', ['owner_id'])
    op.create_index('ix_repairs_status', 'repairs', ['status'])

    op.create_table(
        'shares',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('viewer_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_shares_owner_id', ondelete='NO ACTION'),
        sa.ForeignKeyConstraint(['viewer_id'], ['users.id'], name='fk_shares_viewer_id', ondelete='NO ACTION'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_shares_property_id', ondelete='CASCADE'),
        sa.UniqueConstraint('viewer_id', 'property_id', name='uq_shares_viewer_property'),
    )
    op.create_index('ix_shares_owner_id', 'shares', ['owner_id'])
    op.create_index('ix_shares_viewer_id', 'shares', ['viewer_id'])
    op.create_index('ix_shares_property_id', 'shares', ['property_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('recipient_email', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_acknowledged', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], name='fk_notifications_sender_id', ondelete='CASCADE'),
    )
    op.create_index('ix_notifications_sender_id', 'notifications', ['sender_id'])
    op.create_index('ix_notifications_recipient_email', 'notifications', ['recipient_email'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('notifications')
    op.drop_table('shares')
    op.drop_table('repairs')
    op.drop_table('utility_payments')
    op.drop_table('payments')
    op.drop_table('contractors')
    op.drop_table('tenants')
    op.drop_table('properties')
    op.drop_table('users')

    # Drop the enum type (PostgreSQL)
    op.execute("DROP TYPE IF EXISTS repair_status")
