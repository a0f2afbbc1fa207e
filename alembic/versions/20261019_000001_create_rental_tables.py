"""Create properties, tenants, leases and invoices tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Core rental tables. Invoice totals, balance and status are derived from the
amount columns by the application.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the core rental tables."""
    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=50), nullable=True),
        sa.Column('zip_code', sa.String(length=20), nullable=True),
        sa.Column(
            'property_type',
            sa.Enum('house', 'doublewide', 'singlewide', 'loan', name='property_type'),
            nullable=True
        ),
        sa.Column('rent_value', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('insurance_premium', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('property_tax', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'],
            ['properties.id'],
            name='fk_tenants_property_id',
            ondelete='SET NULL'
        ),
    )

    op.create_table(
        'leases',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('rent', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('rent_cadence', sa.String(length=50), nullable=True),
        sa.Column('late_fee_amount', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('lease_start_date', sa.Date(), nullable=False),
        sa.Column('lease_end_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('rent_due_day', sa.Integer(), nullable=True),
        sa.Column('grace_days', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_leases_property_id'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], name='fk_leases_tenant_id'),
    )
    op.create_index('ix_leases_property_id', 'leases', ['property_id'])
    op.create_index('ix_leases_tenant_id', 'leases', ['tenant_id'])
    op.create_index('ix_leases_status', 'leases', ['status'])

    op.create_table(
        'invoices',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('lease_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=True),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('period_start', sa.Date(), nullable=True),
        sa.Column('period_end', sa.Date(), nullable=True),
        sa.Column('amount_rent', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('amount_late', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('amount_other', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('amount_total', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('amount_paid', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('balance_due', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column(
            'status',
            sa.Enum('OPEN', 'PAID', 'VOID', name='invoice_status'),
            nullable=False,
            server_default='OPEN'
        ),
        sa.Column('paid_in_full_at', sa.DateTime(), nullable=True),
        sa.Column('void_reason', sa.String(length=500), nullable=True),
        sa.Column('voided_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['lease_id'],
            ['leases.id'],
            name='fk_invoices_lease_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], name='fk_invoices_tenant_id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_invoices_property_id'),
    )

    # Create indexes for common queries
    op.create_index('ix_invoices_lease_id', 'invoices', ['lease_id'])
    op.create_index('ix_invoices_tenant_id', 'invoices', ['tenant_id'])
    op.create_index('ix_invoices_property_id', 'invoices', ['property_id'])
    op.create_index('ix_invoices_due_date', 'invoices', ['due_date'])
    op.create_index('ix_invoices_status', 'invoices', ['status'])


def downgrade() -> None:
    """Drop the core rental tables."""
    op.drop_index('ix_invoices_status', table_name='invoices')
    op.drop_index('ix_invoices_due_date', table_name='invoices')
    op.drop_index('ix_invoices_property_id', table_name='invoices')
    op.drop_index('ix_invoices_tenant_id', table_name='invoices')
    op.drop_index('ix_invoices_lease_id', table_name='invoices')
    op.drop_table('invoices')

    op.drop_index('ix_leases_status', table_name='leases')
    op.drop_index('ix_leases_tenant_id', table_name='leases')
    op.drop_index('ix_leases_property_id', table_name='leases')
    op.drop_table('leases')

    op.drop_table('tenants')
    op.drop_table('properties')
