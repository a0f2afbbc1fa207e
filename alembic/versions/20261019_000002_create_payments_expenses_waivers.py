"""Create payments, expenses and late_fee_waivers tables

Revision ID: 20261019_000002
Revises: 20261019_000001
Create Date: 2026-10-19

late_fee_waivers holds one row per (lease, waiver date).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000002'
down_revision: Union[str, None] = '20261019_000001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the payments, expenses and late_fee_waivers tables."""
    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('lease_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('invoice_id', sa.Integer(), nullable=True),
        sa.Column('payment_date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('payment_type', sa.String(length=50), nullable=False, server_default='Rent'),
        sa.Column('payment_method', sa.String(length=50), nullable=True, server_default='Manual Entry'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='completed'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['lease_id'],
            ['leases.id'],
            name='fk_payments_lease_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_payments_property_id'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], name='fk_payments_tenant_id'),
        # NO ACTION: SQL Server rejects a second cascade path into payments
        sa.ForeignKeyConstraint(['invoice_id'], ['invoices.id'], name='fk_payments_invoice_id'),
    )
    op.create_index('ix_payments_lease_id', 'payments', ['lease_id'])
    op.create_index('ix_payments_property_id', 'payments', ['property_id'])
    op.create_index('ix_payments_tenant_id', 'payments', ['tenant_id'])
    op.create_index('ix_payments_invoice_id', 'payments', ['invoice_id'])
    op.create_index('ix_payments_payment_date', 'payments', ['payment_date'])

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('amount_owed', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('interest_rate', sa.Numeric(precision=7, scale=4), nullable=True),
        sa.Column('last_paid_date', sa.Date(), nullable=True),
        sa.Column('is_one_time', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'],
            ['properties.id'],
            name='fk_expenses_property_id',
            ondelete='SET NULL'
        ),
    )
    op.create_index('ix_expenses_property_id', 'expenses', ['property_id'])
    op.create_index('ix_expenses_last_paid_date', 'expenses', ['last_paid_date'])

    op.create_table(
        'late_fee_waivers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('lease_id', sa.Integer(), nullable=False),
        sa.Column('waiver_date', sa.Date(), nullable=False),
        sa.Column('waived_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('waived_by', sa.String(length=100), nullable=False, server_default='system'),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['lease_id'],
            ['leases.id'],
            name='fk_late_fee_waivers_lease_id',
            ondelete='CASCADE'
        ),
        sa.UniqueConstraint('lease_id', 'waiver_date', name='uq_late_fee_waivers_lease_date'),
    )
    op.create_index('ix_late_fee_waivers_lease_id', 'late_fee_waivers', ['lease_id'])


def downgrade() -> None:
    """Drop the payments, expenses and late_fee_waivers tables."""
    op.drop_index('ix_late_fee_waivers_lease_id', table_name='late_fee_waivers')
    op.drop_table('late_fee_waivers')

    op.drop_index('ix_expenses_last_paid_date', table_name='expenses')
    op.drop_index('ix_expenses_property_id', table_name='expenses')
    op.drop_table('expenses')

    op.drop_index('ix_payments_payment_date', table_name='payments')
    op.drop_index('ix_payments_invoice_id', table_name='payments')
    op.drop_index('ix_payments_tenant_id', table_name='payments')
    op.drop_index('ix_payments_property_id', table_name='payments')
    op.drop_index('ix_payments_lease_id', table_name='payments')
    op.drop_table('payments')
