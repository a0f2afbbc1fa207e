"""Create payment_allocations table

Revision ID: 20261019_000003
Revises: 20261019_000002
Create Date: 2026-10-19

One row per (payment, invoice) application of money.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000003'
down_revision: Union[str, None] = '20261019_000002'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the payment_allocations table."""
    op.create_table(
        'payment_allocations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('payment_id', sa.Integer(), nullable=False),
        sa.Column('invoice_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('applied_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['payment_id'],
            ['payments.id'],
            name='fk_payment_allocations_payment_id',
            ondelete='CASCADE'
        ),
        # NO ACTION: invoices already cascade from leases
        sa.ForeignKeyConstraint(['invoice_id'], ['invoices.id'], name='fk_payment_allocations_invoice_id'),
    )
    op.create_index('ix_payment_allocations_payment_id', 'payment_allocations', ['payment_id'])
    op.create_index('ix_payment_allocations_invoice_id', 'payment_allocations', ['invoice_id'])


def downgrade() -> None:
    """Drop the payment_allocations table."""
    op.drop_index('ix_payment_allocations_invoice_id', table_name='payment_allocations')
    op.drop_index('ix_payment_allocations_payment_id', table_name='payment_allocations')
    op.drop_table('payment_allocations')
