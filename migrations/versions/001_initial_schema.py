"""Initial schema - create all tables

Revision ID: 001
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns():
    return [
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        *_base_columns(),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=255), nullable=True),
        sa.Column('last_name', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=50), nullable=False, server_default='employee'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email')
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    # Create suppliers table
    op.create_table(
        'suppliers',
        *_base_columns(),
        sa.Column('supplier_code', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('contact_person', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('tax_number', sa.String(length=50), nullable=True),
        sa.Column('payment_terms', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.PrimaryKeyConstraint('id', name='pk_suppliers'),
        sa.UniqueConstraint('supplier_code', name='uq_suppliers_supplier_code')
    )

    # Create products table
    op.create_table(
        'products',
        *_base_columns(),
        sa.Column('supplier_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('name', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sku', sa.String(length=100), nullable=False),
        sa.Column('barcode', sa.String(length=100), nullable=True),
        sa.Column('category', sa.String(length=255), nullable=True),
        sa.Column('price', sa.DECIMAL(precision=10, scale=2), nullable=False),
        sa.Column('cost', sa.DECIMAL(precision=10, scale=2), nullable=True),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='TRY'),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('min_quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.ForeignKeyConstraint(['supplier_id'], ['suppliers.id'], name='fk_products_supplier_id_suppliers', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_products'),
        sa.UniqueConstraint('sku', name='uq_products_sku'),
        sa.UniqueConstraint('barcode', name='uq_products_barcode')
    )
    op.create_index('ix_products_supplier_id', 'products', ['supplier_id'])
    op.create_index('idx_products_low_stock', 'products', ['quantity', 'min_quantity'])

    # Create customers table
    op.create_table(
        'customers',
        *_base_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('total_debt', sa.DECIMAL(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('debt_currency', sa.String(length=3), nullable=False, server_default='TRY'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.CheckConstraint('total_debt >= 0', name='ck_customers_total_debt_non_negative'),
        sa.PrimaryKeyConstraint('id', name='pk_customers')
    )
    op.create_index('ix_customers_name', 'customers', ['name'])

    # Create transactions table
    op.create_table(
        'transactions',
        *_base_columns(),
        sa.Column('transaction_number', sa.String(length=50), nullable=False),
        sa.Column('customer_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('customer_name', sa.String(length=255), nullable=False),
        sa.Column('total', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.Column('discount', sa.DECIMAL(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('tax', sa.DECIMAL(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('payment_type', sa.String(length=50), nullable=False, server_default='cash'),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='TRY'),
        sa.Column('status', sa.String(length=50), nullable=False, server_default='completed'),
        sa.Column('transaction_type', sa.String(length=50), nullable=False, server_default='sale'),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], name='fk_transactions_customer_id_customers', ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name='pk_transactions'),
        sa.UniqueConstraint('transaction_number', name='uq_transactions_transaction_number')
    )
    op.create_index('ix_transactions_customer_id', 'transactions', ['customer_id'])
    op.create_index('idx_transactions_status', 'transactions', ['status'])
    op.create_index('idx_transactions_created_at', 'transactions', ['created_at'])

    # Create transaction_items table
    op.create_table(
        'transaction_items',
        *_base_columns(),
        sa.Column('transaction_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('product_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('product_name', sa.String(length=500), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price', sa.DECIMAL(precision=10, scale=2), nullable=False),
        sa.Column('total', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.ForeignKeyConstraint(['transaction_id'], ['transactions.id'], name='fk_transaction_items_transaction_id_transactions', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], name='fk_transaction_items_product_id_products', ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name='pk_transaction_items')
    )
    op.create_index('ix_transaction_items_transaction_id', 'transaction_items', ['transaction_id'])
    op.create_index('ix_transaction_items_product_id', 'transaction_items', ['product_id'])


def downgrade() -> None:
    # Drop tables in reverse order
    op.drop_table('transaction_items')
    op.drop_table('transactions')
    op.drop_table('customers')
    op.drop_table('products')
    op.drop_table('suppliers')
    op.drop_table('users')
