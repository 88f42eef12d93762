"""add customers, invoices, gold loans and inventory tables

Revision ID: 20261019_1200_gold_shop
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20261019_1200_gold_shop'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create customers table
    op.create_table(
        'customers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('mobile', sa.String(length=10), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('dob', sa.Date(), nullable=True),
        sa.Column('gender', sa.Enum('MALE', 'FEMALE', 'OTHER', 'UNSPECIFIED', name='gender'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('loyalty_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_due', sa.Float(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_customers_id'), 'customers', ['id'], unique=False)
    op.create_index(op.f('ix_customers_mobile'), 'customers', ['mobile'], unique=True)

    # Create invoices table
    op.create_table(
        'invoices',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('invoice_number', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('subtotal', sa.Float(), nullable=False),
        sa.Column('gst', sa.Float(), nullable=False, server_default='3'),
        sa.Column('gst_amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('paid_amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('due_amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('status', sa.Enum('PENDING', 'PARTIAL', 'PAID', name='invoicestatus'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_invoices_id'), 'invoices', ['id'], unique=False)
    op.create_index(op.f('ix_invoices_invoice_number'), 'invoices', ['invoice_number'], unique=True)
    op.create_index(op.f('ix_invoices_customer_id'), 'invoices', ['customer_id'], unique=False)

    # Create invoice_items table
    op.create_table(
        'invoice_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('invoice_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('rate', sa.Float(), nullable=False),
        sa.Column('making_charge', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total_price', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['invoice_id'], ['invoices.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_invoice_items_id'), 'invoice_items', ['id'], unique=False)
    op.create_index(op.f('ix_invoice_items_invoice_id'), 'invoice_items', ['invoice_id'], unique=False)

    # Create customer_history table
    op.create_table(
        'customer_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('invoice_id', sa.Integer(), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('paid_amount', sa.Float(), nullable=False),
        sa.Column('due_amount', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ),
        sa.ForeignKeyConstraint(['invoice_id'], ['invoices.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_customer_history_id'), 'customer_history', ['id'], unique=False)
    op.create_index(op.f('ix_customer_history_customer_id'), 'customer_history', ['customer_id'], unique=False)

    # Create gold_loans table
    op.create_table(
        'gold_loans',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('loan_number', sa.String(length=20), nullable=False),
        sa.Column('loan_amount', sa.Float(), nullable=False),
        sa.Column('interest_rate', sa.Float(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('total_items_value', sa.Float(), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'CLOSED', 'DEFAULTED', 'RENEWED', name='goldloanstatus'), nullable=False),
        sa.Column('status_reason', sa.Text(), nullable=True),
        sa.Column('remaining_amount', sa.Float(), nullable=False),
        sa.Column('next_payment_due', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_gold_loans_id'), 'gold_loans', ['id'], unique=False)
    op.create_index(op.f('ix_gold_loans_customer_id'), 'gold_loans', ['customer_id'], unique=False)
    op.create_index(op.f('ix_gold_loans_loan_number'), 'gold_loans', ['loan_number'], unique=True)
    op.create_index(op.f('ix_gold_loans_status'), 'gold_loans', ['status'], unique=False)

    # Create gold_loan_items table
    op.create_table(
        'gold_loan_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('loan_id', sa.Integer(), nullable=False),
        sa.Column('item_type', sa.Enum('GOLD', 'SILVER', 'DIAMOND', name='pledgeditemtype'), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('purity', sa.Float(), nullable=False),
        sa.Column('market_value', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['loan_id'], ['gold_loans.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_gold_loan_items_id'), 'gold_loan_items', ['id'], unique=False)
    op.create_index(op.f('ix_gold_loan_items_loan_id'), 'gold_loan_items', ['loan_id'], unique=False)

    # Create gold_loan_repayments table
    op.create_table(
        'gold_loan_repayments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('loan_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('interest_paid', sa.Float(), nullable=False),
        sa.Column('principal_paid', sa.Float(), nullable=False),
        sa.Column('remaining_balance', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['loan_id'], ['gold_loans.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_gold_loan_repayments_id'), 'gold_loan_repayments', ['id'], unique=False)
    op.create_index(op.f('ix_gold_loan_repayments_loan_id'), 'gold_loan_repayments', ['loan_id'], unique=False)

    # Create inventory_items table
    op.create_table(
        'inventory_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('item_code', sa.String(length=20), nullable=False),
        sa.Column('item_type', sa.Enum('GOLD', 'SILVER', 'DIAMOND', 'PLATINUM', 'OTHER', name='inventoryitemtype'), nullable=False),
        sa.Column('category', sa.Enum('ORNAMENT', 'BULLION', 'LOOSE_STONE', 'RAW_MATERIAL', name='inventorycategory'), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('unit', sa.Enum('GRAM', 'CARAT', 'PIECE', name='stockunit'), nullable=False),
        sa.Column('purity', sa.Float(), nullable=False),
        sa.Column('purchase_price', sa.Float(), nullable=False),
        sa.Column('selling_price', sa.Float(), nullable=False),
        sa.Column('making_charges', sa.Float(), nullable=False, server_default='0'),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('reorder_level', sa.Integer(), nullable=False),
        sa.Column('supplier_name', sa.String(length=200), nullable=True),
        sa.Column('supplier_contact', sa.String(length=100), nullable=True),
        sa.Column('supplier_invoice_number', sa.String(length=100), nullable=True),
        sa.Column('location', sa.String(length=100), nullable=False),
        sa.Column('status', sa.Enum('IN_STOCK', 'LOW_STOCK', 'OUT_OF_STOCK', 'ORDERED', name='stockstatus'), nullable=False),
        sa.Column('images', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_inventory_items_id'), 'inventory_items', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_items_item_code'), 'inventory_items', ['item_code'], unique=True)
    op.create_index(op.f('ix_inventory_items_item_type'), 'inventory_items', ['item_type'], unique=False)
    op.create_index(op.f('ix_inventory_items_category'), 'inventory_items', ['category'], unique=False)
    op.create_index(op.f('ix_inventory_items_status'), 'inventory_items', ['status'], unique=False)

    # Create inventory_transactions table
    op.create_table(
        'inventory_transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('transaction_type', sa.Enum('PURCHASE', 'SALE', 'RETURN', 'ADJUSTMENT', name='stocktransactiontype'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('reference', sa.String(length=100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['item_id'], ['inventory_items.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_inventory_transactions_id'), 'inventory_transactions', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_transactions_item_id'), 'inventory_transactions', ['item_id'], unique=False)


def downgrade() -> None:
    # Drop inventory
    op.drop_index(op.f('ix_inventory_transactions_item_id'), table_name='inventory_transactions')
    op.drop_index(op.f('ix_inventory_transactions_id'), table_name='inventory_transactions')
    op.drop_table('inventory_transactions')
    op.drop_index(op.f('ix_inventory_items_status'), table_name='inventory_items')
    op.drop_index(op.f('ix_inventory_items_category'), table_name='inventory_items')
    op.drop_index(op.f('ix_inventory_items_item_type'), table_name='inventory_items')
    op.drop_index(op.f('ix_inventory_items_item_code'), table_name='inventory_items')
    op.drop_index(op.f('ix_inventory_items_id'), table_name='inventory_items')
    op.drop_table('inventory_items')

    # Drop gold loans
    op.drop_index(op.f('ix_gold_loan_repayments_loan_id'), table_name='gold_loan_repayments')
    op.drop_index(op.f('ix_gold_loan_repayments_id'), table_name='gold_loan_repayments')
    op.drop_table('gold_loan_repayments')
    op.drop_index(op.f('ix_gold_loan_items_loan_id'), table_name='gold_loan_items')
    op.drop_index(op.f('ix_gold_loan_items_id'), table_name='gold_loan_items')
    op.drop_table('gold_loan_items')
    op.drop_index(op.f('ix_gold_loans_status'), table_name='gold_loans')
    op.drop_index(op.f('ix_gold_loans_loan_number'), table_name='gold_loans')
    op.drop_index(op.f('ix_gold_loans_customer_id'), table_name='gold_loans')
    op.drop_index(op.f('ix_gold_loans_id'), table_name='gold_loans')
    op.drop_table('gold_loans')

    # Drop customer history and invoices
    op.drop_index(op.f('ix_customer_history_customer_id'), table_name='customer_history')
    op.drop_index(op.f('ix_customer_history_id'), table_name='customer_history')
    op.drop_table('customer_history')
    op.drop_index(op.f('ix_invoice_items_invoice_id'), table_name='invoice_items')
    op.drop_index(op.f('ix_invoice_items_id'), table_name='invoice_items')
    op.drop_table('invoice_items')
    op.drop_index(op.f('ix_invoices_customer_id'), table_name='invoices')
    op.drop_index(op.f('ix_invoices_invoice_number'), table_name='invoices')
    op.drop_index(op.f('ix_invoices_id'), table_name='invoices')
    op.drop_table('invoices')

    # Drop customers
    op.drop_index(op.f('ix_customers_mobile'), table_name='customers')
    op.drop_index(op.f('ix_customers_id'), table_name='customers')
    op.drop_table('customers')

    # Drop enums
    op.execute('DROP TYPE IF EXISTS stocktransactiontype')
    op.execute('DROP TYPE IF EXISTS stockstatus')
    op.execute('DROP TYPE IF EXISTS stockunit')
    op.execute('DROP TYPE IF EXISTS inventorycategory')
    op.execute('DROP TYPE IF EXISTS inventoryitemtype')
    op.execute('DROP TYPE IF EXISTS pledgeditemtype')
    op.execute('DROP TYPE IF EXISTS goldloanstatus')
    op.execute('DROP TYPE IF EXISTS invoicestatus')
    op.execute('DROP TYPE IF EXISTS gender')
