"""initial inventory schema

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-09-28 10:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

item_status = sa.Enum('in-stock', 'low-stock', 'out-of-stock', name='item_status')
stock_change_type = sa.Enum('opening', 'restock', 'request', 'adjustment', 'closing', name='stock_change_type')
request_status = sa.Enum('pending', 'approved', 'rejected', 'completed', name='request_status')
request_priority = sa.Enum('high', 'medium', 'low', name='request_priority')
user_role = sa.Enum('admin', 'manager', 'user', name='user_role')


def _audit_columns():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.String(), nullable=True),
        sa.Column('updated_by', sa.String(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('min_quantity', sa.Integer(), nullable=False),
        sa.Column('unit', sa.String(50), nullable=False),
        sa.Column('price', sa.Numeric(15, 2), nullable=False),
        sa.Column('status', item_status, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('last_restocked', sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
        sa.CheckConstraint('quantity >= 0', name='ck_items_quantity_non_negative'),
        sa.CheckConstraint('min_quantity >= 0', name='ck_items_min_quantity_non_negative'),
    )
    op.create_index('ix_items_id', 'items', ['id'])
    op.create_index('ix_items_category', 'items', ['category'])
    op.create_index('ix_items_is_active', 'items', ['is_active'])

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        *_audit_columns(),
    )
    op.create_index('ix_categories_id', 'categories', ['id'])

    op.create_table(
        'requests',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('project_name', sa.String(255), nullable=False),
        sa.Column('requester_id', sa.String(36), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('priority', request_priority, nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('status', request_status, nullable=False),
        *_audit_columns(),
    )
    op.create_index('ix_requests_requester_id', 'requests', ['requester_id'])
    op.create_index('ix_requests_status', 'requests', ['status'])

    op.create_table(
        'request_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('request_id', sa.String(36), sa.ForeignKey('requests.id', ondelete='CASCADE'), nullable=False),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('items.id'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('stock_before', sa.Integer(), nullable=True),
        sa.Column('stock_after', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('quantity > 0', name='ck_request_items_quantity_positive'),
    )
    op.create_index('ix_request_items_id', 'request_items', ['id'])
    op.create_index('ix_request_items_request_id', 'request_items', ['request_id'])
    op.create_index('ix_request_items_item_id', 'request_items', ['item_id'])

    op.create_table(
        'stock_history',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('items.id'), nullable=False),
        sa.Column('change_type', stock_change_type, nullable=False),
        sa.Column('quantity_before', sa.Integer(), nullable=False),
        sa.Column('quantity_change', sa.Integer(), nullable=False),
        sa.Column('quantity_after', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_stock_history_id', 'stock_history', ['id'])
    op.create_index('ix_stock_history_item_id', 'stock_history', ['item_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(50), nullable=True),
        sa.Column('title', sa.String(255), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('related_item_id', sa.Integer(), sa.ForeignKey('items.id'), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_notifications_id', 'notifications', ['id'])
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])


def downgrade() -> None:
    op.drop_table('notifications')
    op.drop_table('stock_history')
    op.drop_table('request_items')
    op.drop_table('requests')
    op.drop_table('categories')
    op.drop_table('items')
    op.drop_table('users')
    bind = op.get_bind()
    for enum_type in (user_role, request_priority, request_status, stock_change_type, item_status):
        enum_type.drop(bind, checkfirst=True)
