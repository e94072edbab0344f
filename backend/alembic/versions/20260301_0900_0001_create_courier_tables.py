"""create courier tables

Revision ID: 0001_create_courier_tables
Revises:
Create Date: 2026-03-01 09:00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_create_courier_tables'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'operators',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('code', sa.String(50), nullable=True, unique=True),
        sa.Column('status', sa.String(30), nullable=False),
        *_timestamps(),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_operators_status', 'operators', ['status'])
    op.create_index('ix_operators_created_at', 'operators', ['created_at'])
    op.create_index('ix_operators_deleted_at', 'operators', ['deleted_at'])

    op.create_table(
        'roles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('code', sa.String(50), nullable=False, unique=True),
        sa.Column('name', sa.String(100), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_roles_created_at', 'roles', ['created_at'])

    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=True, unique=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('operator_id', sa.String(36), sa.ForeignKey('operators.id'), nullable=True),
        sa.Column('is_customer', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status', sa.String(30), nullable=False),
        *_timestamps(),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_operator_id', 'users', ['operator_id'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])
    op.create_index('ix_users_deleted_at', 'users', ['deleted_at'])

    op.create_table(
        'user_roles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('role_id', sa.String(36), sa.ForeignKey('roles.id'), nullable=False),
        sa.Column('assigned_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_user_roles_user_id', 'user_roles', ['user_id'])

    op.create_table(
        'vehicles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('operator_id', sa.String(36), sa.ForeignKey('operators.id'), nullable=True),
        sa.Column('plate_number', sa.String(30), nullable=False),
        sa.Column('vehicle_type', sa.String(50), nullable=True),
        *_timestamps(),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_vehicles_operator_id', 'vehicles', ['operator_id'])
    op.create_index('ix_vehicles_created_at', 'vehicles', ['created_at'])
    op.create_index('ix_vehicles_deleted_at', 'vehicles', ['deleted_at'])

    op.create_table(
        'drivers',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('operator_id', sa.String(36), sa.ForeignKey('operators.id'), nullable=True),
        sa.Column('license_number', sa.String(50), nullable=True),
        sa.Column('status', sa.String(30), nullable=False),
        *_timestamps(),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_drivers_user_id', 'drivers', ['user_id'])
    op.create_index('ix_drivers_operator_id', 'drivers', ['operator_id'])
    op.create_index('ix_drivers_created_at', 'drivers', ['created_at'])
    op.create_index('ix_drivers_deleted_at', 'drivers', ['deleted_at'])

    op.create_table(
        'vehicle_drivers',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('vehicle_id', sa.String(36), sa.ForeignKey('vehicles.id'), nullable=False),
        sa.Column('driver_id', sa.String(36), sa.ForeignKey('drivers.id'), nullable=False),
        sa.Column('assigned_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_vehicle_drivers_vehicle_id', 'vehicle_drivers', ['vehicle_id'])
    op.create_index('ix_vehicle_drivers_driver_id', 'vehicle_drivers', ['driver_id'])

    op.create_table(
        'orders',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('order_number', sa.String(50), nullable=True, unique=True),
        sa.Column('status', sa.String(40), nullable=False),
        sa.Column('operator_id', sa.String(36), sa.ForeignKey('operators.id'), nullable=True),
        sa.Column('customer_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('vehicle_id', sa.String(36), sa.ForeignKey('vehicles.id'), nullable=True),
        sa.Column('pickup_address', sa.String(500), nullable=True),
        sa.Column('delivery_address', sa.String(500), nullable=True),
        *_timestamps(),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_operator_id', 'orders', ['operator_id'])
    op.create_index('ix_orders_customer_id', 'orders', ['customer_id'])
    op.create_index('ix_orders_vehicle_id', 'orders', ['vehicle_id'])
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])
    op.create_index('ix_orders_deleted_at', 'orders', ['deleted_at'])
    op.create_index('ix_orders_operator_status', 'orders', ['operator_id', 'status'])

    op.create_table(
        'payments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('order_id', sa.String(36), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('operator_id', sa.String(36), sa.ForeignKey('operators.id'), nullable=True),
        sa.Column('customer_id', sa.String(36), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', sa.String(30), nullable=False),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_payments_order_id', 'payments', ['order_id'])
    op.create_index('ix_payments_operator_id', 'payments', ['operator_id'])
    op.create_index('ix_payments_customer_id', 'payments', ['customer_id'])
    op.create_index('ix_payments_status', 'payments', ['status'])
    op.create_index('ix_payments_created_at', 'payments', ['created_at'])
    op.create_index('ix_payments_deleted_at', 'payments', ['deleted_at'])


def downgrade():
    op.drop_table('payments')
    op.drop_table('orders')
    op.drop_table('vehicle_drivers')
    op.drop_table('drivers')
    op.drop_table('vehicles')
    op.drop_table('user_roles')
    op.drop_table('users')
    op.drop_table('roles')
    op.drop_table('operators')
