"""create_lab_tables

Revision ID: 3f2a9c1d7e40
Revises:
Create Date: 2026-10-18 09:00:00

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7e40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create devices, device_status, reservations and inventory.

    Reservation bounds and last_checked are epoch milliseconds (BIGINT).
    Child rows cascade-delete with their device.
    """
    print("[MIGRATION] Creating lab reservation tables...")

    op.create_table(
        'devices',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('device_ip', sa.String(100), nullable=False, server_default=''),
        sa.Column('console_ip', sa.String(100), nullable=False, server_default=''),
        sa.Column('console_port', sa.Integer(), nullable=False, server_default='23'),
        sa.Column('enable_ping', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('team', sa.String(100), nullable=False, server_default='Development'),
        sa.Column('section', sa.String(100), nullable=False, server_default=''),
        sa.Column('owner', sa.String(200), nullable=False, server_default=''),
        sa.Column('location', sa.String(200), nullable=False, server_default=''),
    )

    op.create_table(
        'device_status',
        sa.Column(
            'device_id', sa.Integer(),
            sa.ForeignKey('devices.id', ondelete='CASCADE'),
            primary_key=True
        ),
        sa.Column('is_up', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('last_checked', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('login_activity', sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    op.create_table(
        'reservations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'device_id', sa.Integer(),
            sa.ForeignKey('devices.id', ondelete='CASCADE'),
            nullable=False
        ),
        sa.Column('user_name', sa.String(200), nullable=False),
        sa.Column('start_time', sa.BigInteger(), nullable=False),
        sa.Column('end_time', sa.BigInteger(), nullable=False),
        sa.CheckConstraint('end_time >= start_time', name='check_reservation_time_order'),
    )
    op.create_index('ix_reservations_device_id', 'reservations', ['device_id'])
    op.create_index(
        'idx_reservations_device_window', 'reservations',
        ['device_id', 'start_time', 'end_time']
    )

    op.create_table(
        'inventory',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('device_name', sa.String(200), nullable=False, unique=True),
        sa.Column('count', sa.Integer(), nullable=False, server_default='0'),
        sa.CheckConstraint('count >= 0', name='check_inventory_count'),
    )

    print("[MIGRATION] ✅ Lab reservation tables created")


def downgrade() -> None:
    print("[MIGRATION] Dropping lab reservation tables...")

    op.drop_table('inventory')
    op.drop_index('idx_reservations_device_window', table_name='reservations')
    op.drop_index('ix_reservations_device_id', table_name='reservations')
    op.drop_table('reservations')
    op.drop_table('device_status')
    op.drop_table('devices')

    print("[MIGRATION] ✅ Lab reservation tables dropped")
