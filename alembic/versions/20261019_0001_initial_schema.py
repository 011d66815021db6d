"""Create initial schema

Revision ID: 20261019_0001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '20261019_0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def _has_table(bind, name: str) -> bool:
    try:
        insp = inspect(bind)
        return insp.has_table(name)
    except Exception:
        return False

def upgrade() -> None:
    # Status, role and type columns are plain strings; allowed values live in the application
    bind = op.get_bind()

    if not _has_table(bind, 'hotels'):
        op.create_table('hotels',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=200), nullable=False),
            sa.Column('address', sa.String(length=300), nullable=False),
            sa.Column('phone', sa.String(length=50), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('total_rooms', sa.Integer(), server_default='0', nullable=False),
            sa.Column('owner_id', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_hotels_owner_id'), 'hotels', ['owner_id'], unique=False)

    if not _has_table(bind, 'users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('username', sa.String(length=100), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('hashed_password', sa.String(length=255), nullable=False),
            sa.Column('role', sa.String(length=20), server_default='manager', nullable=False),
            sa.Column('hotel_id', sa.Integer(), nullable=True),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.ForeignKeyConstraint(['hotel_id'], ['hotels.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    if not _has_table(bind, 'rooms'):
        op.create_table('rooms',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('hotel_id', sa.Integer(), nullable=False),
            sa.Column('room_number', sa.String(length=20), nullable=False),
            sa.Column('type', sa.String(length=20), nullable=False),
            sa.Column('status', sa.String(length=20), server_default='available', nullable=False),
            sa.Column('price_per_night', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('max_guests', sa.Integer(), server_default='2', nullable=False),
            sa.Column('amenities', sa.JSON(), nullable=True),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.ForeignKeyConstraint(['hotel_id'], ['hotels.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_rooms_hotel_id'), 'rooms', ['hotel_id'], unique=False)

    if not _has_table(bind, 'guests'):
        op.create_table('guests',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('first_name', sa.String(length=100), nullable=False),
            sa.Column('last_name', sa.String(length=100), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('phone', sa.String(length=50), nullable=False),
            sa.Column('address', sa.String(length=300), nullable=True),
            sa.Column('id_type', sa.String(length=20), nullable=True),
            sa.Column('id_number', sa.String(length=50), nullable=True),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_guests_email'), 'guests', ['email'], unique=False)

    if not _has_table(bind, 'bookings'):
        op.create_table('bookings',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('hotel_id', sa.Integer(), nullable=False),
            sa.Column('room_id', sa.Integer(), nullable=True),
            sa.Column('guest_id', sa.Integer(), nullable=True),
            sa.Column('check_in_date', sa.DateTime(), nullable=False),
            sa.Column('check_out_date', sa.DateTime(), nullable=False),
            sa.Column('total_amount', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
            sa.Column('payment_status', sa.String(length=20), server_default='pending', nullable=False),
            sa.Column('number_of_guests', sa.Integer(), server_default='1', nullable=False),
            sa.Column('special_requests', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.ForeignKeyConstraint(['hotel_id'], ['hotels.id'], ),
            sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ondelete='SET NULL'),
            sa.ForeignKeyConstraint(['guest_id'], ['guests.id'], ondelete='SET NULL'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_bookings_id'), 'bookings', ['id'], unique=False)
        op.create_index(op.f('ix_bookings_hotel_id'), 'bookings', ['hotel_id'], unique=False)
        op.create_index(op.f('ix_bookings_room_id'), 'bookings', ['room_id'], unique=False)
        op.create_index(op.f('ix_bookings_guest_id'), 'bookings', ['guest_id'], unique=False)
        op.create_index(op.f('ix_bookings_created_at'), 'bookings', ['created_at'], unique=False)

    if not _has_table(bind, 'staff'):
        op.create_table('staff',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('hotel_id', sa.Integer(), nullable=False),
            sa.Column('first_name', sa.String(length=100), nullable=False),
            sa.Column('last_name', sa.String(length=100), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('phone', sa.String(length=50), nullable=False),
            sa.Column('position', sa.String(length=30), nullable=False),
            sa.Column('department', sa.String(length=100), nullable=False),
            sa.Column('salary', sa.Numeric(precision=10, scale=2), nullable=True),
            sa.Column('hire_date', sa.DateTime(), nullable=False),
            sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.ForeignKeyConstraint(['hotel_id'], ['hotels.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_staff_hotel_id'), 'staff', ['hotel_id'], unique=False)

    if not _has_table(bind, 'tasks'):
        op.create_table('tasks',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('hotel_id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(length=200), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('assigned_to', sa.Integer(), nullable=True),
            sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
            sa.Column('priority', sa.String(length=20), server_default='medium', nullable=False),
            sa.Column('due_date', sa.DateTime(), nullable=True),
            sa.Column('completed_at', sa.DateTime(), nullable=True),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.ForeignKeyConstraint(['hotel_id'], ['hotels.id'], ),
            sa.ForeignKeyConstraint(['assigned_to'], ['staff.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_tasks_hotel_id'), 'tasks', ['hotel_id'], unique=False)


def downgrade() -> None:
    for table in ('tasks', 'staff', 'bookings', 'guests', 'rooms', 'users', 'hotels'):
        op.drop_table(table)
