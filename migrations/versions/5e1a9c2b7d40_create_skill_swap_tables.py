"""create_skill_swap_tables

Revision ID: 5e1a9c2b7d40
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '5e1a9c2b7d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

exchange_preference = postgresql.ENUM(
    'TEACHING_ONLY', 'LEARNING_ONLY', 'FLEXIBLE', name='exchangepreference', create_type=False
)
skill_direction = postgresql.ENUM('OFFERED', 'WANTED', name='skilldirection', create_type=False)
proficiency = postgresql.ENUM(
    'BEGINNER', 'INTERMEDIATE', 'ADVANCED', 'EXPERT', name='proficiency', create_type=False
)
connection_status = postgresql.ENUM(
    'PENDING', 'ACCEPTED', 'REJECTED', name='connectionstatus', create_type=False
)


def upgrade() -> None:
    """Upgrade schema - users, skill catalogue, skill ledger, connections, vouches and messages."""
    bind = op.get_bind()
    exchange_preference.create(bind, checkfirst=True)
    skill_direction.create(bind, checkfirst=True)
    proficiency.create(bind, checkfirst=True)
    connection_status.create(bind, checkfirst=True)

    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('profile_image', sa.String(length=500), nullable=True),
        sa.Column('exchange_preference', exchange_preference, nullable=False, server_default='FLEXIBLE'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_location', 'users', ['location'])

    op.create_table(
        'categories',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_categories_id', 'categories', ['id'])
    op.create_index('ix_categories_name', 'categories', ['name'], unique=True)

    op.create_table(
        'skills',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('category_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'])
    )
    op.create_index('ix_skills_id', 'skills', ['id'])
    op.create_index('ix_skills_name', 'skills', ['name'], unique=True)
    op.create_index('ix_skills_category_id', 'skills', ['category_id'])

    op.create_table(
        'user_skills',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('skill_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('direction', skill_direction, nullable=False),
        sa.Column('proficiency', proficiency, nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['skill_id'], ['skills.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'skill_id', 'direction', name='unique_user_skill_direction')
    )
    op.create_index('ix_user_skills_id', 'user_skills', ['id'])
    op.create_index('ix_user_skills_user_id', 'user_skills', ['user_id'])
    op.create_index('ix_user_skills_skill_id', 'user_skills', ['skill_id'])
    op.create_index('ix_user_skills_direction', 'user_skills', ['direction'])
    op.create_index('ix_user_skills_created_at', 'user_skills', ['created_at'])
    # Match scans filter on (skill_id, direction) across all users
    op.create_index('ix_user_skills_skill_direction', 'user_skills', ['skill_id', 'direction'])

    op.create_table(
        'connections',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('sender_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('receiver_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_low_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_high_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('status', connection_status, nullable=False, server_default='PENDING'),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['receiver_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_low_id', 'user_high_id', name='unique_connection_pair'),
        sa.CheckConstraint('sender_id <> receiver_id', name='ck_connection_not_self')
    )
    op.create_index('ix_connections_id', 'connections', ['id'])
    op.create_index('ix_connections_sender_id', 'connections', ['sender_id'])
    op.create_index('ix_connections_receiver_id', 'connections', ['receiver_id'])
    op.create_index('ix_connections_status', 'connections', ['status'])
    op.create_index('ix_connections_created_at', 'connections', ['created_at'])

    op.create_table(
        'vouches',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('voucher_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('vouched_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('skill_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False, server_default='5'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['voucher_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['vouched_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['skill_id'], ['skills.id'], ondelete='SET NULL'),
        sa.UniqueConstraint('voucher_id', 'vouched_id', name='unique_voucher_vouched'),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_vouch_rating_range')
    )
    op.create_index('ix_vouches_id', 'vouches', ['id'])
    op.create_index('ix_vouches_voucher_id', 'vouches', ['voucher_id'])
    op.create_index('ix_vouches_vouched_id', 'vouches', ['vouched_id'])
    op.create_index('ix_vouches_created_at', 'vouches', ['created_at'])

    op.create_table(
        'messages',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('sender_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('receiver_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['receiver_id'], ['users.id'], ondelete='CASCADE')
    )
    op.create_index('ix_messages_id', 'messages', ['id'])
    op.create_index('ix_messages_sender_id', 'messages', ['sender_id'])
    op.create_index('ix_messages_receiver_id', 'messages', ['receiver_id'])
    op.create_index('ix_messages_is_read', 'messages', ['is_read'])
    op.create_index('ix_messages_created_at', 'messages', ['created_at'])


def downgrade() -> None:
    """Downgrade schema - drop all skill swap tables and enum types."""
    op.drop_table('messages')
    op.drop_table('vouches')
    op.drop_table('connections')
    op.drop_table('user_skills')
    op.drop_table('skills')
    op.drop_table('categories')
    op.drop_table('users')

    bind = op.get_bind()
    connection_status.drop(bind, checkfirst=True)
    proficiency.drop(bind, checkfirst=True)
    skill_direction.drop(bind, checkfirst=True)
    exchange_preference.drop(bind, checkfirst=True)
