"""create profiles, events, memories

Revision ID: 3b1f0c9a7d21
Revises:
Create Date: 2025-12-02 10:41:17.204311

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b1f0c9a7d21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

tier = sa.Enum('BASIC', 'PREMIUM', 'VIP', name='tier')


def upgrade() -> None:
    op.create_table(
        'profiles',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('role', sa.Enum('host', 'admin', name='role'), nullable=False, server_default='host'),
        sa.Column('tier', tier, nullable=False, server_default='BASIC'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        'events',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('cover_image', sa.String(), nullable=True),
        sa.Column('welcome_message', sa.Text(), nullable=True),
        sa.Column('spotify_url', sa.String(), nullable=True),
        sa.Column('category', sa.Enum('wedding', 'baptism', 'party', 'other', name='eventcategory'), nullable=False, server_default='other'),
        sa.Column('slug', sa.String(255), nullable=False, unique=True),
        sa.Column('password', sa.String(), nullable=True),
        sa.Column('package', tier, nullable=False, server_default='BASIC'),
        sa.Column('storage_used', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('is_expired', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        'memories',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('event_id', sa.String(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.Enum('photo', 'video', 'story', name='memorytype'), nullable=False, server_default='photo'),
        sa.Column('storage_path', sa.String(), nullable=False),
        sa.Column('file_size', sa.BigInteger(), nullable=False),
        sa.Column('original_text', sa.Text(), nullable=True),
        sa.Column('ai_story', sa.Text(), nullable=True),
        sa.Column('is_approved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # indexes
    op.create_index('ix_profiles_email', 'profiles', ['email'])
    op.create_index('ix_events_user_id', 'events', ['user_id'])
    op.create_index('ix_events_slug', 'events', ['slug'])
    op.create_index('ix_memories_event_id', 'memories', ['event_id'])
    op.create_index('ix_memories_created_at', 'memories', ['created_at'])


def downgrade() -> None:
    # reverse order
    op.drop_index('ix_memories_created_at')
    op.drop_index('ix_memories_event_id')
    op.drop_index('ix_events_slug')
    op.drop_index('ix_events_user_id')
    op.drop_index('ix_profiles_email')
    op.drop_table('memories')
    op.drop_table('events')
    op.drop_table('profiles')
    sa.Enum(name='memorytype').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='eventcategory').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='role').drop(op.get_bind(), checkfirst=True)
    tier.drop(op.get_bind(), checkfirst=True)
