"""Create users and notes tables

Revision ID: 4f1c2a7d9b30
Revises:
Create Date: 2026-10-19 09:12:04.118532

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from noteshare.core.models.types import GUID


# revision identifiers, used by Alembic.
revision: str = '4f1c2a7d9b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('login_id', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('length(username) <= 50', name='ck_users_username_len'),
        sa.CheckConstraint('length(login_id) <= 50', name='ck_users_login_id_len'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('login_id'),
    )
    op.create_index('idx_users_login_id', 'users', ['login_id'], unique=False)

    op.create_table(
        'notes',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('subject', sa.String(length=100), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('user_id', GUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('length(title) <= 200', name='ck_notes_title_len'),
        sa.CheckConstraint('length(subject) <= 100', name='ck_notes_subject_len'),
        sa.CheckConstraint('updated_at >= created_at', name='ck_notes_updated_after_created'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_notes_user_id', 'notes', ['user_id'], unique=False)
    op.create_index('idx_notes_created_at', 'notes', ['created_at'], unique=False)
    op.create_index('idx_notes_user_updated', 'notes', ['user_id', 'updated_at'], unique=False)
    op.create_index('idx_notes_subject', 'notes', ['subject'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_notes_subject', table_name='notes')
    op.drop_index('idx_notes_user_updated', table_name='notes')
    op.drop_index('idx_notes_created_at', table_name='notes')
    op.drop_index('idx_notes_user_id', table_name='notes')
    op.drop_table('notes')
    op.drop_index('idx_users_login_id', table_name='users')
    op.drop_table('users')
