"""Create notes table.

Revision ID: 001_create_notes_table
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_create_notes_table'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Enums store member names, matching sqlalchemy.Enum(NoteCategory)
    note_category = sa.Enum(
        'PERSONAL', 'WORK', 'STUDY', 'IDEAS', 'TASKS', 'OTHER',
        name='notecategory'
    )
    note_priority = sa.Enum('LOW', 'MEDIUM', 'HIGH', name='notepriority')

    op.create_table(
        'notes',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('summary', sa.String(500), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('category', note_category, nullable=False, server_default='OTHER'),
        sa.Column('priority', note_priority, nullable=False, server_default='MEDIUM'),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_favorite', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('color', sa.String(7), nullable=False, server_default='#ffffff'),
        sa.Column('word_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_summarized', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_index('ix_notes_user_id', 'notes', ['user_id'])
    op.create_index('ix_notes_category', 'notes', ['category'])
    op.create_index('ix_notes_created_at', 'notes', ['created_at'])
    op.create_index('ix_notes_is_favorite_created_at', 'notes', ['is_favorite', 'created_at'])


def downgrade() -> None:
    op.drop_index('ix_notes_is_favorite_created_at', table_name='notes')
    op.drop_index('ix_notes_created_at', table_name='notes')
    op.drop_index('ix_notes_category', table_name='notes')
    op.drop_index('ix_notes_user_id', table_name='notes')
    op.drop_table('notes')
    sa.Enum(name='notepriority').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='notecategory').drop(op.get_bind(), checkfirst=True)
