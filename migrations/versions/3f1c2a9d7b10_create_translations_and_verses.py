"""create_translations_and_verses

Revision ID: 3f1c2a9d7b10
Revises: 
Create Date: 2026-10-19 10:12:31.504218

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('identifier', sa.String(length=20), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('language', sa.String(length=100), nullable=False),
        sa.Column('language_code', sa.String(length=10), nullable=False),
        sa.Column('license', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_translations_id'), 'translations', ['id'], unique=False)
    op.create_index(op.f('ix_translations_identifier'), 'translations', ['identifier'], unique=True)

    op.create_table('verses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('translation_id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.String(length=3), nullable=False),
        sa.Column('book', sa.String(length=100), nullable=False),
        sa.Column('book_num', sa.Integer(), nullable=False),
        sa.Column('chapter', sa.Integer(), nullable=False),
        sa.Column('verse', sa.Integer(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['translation_id'], ['translations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_verses_location', 'verses', ['translation_id', 'book_id', 'chapter', 'verse'], unique=False)
    op.create_index('ix_verses_structure', 'verses', ['translation_id', 'book_num', 'chapter'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_verses_structure', table_name='verses')
    op.drop_index('ix_verses_location', table_name='verses')
    op.drop_table('verses')
    op.drop_index(op.f('ix_translations_identifier'), table_name='translations')
    op.drop_index(op.f('ix_translations_id'), table_name='translations')
    op.drop_table('translations')
