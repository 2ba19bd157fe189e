"""initial catalog: base paths, tag categories, tags, media, media tags

Revision ID: 4c1f0a9e2b7d
Revises:
Create Date: 2026-10-16 20:40:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4c1f0a9e2b7d'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'base_paths',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('base_path', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), server_default='', nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_base_paths')),
        sa.UniqueConstraint('base_path', name='uq_base_paths_base_path'),
    )
    op.create_table(
        'tag_categories',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('color', sa.String(length=9), nullable=False),
        sa.Column('description', sa.Text(), server_default='', nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tag_categories')),
    )
    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), server_default='', nullable=False),
        sa.ForeignKeyConstraint(['category_id'], ['tag_categories.id'],
                                name=op.f('fk_tags_category_id_tag_categories'), ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tags')),
        sa.UniqueConstraint('name', 'category_id', name='uq_tags_name_category_id'),
    )
    op.create_index('ix_tags_category_id', 'tags', ['category_id'], unique=False)

    op.create_table(
        'media',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('relative_path', sa.Text(), nullable=False),
        sa.Column('base_path_id', sa.Integer(), nullable=False),
        sa.Column('width', sa.Integer(), nullable=True),
        sa.Column('height', sa.Integer(), nullable=True),
        sa.Column('size', sa.Float(), nullable=False),
        sa.Column('mark', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), server_default='', nullable=False),
        sa.Column('media_type', sa.Text(), server_default='unknown', nullable=False),
        sa.CheckConstraint('size > 0', name=op.f('ck_media_size_positive')),
        sa.CheckConstraint('mark IS NULL OR (mark BETWEEN 1 AND 10)', name=op.f('ck_media_mark_1_10')),
        sa.ForeignKeyConstraint(['base_path_id'], ['base_paths.id'],
                                name=op.f('fk_media_base_path_id_base_paths'), ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_media')),
        sa.UniqueConstraint('base_path_id', 'relative_path', name='uq_media_base_path_relative_path'),
    )
    op.create_index('ix_media_base_path_id', 'media', ['base_path_id'], unique=False)

    op.create_table(
        'media_tags',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('media_id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['media_id'], ['media.id'],
                                name=op.f('fk_media_tags_media_id_media'), ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'],
                                name=op.f('fk_media_tags_tag_id_tags'), ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_media_tags')),
        sa.UniqueConstraint('media_id', 'tag_id', name='uq_media_tags_media_id_tag_id'),
    )
    op.create_index('ix_media_tags_tag_id', 'media_tags', ['tag_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_media_tags_tag_id', table_name='media_tags')
    op.drop_table('media_tags')
    op.drop_index('ix_media_base_path_id', table_name='media')
    op.drop_table('media')
    op.drop_index('ix_tags_category_id', table_name='tags')
    op.drop_table('tags')
    op.drop_table('tag_categories')
    op.drop_table('base_paths')
