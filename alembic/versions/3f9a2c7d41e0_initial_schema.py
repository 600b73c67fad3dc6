"""initial_schema

Revision ID: 3f9a2c7d41e0
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a2c7d41e0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id',            sa.Integer(),               primary_key=True, autoincrement=True),
        sa.Column('user_name',     sa.String(length=64),       nullable=False),
        sa.Column('first_name',    sa.String(length=128),      nullable=True),
        sa.Column('last_name',     sa.String(length=128),      nullable=True),
        sa.Column('email',         sa.String(length=255),      nullable=False),
        sa.Column('password_hash', sa.String(length=255),      nullable=False),
        sa.Column('created_at',    sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_user_name', 'users', ['user_name'], unique=True)
    op.create_index('ix_users_email',     'users', ['email'],     unique=True)

    op.create_table(
        'wiki_pages',
        sa.Column('id',               sa.Integer(),               primary_key=True, autoincrement=True),
        sa.Column('title',            sa.String(length=512),      nullable=False),
        sa.Column('content',          sa.Text(),                  nullable=False),
        sa.Column('parent_id',        sa.Integer(),               nullable=False),
        sa.Column('origin_author_id', sa.Integer(),               nullable=True),
        sa.Column('author_id',        sa.Integer(),               sa.ForeignKey('users.id'), nullable=False),
        sa.Column('creation_date',    sa.DateTime(timezone=True), nullable=True),
        sa.Column('views',            sa.Integer(),               nullable=False, server_default='0'),
        sa.CheckConstraint('parent_id = -1 OR parent_id > 0', name='ck_wiki_pages_parent_id'),
        sa.CheckConstraint('length(title) > 0',               name='ck_wiki_pages_title'),
    )
    op.create_index('ix_wiki_pages_title',     'wiki_pages', ['title'],     unique=False)
    op.create_index('ix_wiki_pages_parent_id', 'wiki_pages', ['parent_id'], unique=False)
    op.create_index('ix_wiki_pages_author_id', 'wiki_pages', ['author_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_wiki_pages_author_id', table_name='wiki_pages')
    op.drop_index('ix_wiki_pages_parent_id', table_name='wiki_pages')
    op.drop_index('ix_wiki_pages_title',     table_name='wiki_pages')
    op.drop_table('wiki_pages')
    op.drop_index('ix_users_email',     table_name='users')
    op.drop_index('ix_users_user_name', table_name='users')
    op.drop_table('users')
