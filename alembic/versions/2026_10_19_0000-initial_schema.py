"""initial schema

Revision ID: 5d1e7a0c2b94
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5d1e7a0c2b94'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns(with_actors: bool) -> list[sa.Column]:
    columns = [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]
    if with_actors:
        columns += [
            sa.Column('deleted_at', sa.DateTime(), nullable=True),
            sa.Column('created_by', sa.BigInteger(), nullable=True),
            sa.Column('updated_by', sa.BigInteger(), nullable=True),
            sa.Column('deleted_by', sa.BigInteger(), nullable=True),
        ]
    return columns


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('uid', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('token', sa.String(length=1024), nullable=True),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        *_audit_columns(with_actors=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('uid'),
    )
    op.create_index('ix_users_deleted_at', 'users', ['deleted_at'])
    op.create_index(
        'uq_users_username_active', 'users', ['username'], unique=True,
        sqlite_where=sa.text('deleted_at IS NULL'), postgresql_where=sa.text('deleted_at IS NULL'),
    )
    op.create_index(
        'uq_users_email_active', 'users', ['email'], unique=True,
        sqlite_where=sa.text('deleted_at IS NULL'), postgresql_where=sa.text('deleted_at IS NULL'),
    )

    op.create_table(
        'user_books',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('author', sa.String(length=255), nullable=False),
        sa.Column('publisher', sa.String(length=255), nullable=True),
        sa.Column('cover', sa.String(length=255), nullable=True),
        sa.Column('total_pages', sa.Integer(), nullable=False),
        sa.Column('current_page', sa.Integer(), nullable=False),
        sa.Column('motivation_read', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        *_audit_columns(with_actors=True),
        sa.CheckConstraint("status IN ('reading', 'finished')", name='ck_user_books_status'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_books_user_id', 'user_books', ['user_id'])
    op.create_index('ix_user_books_deleted_at', 'user_books', ['deleted_at'])

    op.create_table(
        'reading_activities',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_book_id', sa.Integer(), nullable=False),
        sa.Column('pages_read', sa.Integer(), nullable=False),
        sa.Column('start_page', sa.Integer(), nullable=False),
        sa.Column('end_page', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('reading_date', sa.Date(), nullable=False),
        *_audit_columns(with_actors=False),
        sa.ForeignKeyConstraint(['user_book_id'], ['user_books.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reading_activities_user_book_id', 'reading_activities', ['user_book_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_reading_activities_user_book_id', 'reading_activities')
    op.drop_table('reading_activities')
    op.drop_index('ix_user_books_deleted_at', 'user_books')
    op.drop_index('ix_user_books_user_id', 'user_books')
    op.drop_table('user_books')
    op.drop_index('uq_users_email_active', 'users')
    op.drop_index('uq_users_username_active', 'users')
    op.drop_index('ix_users_deleted_at', 'users')
    op.drop_table('users')
