"""Initial bookstore schema: authors, books, users

Revision ID: 3f9c2a7d1e04
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d1e04'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('authors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False, comment="Author's first name"),
        sa.Column('last_name', sa.String(length=100), nullable=False, comment="Author's last name"),
        sa.Column('bio', sa.Text(), nullable=True, comment='Author biography'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_authors_last_name'), 'authors', ['last_name'], unique=False)

    op.create_table('books',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Book title'),
        sa.Column('year', sa.Integer(), nullable=True, comment='Year of publication'),
        sa.Column('isbn', sa.String(length=20), nullable=True, comment='International Standard Book Number'),
        sa.Column('summary', sa.Text(), nullable=True, comment='Book summary'),
        sa.Column('image', sa.String(length=255), nullable=True, comment='Cover image filename'),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=True, comment='Book price'),
        sa.Column('author_id', sa.Integer(), nullable=True, comment='Author of the book'),
        sa.ForeignKeyConstraint(['author_id'], ['authors.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_books_title'), 'books', ['title'], unique=False)
    op.create_index(op.f('ix_books_isbn'), 'books', ['isbn'], unique=False)
    op.create_index(op.f('ix_books_author_id'), 'books', ['author_id'], unique=False)

    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False, comment="User's email address (used for login)"),
        sa.Column('hashed_password', sa.String(length=255), nullable=False, comment='Bcrypt hashed password'),
        sa.Column('roles', sa.String(length=255), nullable=False, comment='Comma-separated role names'),
        sa.Column('is_active', sa.Boolean(), nullable=False, comment='Whether the account is active'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='When the user registered'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)


def downgrade() -> None:
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
    op.drop_index(op.f('ix_books_author_id'), table_name='books')
    op.drop_index(op.f('ix_books_isbn'), table_name='books')
    op.drop_index(op.f('ix_books_title'), table_name='books')
    op.drop_table('books')
    op.drop_index(op.f('ix_authors_last_name'), table_name='authors')
    op.drop_table('authors')
