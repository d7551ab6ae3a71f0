"""Create reading list schema

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    status_table = op.create_table('lu_book_status',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    op.create_table('user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False, comment='Login email (unique)'),
        sa.Column('password_hash', sa.String(length=255), nullable=False, comment='bcrypt hash, never the plain password'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    op.create_table('registration_key',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key_code', sa.String(length=64), nullable=False, comment='Invitation code handed out to new users'),
        sa.Column('used', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('used_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_registration_key_key_code'), 'registration_key', ['key_code'], unique=True)

    op.create_table('book',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('isbn13', sa.String(length=13), nullable=True, comment='ISBN-13 without separators'),
        sa.Column('isbn10', sa.String(length=10), nullable=True, comment='ISBN-10 without separators'),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Book title'),
        sa.Column('author', sa.String(length=255), nullable=False, comment='Author name as printed on the book'),
        sa.Column('publisher', sa.String(length=255), nullable=True),
        sa.Column('publication_date', sa.Date(), nullable=True, comment='Date of publication'),
        sa.Column('edition', sa.String(length=100), nullable=True),
        sa.Column('genre', sa.String(length=100), nullable=True),
        sa.Column('language', sa.String(length=50), nullable=True),
        sa.Column('page_count', sa.Integer(), nullable=True, comment='Number of pages in the book'),
        sa.Column('summary', sa.Text(), nullable=True, comment='Book summary'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('page_count >= 0', name='ck_book_page_count_positive'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_book_isbn13'), 'book', ['isbn13'], unique=True)
    op.create_index(op.f('ix_book_isbn10'), 'book', ['isbn10'], unique=True)
    op.create_index(op.f('ix_book_title'), 'book', ['title'], unique=False)
    op.create_index(op.f('ix_book_author'), 'book', ['author'], unique=False)
    op.create_index(op.f('ix_book_publication_date'), 'book', ['publication_date'], unique=False)

    op.create_table('reading_list',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False, comment='Reading list title'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_reading_list_user_id'), 'reading_list', ['user_id'], unique=False)

    op.create_table('reading_list_matrix',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('reading_list_id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('status_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['book_id'], ['book.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reading_list_id'], ['reading_list.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['status_id'], ['lu_book_status.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('reading_list_id', 'book_id', name='uq_reading_list_matrix_list_book')
    )
    op.create_index(op.f('ix_reading_list_matrix_reading_list_id'), 'reading_list_matrix', ['reading_list_id'], unique=False)
    op.create_index(op.f('ix_reading_list_matrix_book_id'), 'reading_list_matrix', ['book_id'], unique=False)

    # Status lookup rows referenced by reading_list_matrix.status_id
    op.bulk_insert(status_table, [
        {'id': 1, 'name': 'to-read'},
        {'id': 2, 'name': 'reading'},
        {'id': 3, 'name': 'finished'},
    ])


def downgrade() -> None:
    op.drop_index(op.f('ix_reading_list_matrix_book_id'), table_name='reading_list_matrix')
    op.drop_index(op.f('ix_reading_list_matrix_reading_list_id'), table_name='reading_list_matrix')
    op.drop_table('reading_list_matrix')
    op.drop_index(op.f('ix_reading_list_user_id'), table_name='reading_list')
    op.drop_table('reading_list')
    op.drop_index(op.f('ix_book_publication_date'), table_name='book')
    op.drop_index(op.f('ix_book_author'), table_name='book')
    op.drop_index(op.f('ix_book_title'), table_name='book')
    op.drop_index(op.f('ix_book_isbn10'), table_name='book')
    op.drop_index(op.f('ix_book_isbn13'), table_name='book')
    op.drop_table('book')
    op.drop_index(op.f('ix_registration_key_key_code'), table_name='registration_key')
    op.drop_table('registration_key')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
    op.drop_table('lu_book_status')
