"""Create book, account and issue_record tables

Revision ID: 3f9c2a1d7b40
Revises:
Create Date: 2024-03-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a1d7b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('book',
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('isbn', sa.String(length=20), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('author', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('available_quantity', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('quantity >= 0', name='chk_book_quantity'),
        sa.CheckConstraint(
            'available_quantity >= 0 AND available_quantity <= quantity',
            name='chk_book_available_quantity'
        ),
        sa.PrimaryKeyConstraint('book_id'),
        sa.UniqueConstraint('isbn')
    )
    op.create_index('idx_book_title', 'book', ['title'])

    op.create_table('account',
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('account_id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email')
    )

    op.create_table('issue_record',
        sa.Column('issue_id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('issue_date', sa.Date(), nullable=False),
        sa.Column('return_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('fine_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("status IN ('issued', 'returned')", name='chk_issue_record_status'),
        sa.CheckConstraint('fine_amount >= 0', name='chk_issue_record_fine_amount'),
        sa.ForeignKeyConstraint(['account_id'], ['account.account_id'], ),
        sa.ForeignKeyConstraint(['book_id'], ['book.book_id'], ),
        sa.PrimaryKeyConstraint('issue_id')
    )
    op.create_index('idx_issue_record_account_id', 'issue_record', ['account_id'])
    op.create_index('idx_issue_record_book_id', 'issue_record', ['book_id'])
    op.create_index('idx_issue_record_issue_date', 'issue_record', ['issue_date'])

    # At most one active loan per (account, book)
    op.create_index(
        'uix_issue_record_active_loan', 'issue_record', ['account_id', 'book_id'],
        unique=True,
        sqlite_where=sa.text("status = 'issued'"),
        postgresql_where=sa.text("status = 'issued'")
    )


def downgrade() -> None:
    # Drop tables in reverse order
    op.drop_index('uix_issue_record_active_loan', table_name='issue_record')
    op.drop_index('idx_issue_record_issue_date', table_name='issue_record')
    op.drop_index('idx_issue_record_book_id', table_name='issue_record')
    op.drop_index('idx_issue_record_account_id', table_name='issue_record')
    op.drop_table('issue_record')
    op.drop_table('account')
    op.drop_index('idx_book_title', table_name='book')
    op.drop_table('book')
