# core/sa/models/issue.py
from datetime import date
from decimal import Decimal
from enum import Enum
from sqlalchemy import String, Integer, Date, Numeric, ForeignKey, CheckConstraint, Index, text
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class IssueStatus(str, Enum):
    ISSUED = "issued"       # Copy is out with the borrower
    RETURNED = "returned"   # Terminal; the record is never changed again

class IssueRecord(Base, TimestampMixin):
    __tablename__ = 'issue_record'

    issue_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    book_id: Mapped[int] = mapped_column(ForeignKey('book.book_id'), nullable=False)
    account_id: Mapped[int] = mapped_column(ForeignKey('account.account_id'), nullable=False)
    issue_date: Mapped[date] = mapped_column(Date, nullable=False)
    return_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=IssueStatus.ISSUED.value)
    fine_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))

    # Relationships
    book = relationship('Book', back_populates='issue_records')
    account = relationship('Account', back_populates='issue_records')

    __table_args__ = (
        CheckConstraint("status IN ('issued', 'returned')", name='chk_issue_record_status'),
        CheckConstraint('fine_amount >= 0', name='chk_issue_record_fine_amount'),
        # At most one active loan per (account, book)
        Index(
            'uix_issue_record_active_loan', 'account_id', 'book_id',
            unique=True,
            sqlite_where=text("status = 'issued'"),
            postgresql_where=text("status = 'issued'"),
        ),
        Index('idx_issue_record_account_id', 'account_id'),
        Index('idx_issue_record_book_id', 'book_id'),
        Index('idx_issue_record_issue_date', 'issue_date'),
    )

    @property
    def is_returned(self) -> bool:
        return self.status == IssueStatus.RETURNED.value

    def __repr__(self) -> str:
        return f"<IssueRecord {self.issue_id} book={self.book_id} account={self.account_id} {self.status}>"
