# core/sa/repositories/issue.py
from datetime import date
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func, desc, case
from sqlalchemy.orm import Session, joinedload
from core.sa.models import Account, IssueRecord, IssueStatus

class IssueRepository:
    """Repository for IssueRecord rows.

    Methods only flush; the caller's transaction scope commits or rolls back.
    """

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_for_update(self, issue_id: int) -> Optional[IssueRecord]:
        """Get an issue record and lock its row until the transaction ends.

        An instance already loaded in the session is overwritten with the
        row as read under the lock.
        """
        return (
            self.session.query(IssueRecord)
            .filter(IssueRecord.issue_id == issue_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def get_active(self, account_id: int, book_id: int) -> Optional[IssueRecord]:
        """Get the account's open loan for a book, if any.

        Args:
            account_id: The borrowing account
            book_id: The borrowed book

        Returns:
            The IssueRecord with status 'issued', None otherwise
        """
        return (
            self.session.query(IssueRecord)
            .filter(
                IssueRecord.account_id == account_id,
                IssueRecord.book_id == book_id,
                IssueRecord.status == IssueStatus.ISSUED.value
            )
            .first()
        )

    def create_issue(self, account_id: int, book_id: int, issue_date: date) -> IssueRecord:
        """Open a loan.

        Args:
            account_id: The borrowing account
            book_id: The borrowed book
            issue_date: Date the copy left the library

        Returns:
            The created IssueRecord
        """
        record = IssueRecord(
            account_id=account_id,
            book_id=book_id,
            issue_date=issue_date,
            status=IssueStatus.ISSUED.value,
            fine_amount=Decimal("0.00")
        )
        self.session.add(record)
        self.session.flush()
        return record

    def mark_returned(self, record: IssueRecord, return_date: date, fine_amount: Decimal) -> IssueRecord:
        """Close a loan, stamping the return date and the fine it carried."""
        record.status = IssueStatus.RETURNED.value
        record.return_date = return_date
        record.fine_amount = fine_amount
        self.session.flush()
        return record

    def count_active_for_book(self, book_id: int) -> int:
        """Count copies of a book currently out on loan"""
        return (
            self.session.query(func.count(IssueRecord.issue_id))
            .filter(
                IssueRecord.book_id == book_id,
                IssueRecord.status == IssueStatus.ISSUED.value
            )
            .scalar() or 0
        )

    def get_issued_books(self, account_id: int) -> List[IssueRecord]:
        """Get every issue record of an account with its book, newest first"""
        return (
            self.session.query(IssueRecord)
            .options(joinedload(IssueRecord.book))
            .filter(IssueRecord.account_id == account_id)
            .order_by(desc(IssueRecord.issue_date), desc(IssueRecord.issue_id))
            .all()
        )

    def get_all_issued_books(self) -> List[IssueRecord]:
        """Get every issue record with book and account, newest first"""
        return (
            self.session.query(IssueRecord)
            .options(
                joinedload(IssueRecord.book),
                joinedload(IssueRecord.account)
            )
            .order_by(desc(IssueRecord.issue_date), desc(IssueRecord.issue_id))
            .all()
        )

    def get_active_for_accounts(self, account_ids: List[int]) -> List[IssueRecord]:
        """Get the open loans of the given accounts"""
        if not account_ids:
            return []
        return (
            self.session.query(IssueRecord)
            .filter(
                IssueRecord.account_id.in_(account_ids),
                IssueRecord.status == IssueStatus.ISSUED.value
            )
            .all()
        )

    def get_outstanding_by_account(self):
        """Per-account fine and pending-book totals.

        Only accounts with a nonzero fine sum or at least one open loan are
        returned, ordered by total fines, then pending books (both descending),
        then account ID.

        Returns:
            List of rows with Account, total_fines and pending_books
        """
        total_fines = func.coalesce(func.sum(IssueRecord.fine_amount), 0).label('total_fines')
        pending_books = func.count(
            case((IssueRecord.status == IssueStatus.ISSUED.value, 1))
        ).label('pending_books')

        return (
            self.session.query(Account, total_fines, pending_books)
            .outerjoin(IssueRecord, IssueRecord.account_id == Account.account_id)
            .group_by(Account.account_id)
            .having(
                (func.coalesce(func.sum(IssueRecord.fine_amount), 0) > 0)
                | (func.count(case((IssueRecord.status == IssueStatus.ISSUED.value, 1))) > 0)
            )
            .order_by(desc('total_fines'), desc('pending_books'), Account.account_id.asc())
            .all()
        )

    def get_account_totals(self, account_id: int):
        """Open-loan count and fine sum for one account.

        Returns:
            Tuple of (issued_count, total_fines)
        """
        issued_count, total_fines = (
            self.session.query(
                func.count(case((IssueRecord.status == IssueStatus.ISSUED.value, 1))),
                func.coalesce(func.sum(IssueRecord.fine_amount), 0)
            )
            .filter(IssueRecord.account_id == account_id)
            .one()
        )
        return issued_count or 0, Decimal(str(total_fines or 0))
