# core/services/circulation.py
"""Issuing and returning books.

Every operation runs in one transaction on the ledger: either all of its
writes land or none do. The book row (or issue row) is locked before it is
read for a decision, so two requests racing for the last copy cannot both
see it on the shelf.
"""

import logging
from datetime import date
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.config import settings
from core.exceptions import (
    CirculationError, NotFound, NotAvailable, AlreadyIssued, AlreadyReturned,
    IssueFailed, ReturnFailed
)
from core.sa.database import Database
from core.sa.models import IssueRecord
from core.sa.repositories import AccountRepository, BookRepository, IssueRepository
from core.services.fine_policy import FineDetails, FinePolicy
from core.services.results import IssueResult, ReturnResult
from core.services.transaction import run_in_transaction

logger = logging.getLogger(__name__)


class CirculationService:
    def __init__(
        self,
        database: Database,
        policy: Optional[FinePolicy] = None,
        clock: Callable[[], date] = date.today,
        retries: Optional[int] = None
    ):
        self.database = database
        self.policy = policy or FinePolicy.from_settings()
        self.clock = clock
        self.retries = settings.transaction_retries if retries is None else retries

    # ------------------------------------------------------------------ #
    # Public operations
    # ------------------------------------------------------------------ #

    def issue_book(self, account_id: int, book_id: int) -> IssueResult:
        """Lend one copy of a book to an account"""
        try:
            issue_id = run_in_transaction(self.database, self._issue, account_id, book_id, retries=self.retries)
        except CirculationError as e:
            logger.warning(f"Issue of book {book_id} to account {account_id} rejected: {e.message}")
            return IssueResult.failure(e)
        except Exception:
            logger.exception(f"Error issuing book {book_id} to account {account_id}")
            return IssueResult.failure(IssueFailed())

        logger.info(f"Issued book {book_id} to account {account_id} (issue {issue_id})")
        return IssueResult(success=True, message="Book issued successfully", issue_id=issue_id)

    def return_book(self, issue_id: int) -> ReturnResult:
        """Close a loan by its issue ID and record the fine"""
        return self._return(self._return_by_issue_id, issue_id, context=f"issue {issue_id}")

    def return_book_for_account(self, account_id: int, book_id: int) -> ReturnResult:
        """Close the account's open loan for a book"""
        return self._return(
            self._return_by_account, account_id, book_id,
            context=f"book {book_id} from account {account_id}"
        )

    # ------------------------------------------------------------------ #
    # Transaction bodies
    # ------------------------------------------------------------------ #

    def _issue(self, session: Session, account_id: int, book_id: int) -> int:
        books = BookRepository(session)
        issues = IssueRepository(session)

        book = books.get_for_update(book_id)
        if book is None or book.available_quantity <= 0:
            raise NotAvailable()

        if AccountRepository(session).get_by_id(account_id) is None:
            raise NotFound("Account not found")

        if issues.get_active(account_id, book_id) is not None:
            raise AlreadyIssued()

        try:
            record = issues.create_issue(account_id, book_id, self.clock())
        except IntegrityError as e:
            # The partial unique index caught a duplicate the read missed
            raise AlreadyIssued() from e

        if not books.decrement_available(book_id):
            raise NotAvailable()

        return record.issue_id

    def _return_by_issue_id(self, session: Session, issue_id: int) -> FineDetails:
        record = IssueRepository(session).get_for_update(issue_id)
        if record is None:
            raise NotFound("Issue record not found")
        return self._close_loan(session, record)

    def _return_by_account(self, session: Session, account_id: int, book_id: int) -> FineDetails:
        issues = IssueRepository(session)
        active = issues.get_active(account_id, book_id)
        if active is None:
            raise NotFound("No active issue found for this book")
        return self._close_loan(session, issues.get_for_update(active.issue_id))

    def _close_loan(self, session: Session, record: IssueRecord) -> FineDetails:
        if record.is_returned:
            raise AlreadyReturned()

        today = self.clock()
        fine = self.policy.compute(record.issue_date, today)
        IssueRepository(session).mark_returned(record, today, fine.fine_amount)

        if not BookRepository(session).increment_available(record.book_id):
            logger.warning(
                f"Book {record.book_id} already fully stocked when issue {record.issue_id} "
                f"was returned; available quantity left unchanged"
            )
        return fine

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _return(self, operation, *args, context: str) -> ReturnResult:
        try:
            fine = run_in_transaction(self.database, operation, *args, retries=self.retries)
        except CirculationError as e:
            logger.warning(f"Return of {context} rejected: {e.message}")
            return ReturnResult.failure(e)
        except Exception:
            logger.exception(f"Error returning {context}")
            return ReturnResult.failure(ReturnFailed())

        logger.info(
            f"Returned {context}: {fine.days_overdue} days overdue, fine {fine.fine_amount}"
        )
        return ReturnResult(
            success=True,
            message="Book returned successfully",
            fine=fine.fine_amount,
            days_overdue=fine.days_overdue
        )
