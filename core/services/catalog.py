# core/services/catalog.py
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.config import settings
from core.exceptions import CirculationError, NotFound, ValidationFailed
from core.sa.database import Database
from core.sa.models import Book, IssueRecord, IssueStatus
from core.sa.repositories import BookRepository, IssueRepository
from core.services.fine_policy import FineDetails, FinePolicy
from core.services.results import BookResult
from core.services.transaction import run_in_transaction

logger = logging.getLogger(__name__)


@dataclass
class IssuedBookView:
    """An issue record joined with its book and borrower.

    ``fine_preview`` is the fine the loan would carry if returned today; it
    is only set while the record is still issued.
    """
    issue_id: int
    book_id: int
    account_id: int
    issue_date: date
    return_date: Optional[date]
    status: str
    fine_amount: Decimal
    title: str
    author: str
    isbn: str
    username: Optional[str] = None
    account_name: Optional[str] = None
    email: Optional[str] = None
    fine_preview: Optional[FineDetails] = None


class CatalogService:
    """Inventory management and read views over books and loans"""

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

    def add_book(self, isbn: str, title: str, author: str, quantity: int) -> BookResult:
        """Add a title to the catalog with every copy on the shelf"""
        try:
            book_id = run_in_transaction(
                self.database, self._add_book, isbn, title, author, quantity, retries=self.retries
            )
        except CirculationError as e:
            logger.warning(f"Add book {isbn!r} rejected: {e.message}")
            return BookResult.failure(e)
        except Exception:
            logger.exception(f"Error adding book {isbn!r}")
            return BookResult(success=False, message="Failed to add book", error="error")

        logger.info(f"Added book {book_id} (ISBN {isbn}, {quantity} copies)")
        return BookResult(success=True, message="Book added successfully", book_id=book_id)

    def edit_book(
        self,
        book_id: int,
        isbn: str,
        title: str,
        author: str,
        quantity: int,
        available_quantity: int
    ) -> BookResult:
        """Overwrite a book's details and stock counts"""
        try:
            run_in_transaction(
                self.database, self._edit_book,
                book_id, isbn, title, author, quantity, available_quantity,
                retries=self.retries
            )
        except CirculationError as e:
            logger.warning(f"Edit of book {book_id} rejected: {e.message}")
            return BookResult.failure(e, book_id=book_id)
        except Exception:
            logger.exception(f"Error updating book {book_id}")
            return BookResult(success=False, message="Failed to update book", error="error", book_id=book_id)

        logger.info(f"Updated book {book_id}: {available_quantity}/{quantity} available")
        return BookResult(success=True, message="Book updated successfully", book_id=book_id)

    def get_all_books(self) -> List[Book]:
        with self.database.get_db() as session:
            return BookRepository(session).get_all_books()

    def get_available_books(self) -> List[Book]:
        with self.database.get_db() as session:
            return BookRepository(session).get_available_books()

    def get_book_by_id(self, book_id: int) -> Optional[Book]:
        with self.database.get_db() as session:
            return BookRepository(session).get_by_id(book_id)

    def get_issued_books(self, account_id: int) -> List[IssuedBookView]:
        """Loan history of one account, newest first"""
        with self.database.get_db() as session:
            records = IssueRepository(session).get_issued_books(account_id)
            return [self._to_view(record, include_account=False) for record in records]

    def get_all_issued_books(self) -> List[IssuedBookView]:
        """Every loan in the library with its borrower, newest first"""
        with self.database.get_db() as session:
            records = IssueRepository(session).get_all_issued_books()
            return [self._to_view(record, include_account=True) for record in records]

    # ------------------------------------------------------------------ #

    def _add_book(self, session: Session, isbn: str, title: str, author: str, quantity: int) -> int:
        isbn, title, author = _clean_fields(isbn, title, author)
        if quantity is None or quantity < 1:
            raise ValidationFailed("Quantity must be at least 1")

        books = BookRepository(session)
        if books.isbn_taken(isbn):
            raise ValidationFailed("A book with this ISBN already exists")

        try:
            book = books.create_book(isbn, title, author, quantity)
        except IntegrityError as e:
            raise ValidationFailed("A book with this ISBN already exists") from e
        return book.book_id

    def _edit_book(
        self,
        session: Session,
        book_id: int,
        isbn: str,
        title: str,
        author: str,
        quantity: int,
        available_quantity: int
    ) -> None:
        books = BookRepository(session)
        book = books.get_for_update(book_id)
        if book is None:
            raise NotFound("Book not found")

        isbn, title, author = _clean_fields(isbn, title, author)
        if quantity is None or quantity < 1:
            raise ValidationFailed("Quantity must be at least 1")
        if available_quantity is None or available_quantity < 0:
            raise ValidationFailed("Available quantity cannot be negative")
        if books.isbn_taken(isbn, exclude_book_id=book_id):
            raise ValidationFailed("Another book with this ISBN already exists")
        if available_quantity > quantity:
            raise ValidationFailed("Available quantity cannot be greater than total quantity")

        on_loan = IssueRepository(session).count_active_for_book(book_id)
        if available_quantity > quantity - on_loan:
            raise ValidationFailed(
                f"Available quantity cannot exceed copies not on loan ({quantity - on_loan})"
            )

        try:
            books.update_book(book, isbn, title, author, quantity, available_quantity)
        except IntegrityError as e:
            raise ValidationFailed("Another book with this ISBN already exists") from e

    def _to_view(self, record: IssueRecord, include_account: bool) -> IssuedBookView:
        preview = None
        if record.status == IssueStatus.ISSUED.value:
            preview = self.policy.compute(record.issue_date, self.clock())

        view = IssuedBookView(
            issue_id=record.issue_id,
            book_id=record.book_id,
            account_id=record.account_id,
            issue_date=record.issue_date,
            return_date=record.return_date,
            status=record.status,
            fine_amount=record.fine_amount,
            title=record.book.title,
            author=record.book.author,
            isbn=record.book.isbn,
            fine_preview=preview,
        )
        if include_account:
            view.username = record.account.username
            view.account_name = record.account.name
            view.email = record.account.email
        return view


def _clean_fields(isbn: str, title: str, author: str):
    isbn = (isbn or "").strip()
    title = (title or "").strip()
    author = (author or "").strip()
    if not isbn or not title or not author:
        raise ValidationFailed("ISBN, title and author are required")
    return isbn, title, author
