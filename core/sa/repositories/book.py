# core/sa/repositories/book.py
from typing import List, Optional
from sqlalchemy.orm import Session
from core.sa.models import Book

class BookRepository:
    """Repository for Book rows.

    Methods only flush; the caller's transaction scope commits or rolls back.
    """

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Get a book by its ID.

        Args:
            book_id: The ID of the book to retrieve

        Returns:
            The Book object if found, None otherwise
        """
        return self.session.query(Book).filter(Book.book_id == book_id).first()

    def get_for_update(self, book_id: int) -> Optional[Book]:
        """Get a book and lock its row until the transaction ends.

        Renders SELECT ... FOR UPDATE where the dialect supports it; on SQLite
        the transaction already holds the database write lock. An instance
        already loaded in the session is refreshed from the locked row.
        """
        return (
            self.session.query(Book)
            .filter(Book.book_id == book_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        """Get a book by its ISBN."""
        return self.session.query(Book).filter(Book.isbn == isbn).first()

    def isbn_taken(self, isbn: str, exclude_book_id: Optional[int] = None) -> bool:
        """Check whether another book already uses the given ISBN.

        Args:
            isbn: The ISBN to check
            exclude_book_id: Book to ignore, used when editing that book

        Returns:
            True if a different book has this ISBN
        """
        query = self.session.query(Book.book_id).filter(Book.isbn == isbn)
        if exclude_book_id is not None:
            query = query.filter(Book.book_id != exclude_book_id)
        return query.first() is not None

    def get_all_books(self) -> List[Book]:
        """Get every book ordered by title"""
        return self.session.query(Book).order_by(Book.title.asc(), Book.book_id.asc()).all()

    def get_available_books(self) -> List[Book]:
        """Get books with at least one copy on the shelf"""
        return (
            self.session.query(Book)
            .filter(Book.available_quantity > 0)
            .order_by(Book.title.asc(), Book.book_id.asc())
            .all()
        )

    def create_book(self, isbn: str, title: str, author: str, quantity: int) -> Book:
        """Create a new book with every copy available.

        Args:
            isbn: Unique ISBN of the book
            title: The title of the book
            author: The author of the book
            quantity: Number of copies owned

        Returns:
            The created Book object
        """
        book = Book(
            isbn=isbn,
            title=title,
            author=author,
            quantity=quantity,
            available_quantity=quantity
        )
        self.session.add(book)
        self.session.flush()
        return book

    def update_book(
        self,
        book: Book,
        isbn: str,
        title: str,
        author: str,
        quantity: int,
        available_quantity: int
    ) -> Book:
        """Overwrite the editable fields of a book."""
        book.isbn = isbn
        book.title = title
        book.author = author
        book.quantity = quantity
        book.available_quantity = available_quantity
        self.session.flush()
        return book

    def decrement_available(self, book_id: int) -> bool:
        """Take one copy off the shelf.

        The WHERE clause only matches while a copy is left, so the counter can
        never go below zero even if the caller's read was stale.

        Returns:
            True if a copy was taken, False if none was available
        """
        updated = (
            self.session.query(Book)
            .filter(Book.book_id == book_id, Book.available_quantity > 0)
            .update(
                {Book.available_quantity: Book.available_quantity - 1},
                synchronize_session="fetch"
            )
        )
        return updated == 1

    def increment_available(self, book_id: int) -> bool:
        """Put one copy back on the shelf without exceeding the owned quantity.

        Returns:
            True if the counter moved, False if the book was already fully stocked
        """
        updated = (
            self.session.query(Book)
            .filter(Book.book_id == book_id, Book.available_quantity < Book.quantity)
            .update(
                {Book.available_quantity: Book.available_quantity + 1},
                synchronize_session="fetch"
            )
        )
        return updated == 1
