# tests/test_services/test_catalog.py

import pytest
from decimal import Decimal
from core.sa.repositories import BookRepository
from core.services.catalog import CatalogService
from core.services.fine_policy import FinePolicy

def test_add_book(catalog, load_book):
    """Test that a new book has every copy on the shelf."""
    result = catalog.add_book("9780000000001", "Dune", "Frank Herbert", 3)
    assert result.success is True
    assert result.message == "Book added successfully"

    book = load_book(result.book_id)
    assert book.quantity == 3
    assert book.available_quantity == 3

def test_add_book_strips_whitespace(catalog, load_book):
    result = catalog.add_book("  9780000000001 ", " Dune ", " Frank Herbert", 1)
    book = load_book(result.book_id)
    assert (book.isbn, book.title, book.author) == ("9780000000001", "Dune", "Frank Herbert")

def test_add_book_duplicate_isbn(catalog, sample_book):
    """Test that an ISBN can only be catalogued once."""
    result = catalog.add_book(sample_book.isbn, "Another", "Someone", 1)
    assert result.success is False
    assert result.error == "validation_failed"
    assert result.message == "A book with this ISBN already exists"

@pytest.mark.parametrize("isbn,title,author,quantity,message", [
    ("1", "Dune", "Frank Herbert", 0, "Quantity must be at least 1"),
    ("1", "", "Frank Herbert", 1, "ISBN, title and author are required"),
    ("", "Dune", "Frank Herbert", 1, "ISBN, title and author are required"),
    ("1", "Dune", "   ", 1, "ISBN, title and author are required"),
])
def test_add_book_invalid(catalog, isbn, title, author, quantity, message):
    """Test field validation when adding a book."""
    result = catalog.add_book(isbn, title, author, quantity)
    assert result.success is False
    assert result.error == "validation_failed"
    assert result.message == message
    assert catalog.get_all_books() == []

def test_edit_book(catalog, sample_book, load_book):
    """Test overwriting a book's details and stock."""
    result = catalog.edit_book(sample_book.book_id, "X2", "New Title", "New Author", 5, 4)
    assert result.success is True
    assert result.message == "Book updated successfully"

    book = load_book(sample_book.book_id)
    assert (book.isbn, book.title, book.author) == ("X2", "New Title", "New Author")
    assert (book.quantity, book.available_quantity) == (5, 4)

def test_edit_book_keeps_own_isbn(catalog, sample_book):
    """Test that a book does not clash with its own ISBN."""
    result = catalog.edit_book(sample_book.book_id, sample_book.isbn, "Renamed", "Test Author", 2, 2)
    assert result.success is True

def test_edit_unknown_book(catalog):
    result = catalog.edit_book(999, "X1", "Title", "Author", 1, 1)
    assert result.success is False
    assert result.error == "not_found"
    assert result.message == "Book not found"

def test_edit_book_isbn_taken(catalog, sample_book, make_book):
    """Test that an edit cannot steal another book's ISBN."""
    other = make_book(isbn="X9")
    result = catalog.edit_book(sample_book.book_id, other.isbn, "Test Book", "Test Author", 2, 2)
    assert result.success is False
    assert result.message == "Another book with this ISBN already exists"

@pytest.mark.parametrize("quantity,available,message", [
    (2, 3, "Available quantity cannot be greater than total quantity"),
    (2, -1, "Available quantity cannot be negative"),
    (0, 0, "Quantity must be at least 1"),
])
def test_edit_book_invalid_counts(catalog, sample_book, load_book, quantity, available, message):
    """Test stock validation when editing a book."""
    result = catalog.edit_book(sample_book.book_id, "X1", "Test Book", "Test Author", quantity, available)
    assert result.success is False
    assert result.error == "validation_failed"
    assert result.message == message
    assert load_book(sample_book.book_id).available_quantity == 2

def test_edit_book_cannot_shelve_copies_on_loan(catalog, circulation, sample_book, sample_account, load_book):
    """Test that availability cannot count a copy that is out with a borrower."""
    circulation.issue_book(sample_account.account_id, sample_book.book_id)

    result = catalog.edit_book(sample_book.book_id, "X1", "Test Book", "Test Author", 2, 2)
    assert result.success is False
    assert result.message == "Available quantity cannot exceed copies not on loan (1)"

    assert catalog.edit_book(sample_book.book_id, "X1", "Test Book", "Test Author", 3, 2).success is True
    assert load_book(sample_book.book_id).available_quantity == 2

def test_unexpected_error_on_edit(catalog, sample_book, monkeypatch):
    def broken_update(self, *args):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(BookRepository, "update_book", broken_update)
    result = catalog.edit_book(sample_book.book_id, "X1", "Test Book", "Test Author", 2, 2)
    assert result.success is False
    assert result.message == "Failed to update book"

def test_book_listings(catalog, make_book):
    """Test the full and the available book lists."""
    make_book(title="Zorba the Greek", quantity=1)
    empty = make_book(title="Anna Karenina", quantity=1)
    catalog.edit_book(empty.book_id, empty.isbn, empty.title, empty.author, 1, 0)
    make_book(title="Middlemarch", quantity=1)

    assert [b.title for b in catalog.get_all_books()] == ["Anna Karenina", "Middlemarch", "Zorba the Greek"]
    assert [b.title for b in catalog.get_available_books()] == ["Middlemarch", "Zorba the Greek"]

def test_get_book_by_id(catalog, sample_book):
    assert catalog.get_book_by_id(sample_book.book_id).isbn == "X1"
    assert catalog.get_book_by_id(999) is None

def test_issued_books_for_account(catalog, circulation, make_book, sample_account, other_account, clock):
    """Test an account's loan history with fine previews on open loans."""
    first = make_book(title="First")
    second = make_book(title="Second")

    returned_id = circulation.issue_book(sample_account.account_id, first.book_id).issue_id
    clock.advance(10)
    circulation.return_book(returned_id)
    open_id = circulation.issue_book(sample_account.account_id, second.book_id).issue_id
    circulation.issue_book(other_account.account_id, first.book_id)
    clock.advance(12)

    views = catalog.get_issued_books(sample_account.account_id)
    assert [v.issue_id for v in views] == [open_id, returned_id]

    open_view, returned_view = views
    assert open_view.title == "Second"
    assert open_view.fine_preview.days_overdue == 5
    assert open_view.fine_preview.fine_amount == Decimal("25.00")
    assert open_view.username is None

    assert returned_view.status == "returned"
    assert returned_view.fine_amount == Decimal("15.00")
    assert returned_view.fine_preview is None

def test_all_issued_books(catalog, circulation, sample_book, sample_account, other_account, clock):
    """Test that the library-wide loan list names each borrower."""
    circulation.issue_book(sample_account.account_id, sample_book.book_id)
    clock.advance(1)
    circulation.issue_book(other_account.account_id, sample_book.book_id)

    views = catalog.get_all_issued_books()
    assert [(v.username, v.account_name) for v in views] == [("ravi", "Ravi Kumar"), ("asha", "Asha Rao")]
    assert all(v.fine_preview is not None and not v.fine_preview.has_fine for v in views)
    assert views[0].email == "ravi@example.com"

def test_catalog_uses_configured_policy(database, clock, sample_book, sample_account, circulation):
    """Test that previews follow the injected policy rather than a constant."""
    circulation.issue_book(sample_account.account_id, sample_book.book_id)
    clock.advance(3)
    catalog = CatalogService(database, policy=FinePolicy(grace_period_days=1, daily_rate=2), clock=clock)

    view = catalog.get_issued_books(sample_account.account_id)[0]
    assert view.fine_preview.fine_amount == Decimal("4.00")
