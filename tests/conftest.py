# tests/conftest.py
import sys
import pytest
from pathlib import Path
from datetime import date, timedelta

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sqlalchemy.orm import Session
from core.sa.database import Database
from core.sa.models import Book, IssueRecord
from core.sa.repositories import AccountRepository, BookRepository
from core.services.catalog import CatalogService
from core.services.circulation import CirculationService
from core.services.fine_policy import FinePolicy
from core.services.fines import FineAggregator


class FakeClock:
    """Callable standing in for date.today; tests move it forward by hand."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int) -> date:
        self.today += timedelta(days=days)
        return self.today


@pytest.fixture
def database(tmp_path):
    """A fresh file-backed SQLite database per test.

    A file rather than :memory: so that threads get their own connections
    and really contend for the write lock.
    """
    db = Database(f"sqlite:///{tmp_path / 'test_library.db'}")
    db.init_db()
    yield db
    db.dispose()

@pytest.fixture
def db_session(database):
    """A bare session for repository tests.

    Do not combine with service calls in one test: an open SQLite
    transaction holds the write lock until it ends.
    """
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

@pytest.fixture
def clock():
    return FakeClock(date(2024, 3, 1))

@pytest.fixture
def policy():
    return FinePolicy(grace_period_days=7, daily_rate=5)

@pytest.fixture
def circulation(database, policy, clock):
    return CirculationService(database, policy=policy, clock=clock)

@pytest.fixture
def catalog(database, policy, clock):
    return CatalogService(database, policy=policy, clock=clock)

@pytest.fixture
def aggregator(database, policy, clock):
    return FineAggregator(database, policy=policy, clock=clock)

@pytest.fixture
def make_book(database):
    """Factory committing a book in its own transaction."""
    counter = iter(range(1, 10_000))

    def _make_book(isbn=None, title=None, author="Test Author", quantity=1):
        n = next(counter)
        with database.get_db() as session:
            return BookRepository(session).create_book(
                isbn or f"978000000{n:04d}",
                title or f"Test Book {n}",
                author,
                quantity
            )
    return _make_book

@pytest.fixture
def make_account(database):
    """Factory committing a borrower account in its own transaction."""
    counter = iter(range(1, 10_000))

    def _make_account(username=None, name=None, password="secret"):
        n = next(counter)
        username = username or f"student{n}"
        with database.get_db() as session:
            return AccountRepository(session).create_account(
                username, password, name or f"Student {n}", f"{username}@example.com"
            )
    return _make_account

@pytest.fixture
def sample_book(make_book):
    """Book X1 with two copies."""
    return make_book(isbn="X1", title="Test Book", quantity=2)

@pytest.fixture
def sample_account(make_account):
    return make_account(username="asha", name="Asha Rao")

@pytest.fixture
def other_account(make_account):
    return make_account(username="ravi", name="Ravi Kumar")

@pytest.fixture
def load_book(database):
    """Read a book's committed state."""
    def _load_book(book_id: int) -> Book:
        with database.get_db() as session:
            return session.get(Book, book_id)
    return _load_book

@pytest.fixture
def load_issue(database):
    """Read an issue record's committed state."""
    def _load_issue(issue_id: int) -> IssueRecord:
        with database.get_db() as session:
            return session.get(IssueRecord, issue_id)
    return _load_issue

@pytest.fixture
def count_issues(database):
    """Count issue records, optionally only those for one book."""
    def _count_issues(book_id: int = None) -> int:
        with database.get_db() as session:
            query = session.query(IssueRecord)
            if book_id is not None:
                query = query.filter(IssueRecord.book_id == book_id)
            return query.count()
    return _count_issues
