# tests/test_services/test_fines.py

import pytest
from decimal import Decimal
from core.exceptions import NotFound
from core.sa.repositories import IssueRepository

def _lend(circulation, clock, account, book, days_out=None):
    """Issue a book and, if days_out is given, return it that many days later."""
    issue_id = circulation.issue_book(account.account_id, book.book_id).issue_id
    if days_out is not None:
        start = clock.today
        clock.advance(days_out)
        circulation.return_book(issue_id)
        clock.today = start
    return issue_id

def test_no_loans(aggregator, sample_account):
    """Test that an account with no history is not reported."""
    report = aggregator.list_accounts_with_outstanding()
    assert report.success is True
    assert report.accounts == []
    assert report.total_fines == Decimal("0.00")
    assert report.total_pending_books == 0

def test_returned_fine_and_pending_book(aggregator, circulation, clock, make_book, sample_account):
    """Test an account with one late return and one book still out."""
    _lend(circulation, clock, sample_account, make_book(), days_out=10)
    _lend(circulation, clock, sample_account, make_book())

    report = aggregator.list_accounts_with_outstanding()
    assert len(report.accounts) == 1
    entry = report.accounts[0]
    assert entry.username == "asha"
    assert entry.name == "Asha Rao"
    assert entry.email == "asha@example.com"
    assert entry.total_fines == Decimal("15.00")
    assert entry.pending_books == 1
    assert entry.accrued_fines is None

def test_settled_accounts_excluded(aggregator, circulation, clock, make_book, sample_account):
    """Test that on-time returns with nothing out are left off the report."""
    _lend(circulation, clock, sample_account, make_book(), days_out=3)
    assert aggregator.list_accounts_with_outstanding().accounts == []

def test_ordering_and_totals(aggregator, circulation, clock, make_book, make_account):
    """Test ordering by fines, then pending books, with report totals."""
    big_fine, two_pending, one_pending, small_fine = (make_account() for _ in range(4))

    _lend(circulation, clock, big_fine, make_book(), days_out=12)        # 25.00
    _lend(circulation, clock, small_fine, make_book(), days_out=8)       # 5.00
    _lend(circulation, clock, two_pending, make_book())
    _lend(circulation, clock, two_pending, make_book())
    _lend(circulation, clock, one_pending, make_book())

    report = aggregator.list_accounts_with_outstanding()
    assert [a.account_id for a in report.accounts] == [
        big_fine.account_id, small_fine.account_id, two_pending.account_id, one_pending.account_id
    ]
    assert report.total_fines == Decimal("30.00")
    assert report.total_pending_books == 3

def test_pending_books_break_fine_ties(aggregator, circulation, clock, make_book, make_account):
    """Test that equal fines are ordered by pending books."""
    holds_nothing, holds_one = make_account(), make_account()
    _lend(circulation, clock, holds_nothing, make_book(), days_out=8)
    _lend(circulation, clock, holds_one, make_book(), days_out=8)
    _lend(circulation, clock, holds_one, make_book())

    report = aggregator.list_accounts_with_outstanding()
    assert [a.account_id for a in report.accounts] == [holds_one.account_id, holds_nothing.account_id]

def test_live_preview(aggregator, circulation, clock, make_book, sample_account, other_account):
    """Test that accrued fines on open loans are reported beside, not inside, the totals."""
    _lend(circulation, clock, sample_account, make_book())
    _lend(circulation, clock, other_account, make_book(), days_out=10)
    clock.advance(12)

    report = aggregator.list_accounts_with_outstanding(live_preview=True)
    by_username = {a.username: a for a in report.accounts}

    assert by_username["asha"].accrued_fines == Decimal("25.00")
    assert by_username["asha"].total_fines == Decimal("0.00")
    assert by_username["ravi"].accrued_fines == Decimal("0.00")
    assert report.total_fines == Decimal("15.00")

def test_report_failure(aggregator, sample_account, monkeypatch):
    """Test that a storage error yields an unsuccessful report instead of raising."""
    def broken(self):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(IssueRepository, "get_outstanding_by_account", broken)
    report = aggregator.list_accounts_with_outstanding()
    assert report.success is False
    assert report.message == "Failed to fetch fines data"
    assert report.accounts == []

def test_account_summary(aggregator, circulation, clock, make_book, sample_account):
    """Test the profile numbers for one account."""
    _lend(circulation, clock, sample_account, make_book(), days_out=10)
    _lend(circulation, clock, sample_account, make_book())
    _lend(circulation, clock, sample_account, make_book())

    summary = aggregator.get_account_summary(sample_account.account_id)
    assert summary.username == "asha"
    assert summary.issued_books == 2
    assert summary.total_fines == Decimal("15.00")
    assert summary.created_at is not None

def test_account_summary_unknown_account(aggregator):
    with pytest.raises(NotFound, match="Account not found"):
        aggregator.get_account_summary(999)
