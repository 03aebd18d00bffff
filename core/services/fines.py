# core/services/fines.py
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from core.exceptions import NotFound
from core.sa.database import Database
from core.sa.repositories import AccountRepository, IssueRepository
from core.services.fine_policy import FinePolicy

logger = logging.getLogger(__name__)


@dataclass
class AccountOutstanding:
    account_id: int
    username: str
    name: str
    email: str
    total_fines: Decimal
    pending_books: int
    accrued_fines: Optional[Decimal] = None


@dataclass
class OutstandingReport:
    accounts: List[AccountOutstanding] = field(default_factory=list)
    total_fines: Decimal = Decimal("0.00")
    total_pending_books: int = 0
    success: bool = True
    message: Optional[str] = None


@dataclass
class AccountSummary:
    account_id: int
    username: str
    name: str
    email: str
    created_at: datetime
    issued_books: int
    total_fines: Decimal


def _money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(Decimal("0.01"))


class FineAggregator:
    """Read-only fine reporting over accounts and their issue records"""

    def __init__(
        self,
        database: Database,
        policy: Optional[FinePolicy] = None,
        clock: Callable[[], date] = date.today
    ):
        self.database = database
        self.policy = policy or FinePolicy.from_settings()
        self.clock = clock

    def list_accounts_with_outstanding(self, live_preview: bool = False) -> OutstandingReport:
        """Accounts that owe fines or still hold books.

        ``total_fines`` only sums fines stamped at return time. With
        ``live_preview`` each account also gets ``accrued_fines``: what its
        open loans would cost if returned today. The preview is reported on
        its own and never added to the totals.
        """
        try:
            # One transaction so the sums and counts come from the same snapshot
            with self.database.get_db() as session:
                issues = IssueRepository(session)
                rows = issues.get_outstanding_by_account()

                accounts = [
                    AccountOutstanding(
                        account_id=account.account_id,
                        username=account.username,
                        name=account.name,
                        email=account.email,
                        total_fines=_money(total_fines),
                        pending_books=int(pending_books or 0),
                    )
                    for account, total_fines, pending_books in rows
                ]

                if live_preview:
                    accrued = self._accrued_by_account(issues, [a.account_id for a in accounts])
                    for entry in accounts:
                        entry.accrued_fines = accrued.get(entry.account_id, Decimal("0.00"))
        except Exception:
            logger.exception("Error building outstanding fines report")
            return OutstandingReport(success=False, message="Failed to fetch fines data")

        return OutstandingReport(
            accounts=accounts,
            total_fines=sum((a.total_fines for a in accounts), Decimal("0.00")),
            total_pending_books=sum(a.pending_books for a in accounts),
        )

    def get_account_summary(self, account_id: int) -> AccountSummary:
        """Profile numbers for one account.

        Raises:
            NotFound: If the account does not exist
        """
        with self.database.get_db() as session:
            account = AccountRepository(session).get_by_id(account_id)
            if account is None:
                raise NotFound("Account not found")
            issued_count, total_fines = IssueRepository(session).get_account_totals(account_id)

        return AccountSummary(
            account_id=account.account_id,
            username=account.username,
            name=account.name,
            email=account.email,
            created_at=account.created_at,
            issued_books=issued_count,
            total_fines=_money(total_fines),
        )

    def _accrued_by_account(self, issues: IssueRepository, account_ids: List[int]) -> Dict[int, Decimal]:
        today = self.clock()
        accrued: Dict[int, Decimal] = {}
        for record in issues.get_active_for_accounts(account_ids):
            preview = self.policy.compute(record.issue_date, today)
            accrued[record.account_id] = accrued.get(record.account_id, Decimal("0.00")) + preview.fine_amount
        return accrued
