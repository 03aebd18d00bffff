# core/services/results.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from core.exceptions import CirculationError


@dataclass
class OperationResult:
    """Outcome of a service call as seen by the request layer.

    ``error`` holds the failure code (see core.exceptions) when ``success`` is
    False, so callers can choose a status without parsing the message.
    """
    success: bool
    message: str
    error: Optional[str] = None

    @classmethod
    def failure(cls, exc: CirculationError, **extra) -> "OperationResult":
        return cls(success=False, message=exc.message, error=exc.code, **extra)


@dataclass
class IssueResult(OperationResult):
    issue_id: Optional[int] = None


@dataclass
class ReturnResult(OperationResult):
    fine: Decimal = Decimal("0.00")
    days_overdue: int = 0


@dataclass
class BookResult(OperationResult):
    book_id: Optional[int] = None


@dataclass
class AccountResult(OperationResult):
    account_id: Optional[int] = None
