# core/sa/__init__.py
from .database import Database
from .models import (
    Base, Book, Account, IssueRecord, IssueStatus
)

__all__ = [
    'Database',
    'Base',
    'Book',
    'Account',
    'IssueRecord',
    'IssueStatus',
]
