# core/sa/models/__init__.py
from .base import Base, TimestampMixin
from .book import Book
from .account import Account
from .issue import IssueRecord, IssueStatus

__all__ = [
    'Base',
    'TimestampMixin',
    'Book',
    'Account',
    'IssueRecord',
    'IssueStatus',
]
