# core/sa/repositories/__init__.py
from .account import AccountRepository
from .book import BookRepository
from .issue import IssueRepository

__all__ = ['AccountRepository', 'BookRepository', 'IssueRepository']
