# core/exceptions.py
"""Failures raised by the circulation, catalog and reporting services.

Each error carries a user-facing ``message`` and a stable ``code``. Services
raise them inside a transaction scope, which rolls the transaction back, and
convert them into result objects at the operation boundary.
"""


class CirculationError(Exception):
    """Base class for all library service failures"""
    code = "error"
    default_message = "Operation failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(CirculationError):
    code = "not_found"
    default_message = "Record not found"


class NotAvailable(CirculationError):
    code = "not_available"
    default_message = "Book not available"


class AlreadyIssued(CirculationError):
    code = "already_issued"
    default_message = "You have already issued this book"


class AlreadyReturned(CirculationError):
    code = "already_returned"
    default_message = "This book has already been returned"


class ValidationFailed(CirculationError):
    code = "validation_failed"
    default_message = "Invalid data"


class TransactionFailed(CirculationError):
    """Storage fault: lock timeout, serialization failure or lost connection"""
    code = "transaction_failed"
    default_message = "The library database is busy, please try again"


class IssueFailed(CirculationError):
    code = "issue_failed"
    default_message = "Failed to issue book"


class ReturnFailed(CirculationError):
    code = "return_failed"
    default_message = "Failed to return book"
