# core/services/transaction.py
import logging

from sqlalchemy.exc import OperationalError

from core.exceptions import TransactionFailed
from core.sa.database import Database

logger = logging.getLogger(__name__)


def run_in_transaction(database: Database, operation, *args, retries: int = 0):
    """Run ``operation(session, *args)`` in its own transaction.

    Lock timeouts and serialization failures surface from the driver as
    OperationalError; the whole operation is retried from a fresh
    transaction so no decision is made on a stale read. Once the retries
    are spent the failure is raised as TransactionFailed.
    """
    attempts = retries + 1
    for attempt in range(1, attempts + 1):
        try:
            with database.get_db() as session:
                return operation(session, *args)
        except OperationalError as e:
            if attempt < attempts:
                logger.warning(f"Transaction conflict (attempt {attempt}/{attempts}), retrying: {e.orig}")
                continue
            logger.error(f"Transaction failed after {attempts} attempts: {e.orig}")
            raise TransactionFailed() from e
