# core/services/accounts.py
import logging
from typing import Optional

from core.exceptions import ValidationFailed
from core.sa.database import Database
from core.sa.models import Account
from core.sa.repositories import AccountRepository
from core.services.results import AccountResult

logger = logging.getLogger(__name__)


class AccountService:
    """Creates borrower accounts and checks their credentials"""

    def __init__(self, database: Database):
        self.database = database

    def register_account(self, username: str, password: str, name: str, email: str) -> AccountResult:
        username = (username or "").strip()
        name = (name or "").strip()
        email = (email or "").strip()
        if not username or not password or not name or not email:
            return AccountResult.failure(ValidationFailed("Username, password, name and email are required"))

        try:
            with self.database.get_db() as session:
                account = AccountRepository(session).create_account(username, password, name, email)
                account_id = account.account_id
        except ValueError as e:
            logger.warning(f"Registration of {username!r} rejected: {e}")
            return AccountResult.failure(ValidationFailed(str(e)))
        except Exception:
            logger.exception(f"Error registering account {username!r}")
            return AccountResult(success=False, message="Registration failed", error="error")

        logger.info(f"Registered account {account_id} ({username})")
        return AccountResult(success=True, message="Registration successful", account_id=account_id)

    def verify_credentials(self, username: str, password: str) -> Optional[Account]:
        with self.database.get_db() as session:
            return AccountRepository(session).verify_credentials(username, password)
