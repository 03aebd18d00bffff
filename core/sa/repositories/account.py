# core/sa/repositories/account.py
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash
from core.sa.models import Account

class AccountRepository:
    """Repository for managing Account entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, account_id: int) -> Optional[Account]:
        """Get an account by its ID."""
        return self.session.query(Account).filter(Account.account_id == account_id).first()

    def get_by_username(self, username: str) -> Optional[Account]:
        """Get an account by its username."""
        return self.session.query(Account).filter(Account.username == username).first()

    def create_account(self, username: str, password: str, name: str, email: str) -> Account:
        """Create a new account, storing only a hash of the password.

        Args:
            username: Unique login name
            password: Plain text password, hashed before storage
            name: Display name
            email: Unique email address

        Returns:
            The created Account object

        Raises:
            ValueError: If the username or email is already registered
        """
        existing = (
            self.session.query(Account)
            .filter(or_(Account.username == username, Account.email == email))
            .first()
        )
        if existing:
            raise ValueError("Username or email already exists")

        account = Account(
            username=username,
            password_hash=generate_password_hash(password),
            name=name,
            email=email
        )
        self.session.add(account)
        try:
            self.session.flush()
        except IntegrityError:
            raise ValueError("Username or email already exists")
        return account

    def verify_credentials(self, username: str, password: str) -> Optional[Account]:
        """Return the account if the password matches, None otherwise"""
        account = self.get_by_username(username)
        if account is None or not check_password_hash(account.password_hash, password):
            return None
        return account
