# core/sa/models/account.py
from datetime import datetime, UTC
from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base

class Account(Base):
    """A borrower. Owned by the account helpers; read-only to circulation."""
    __tablename__ = 'account'

    account_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=lambda: datetime.now(UTC))

    # Relationships
    issue_records = relationship('IssueRecord', back_populates='account')

    def __repr__(self) -> str:
        return f"<Account {self.account_id} {self.username!r}>"
