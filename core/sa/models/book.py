# core/sa/models/book.py
from sqlalchemy import String, Integer, CheckConstraint, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class Book(Base, TimestampMixin):
    __tablename__ = 'book'

    book_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    isbn: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    available_quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    issue_records = relationship('IssueRecord', back_populates='book')

    __table_args__ = (
        CheckConstraint('quantity >= 0', name='chk_book_quantity'),
        CheckConstraint(
            'available_quantity >= 0 AND available_quantity <= quantity',
            name='chk_book_available_quantity'
        ),
        Index('idx_book_title', 'title'),
    )

    def __repr__(self) -> str:
        return f"<Book {self.book_id} isbn={self.isbn!r} {self.available_quantity}/{self.quantity}>"
