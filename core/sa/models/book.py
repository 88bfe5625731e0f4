# core/sa/models/book.py
from sqlalchemy import String, Integer, Text, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, TimestampMixin


class Book(Base, TimestampMixin):
    __tablename__ = 'book'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    isbn: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    category: Mapped[str | None] = mapped_column(String(120), nullable=True)
    publish_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_copies: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    # Written only by the loan ledger once the book exists
    available_copies: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        CheckConstraint('total_copies >= 0', name='chk_book_total_copies'),
        CheckConstraint(
            'available_copies >= 0 AND available_copies <= total_copies',
            name='chk_book_available_copies'
        ),
        # Loans reference books by id, so ids are never handed out twice
        {'sqlite_autoincrement': True},
    )

    @property
    def copies_on_loan(self) -> int:
        return self.total_copies - self.available_copies

    def __repr__(self):
        return f'<Book {self.title} ({self.isbn})>'
