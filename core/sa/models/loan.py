# core/sa/models/loan.py
from datetime import datetime
from enum import Enum
from typing import Optional
from sqlalchemy import Integer, String, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base, TimestampMixin, UTCDateTime, utcnow


class LoanStatus(str, Enum):
    ACTIVE = "active"
    RETURNED = "returned"
    OVERDUE = "overdue"   # derived on read, never stored


class Loan(Base, TimestampMixin):
    """One book borrowed by one user.

    ``book_id`` and ``user_id`` are plain references rather than foreign keys:
    deleting a book or a user leaves its loan history in place, and the joined
    ``book``/``user`` attributes then resolve to None.
    """
    __tablename__ = 'loan'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    book_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    loan_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    due_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    return_date: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=LoanStatus.ACTIVE.value)

    # Read-side joins
    book = relationship(
        'Book',
        primaryjoin='foreign(Loan.book_id) == Book.id',
        viewonly=True,
        lazy='joined',
    )
    user = relationship(
        'User',
        primaryjoin='foreign(Loan.user_id) == User.id',
        viewonly=True,
        lazy='joined',
    )

    __table_args__ = (
        CheckConstraint("status IN ('active', 'returned')", name='chk_loan_status'),
        {'sqlite_autoincrement': True},
    )

    def status_at(self, now: Optional[datetime] = None) -> str:
        """Status as seen at ``now``: active loans past their due date are overdue."""
        if self.status == LoanStatus.RETURNED.value:
            return LoanStatus.RETURNED.value
        now = now or utcnow()
        if self.due_date is not None and self.due_date < now:
            return LoanStatus.OVERDUE.value
        return LoanStatus.ACTIVE.value

    @property
    def effective_status(self) -> str:
        return self.status_at()

    @property
    def is_overdue(self) -> bool:
        return self.status_at() == LoanStatus.OVERDUE.value

    def __repr__(self):
        return f'<Loan Book:{self.book_id} User:{self.user_id} {self.status}>'
