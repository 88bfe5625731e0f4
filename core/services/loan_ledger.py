# core/services/loan_ledger.py
"""Loan issuing, returning and the copy counters that go with them.

The ledger is the only code that writes ``Book.available_copies``. Every
change to the counter is a single conditional UPDATE so the check and the
write cannot be separated by a concurrent request, and each operation runs as
one transaction: the loan row and the counter change commit or roll back
together.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Callable, Iterator, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import (
    LibraryError, NotFound, Unavailable, AlreadyReturned,
    InventoryConflict, StoreFailure
)
from core.sa.models import Book, User, Loan, LoanStatus, UserRole, utcnow

logger = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(frozen=True)
class LoanFilter:
    """Which loans a listing covers: everything, or one user's loans."""
    user_id: Optional[int] = None

    @classmethod
    def everything(cls) -> "LoanFilter":
        return cls()

    @classmethod
    def for_user(cls, user_id: int) -> "LoanFilter":
        return cls(user_id=user_id)

    @classmethod
    def from_role(cls, role: Optional[str], user_id: Optional[int]) -> "LoanFilter":
        """Students see their own loans; any other role sees all of them.

        Raises:
            ValueError: If a student listing has no user id
        """
        if role == UserRole.STUDENT.value:
            if user_id is None:
                raise ValueError("userId is required when role is student")
            return cls.for_user(user_id)
        return cls.everything()


class LoanLedger:
    def __init__(self, session: Session, clock: Callable[[], datetime] = utcnow):
        self.session = session
        self.clock = clock

    @contextmanager
    def _unit_of_work(self, action: str) -> Iterator[None]:
        """Commit on success; roll back and translate store errors otherwise."""
        try:
            yield
            self.session.commit()
        except LibraryError:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Store failure while trying to %s", action)
            raise StoreFailure(f"Could not {action}") from e

    def _take_copy(self, book_id: int) -> bool:
        result = self.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_copies > 0)
            .values(available_copies=Book.available_copies - 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def _restore_copy(self, book_id: int) -> bool:
        result = self.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_copies < Book.total_copies)
            .values(available_copies=Book.available_copies + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return True
        if self.session.get(Book, book_id) is None:
            logger.info("Book %s no longer exists; skipping copy restore", book_id)
        else:
            logger.warning("Book %s already has every copy on the shelf; not incrementing", book_id)
        return False

    def issue_loan(self, book_id: int, user_id: int, due_date: datetime) -> Loan:
        """Lend one copy of a book to a user.

        Args:
            book_id: The book to lend
            user_id: The borrower
            due_date: When the copy is due back

        Returns:
            The new active Loan, with ``book`` and ``user`` joined

        Raises:
            NotFound: If the book or the user does not exist
            Unavailable: If no copy is left on the shelf
            StoreFailure: If the database operation fails
        """
        due_date = as_utc(due_date)
        with self._unit_of_work("issue loan"):
            if self.session.get(Book, book_id) is None:
                raise NotFound("book", book_id)
            if self.session.get(User, user_id) is None:
                raise NotFound("user", user_id)
            if not self._take_copy(book_id):
                raise Unavailable(book_id)
            loan = Loan(
                book_id=book_id,
                user_id=user_id,
                loan_date=self.clock(),
                due_date=due_date,
                return_date=None,
                status=LoanStatus.ACTIVE.value
            )
            self.session.add(loan)

        logger.info("Issued loan %s: book %s to user %s, due %s", loan.id, book_id, user_id, due_date.isoformat())
        return loan

    def return_loan(self, loan_id: int) -> Loan:
        """Close an active loan and put the copy back on the shelf.

        The copy counter is never raised above the book's total, and a book
        deleted while on loan is simply skipped.

        Raises:
            NotFound: If the loan does not exist
            AlreadyReturned: If the loan was closed before
            StoreFailure: If the database operation fails
        """
        with self._unit_of_work("return loan"):
            loan = self.session.get(Loan, loan_id)
            if loan is None:
                raise NotFound("loan", loan_id)
            closed = self.session.execute(
                update(Loan)
                .where(Loan.id == loan_id, Loan.status == LoanStatus.ACTIVE.value)
                .values(status=LoanStatus.RETURNED.value, return_date=self.clock())
                .execution_options(synchronize_session=False)
            ).rowcount
            if not closed:
                raise AlreadyReturned(loan_id)
            self._restore_copy(loan.book_id)

        logger.info("Returned loan %s (book %s)", loan_id, loan.book_id)
        return loan

    def list_loans(self, loan_filter: LoanFilter) -> Iterator[Loan]:
        """Loans matching the filter, in store order, as a single-pass iterator."""
        stmt = select(Loan).order_by(Loan.id)
        if loan_filter.user_id is not None:
            stmt = stmt.where(Loan.user_id == loan_filter.user_id)
        try:
            return self.session.scalars(stmt)
        except SQLAlchemyError as e:
            logger.exception("Store failure while listing loans")
            raise StoreFailure("Could not list loans") from e

    def overdue_loans(self, now: Optional[datetime] = None) -> Iterator[Loan]:
        """Active loans whose due date has passed, oldest due date first."""
        now = as_utc(now) if now else self.clock()
        stmt = (
            select(Loan)
            .where(Loan.status == LoanStatus.ACTIVE.value, Loan.due_date < now)
            .order_by(Loan.due_date)
        )
        try:
            return self.session.scalars(stmt)
        except SQLAlchemyError as e:
            logger.exception("Store failure while listing overdue loans")
            raise StoreFailure("Could not list overdue loans") from e

    def resize_inventory(self, book_id: int, total_copies: int) -> Book:
        """Change how many copies a book has, shifting the shelf count by the same amount.

        Raises:
            NotFound: If the book does not exist
            InventoryConflict: If the new total is negative or below the copies on loan
            StoreFailure: If the database operation fails
        """
        if total_copies < 0:
            raise InventoryConflict("Total copies cannot be negative")
        with self._unit_of_work("resize inventory"):
            book = self.session.get(Book, book_id)
            if book is None:
                raise NotFound("book", book_id)
            result = self.session.execute(
                update(Book)
                .where(Book.id == book_id, Book.total_copies - Book.available_copies <= total_copies)
                .values(
                    total_copies=total_copies,
                    available_copies=Book.available_copies + (total_copies - Book.total_copies)
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise InventoryConflict(
                    f"Cannot set total copies to {total_copies}: {book.copies_on_loan} copies are on loan"
                )

        logger.info("Book %s now has %s copies", book_id, total_copies)
        return book
