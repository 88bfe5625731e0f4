import click
from datetime import datetime
from typing import Optional
from core.sa.models import Book, Loan, LoanStatus, User

STATUS_COLORS = {
    LoanStatus.ACTIVE.value: 'green',
    LoanStatus.RETURNED.value: 'blue',
    LoanStatus.OVERDUE.value: 'red',
}

def format_date(value: Optional[datetime]) -> str:
    return value.strftime('%Y-%m-%d') if value else '-'

def print_error(message: str) -> None:
    click.echo(click.style(f"Error: {message}", fg='red'), err=True)

def print_success(message: str) -> None:
    click.echo(click.style(message, fg='green'))

def print_book(book: Book) -> None:
    click.echo(
        click.style(f"[{book.id}] ", fg='cyan') +
        f"{book.title} - {book.author} " +
        click.style(f"(ISBN {book.isbn}, {book.available_copies}/{book.total_copies} available)", fg='blue')
    )

def print_user(user: User) -> None:
    click.echo(
        click.style(f"[{user.id}] ", fg='cyan') +
        f"{user.username} ({user.name}) " +
        click.style(user.role, fg='yellow') +
        (f" <{user.email}>" if user.email else "")
    )

def print_loan(loan: Loan, now: Optional[datetime] = None) -> None:
    """Print one loan line: id, status, book, borrower and dates"""
    status = loan.status_at(now)
    title = loan.book.title if loan.book else f"deleted book {loan.book_id}"
    borrower = loan.user.username if loan.user else f"deleted user {loan.user_id}"
    click.echo(
        click.style(f"[{loan.id}] ", fg='cyan') +
        click.style(f"{status:<8} ", fg=STATUS_COLORS.get(status, 'white')) +
        f"{title} -> {borrower} " +
        click.style(
            f"(loaned {format_date(loan.loan_date)}, due {format_date(loan.due_date)}"
            + (f", returned {format_date(loan.return_date)})" if loan.return_date else ")"),
            fg='blue'
        )
    )
