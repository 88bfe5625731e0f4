import click
from datetime import timedelta
from core.config import settings
from core.errors import LibraryError
from core.sa.database import Database
from core.sa.models import utcnow
from core.services.loan_ledger import LoanLedger, LoanFilter
from ..utils import print_error, print_loan

@click.group()
def loans():
    """Issue, return and report on loans"""
    pass

@loans.command('list')
@click.option('--user-id', type=int, default=None, help='Only loans for this user')
@click.pass_obj
def list_loans(database: Database, user_id: int):
    """List loans"""
    loan_filter = LoanFilter.for_user(user_id) if user_id is not None else LoanFilter.everything()
    with database.get_db() as session:
        for loan in LoanLedger(session).list_loans(loan_filter):
            print_loan(loan)

@loans.command()
@click.argument('book_id', type=int)
@click.argument('user_id', type=int)
@click.option('--days', type=int, default=None,
              help='Loan length in days (defaults to DEFAULT_LOAN_DAYS)')
@click.pass_obj
def issue(database: Database, book_id: int, user_id: int, days: int):
    """Lend a book to a user"""
    due_date = utcnow() + timedelta(days=days if days is not None else settings.default_loan_days)
    with database.get_db() as session:
        try:
            loan = LoanLedger(session).issue_loan(book_id, user_id, due_date)
        except LibraryError as e:
            print_error(e.message)
            raise SystemExit(1)
        print_loan(loan)

@loans.command('return')
@click.argument('loan_id', type=int)
@click.pass_obj
def return_loan(database: Database, loan_id: int):
    """Mark a loan as returned"""
    with database.get_db() as session:
        try:
            loan = LoanLedger(session).return_loan(loan_id)
        except LibraryError as e:
            print_error(e.message)
            raise SystemExit(1)
        print_loan(loan)

@loans.command()
@click.pass_obj
def overdue(database: Database):
    """List active loans past their due date"""
    with database.get_db() as session:
        found = list(LoanLedger(session).overdue_loans())
        if not found:
            click.echo(click.style("No overdue loans", fg='green'))
            return
        click.echo(click.style(f"{len(found)} overdue loan(s):", fg='red'))
        for loan in found:
            print_loan(loan)
