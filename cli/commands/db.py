import click
from core.sa.database import Database
from core.sa.models import UserRole
from core.sa.repositories.book import BookRepository
from core.sa.repositories.user import UserRepository
from ..utils import print_success, print_book, print_user

SAMPLE_BOOKS = [
    dict(title="Cien años de soledad", author="Gabriel García Márquez", isbn="9780307474728",
         category="Novel", publish_year=1967, total_copies=3),
    dict(title="Clean Code", author="Robert C. Martin", isbn="9780132350884",
         category="Programming", publish_year=2008, total_copies=2),
    dict(title="Structure and Interpretation of Computer Programs", author="Harold Abelson",
         isbn="9780262510875", category="Programming", publish_year=1996, total_copies=1),
]

@click.command('init-db')
@click.pass_obj
def init_db(database: Database):
    """Create the database tables"""
    database.init_db()
    print_success("Database initialized")

@click.command()
@click.option('--admin-password', default='admin123', show_default=True, help='Password for the demo admin')
@click.option('--student-password', default='student123', show_default=True, help='Password for the demo student')
@click.pass_obj
def seed(database: Database, admin_password: str, student_password: str):
    """Create tables and add demo users and books.

    Existing users and books (matched by username and ISBN) are left alone.
    """
    database.init_db()
    session = database.get_session()
    try:
        users = UserRepository(session)
        for username, password, name, role in [
            ("admin", admin_password, "Administrator", UserRole.ADMIN.value),
            ("student", student_password, "Demo Student", UserRole.STUDENT.value),
        ]:
            if users.get_by_username(username):
                continue
            print_user(users.create_user(username=username, password=password, name=name, role=role))

        books = BookRepository(session)
        for sample in SAMPLE_BOOKS:
            if books.get_by_isbn(sample["isbn"]):
                continue
            print_book(books.create_book(**sample))
    finally:
        session.close()
    print_success("Seed complete")
