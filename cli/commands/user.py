import click
from core.sa.database import Database
from core.sa.models import UserRole
from core.sa.repositories.user import UserRepository
from ..utils import print_error, print_user

ROLES = [role.value for role in UserRole]

@click.group()
def user():
    """Manage users"""
    pass

@user.command()
@click.argument('username')
@click.option('--name', required=True, help='Display name')
@click.option('--email', default=None, help='Email address')
@click.option('--role', type=click.Choice(ROLES), default=UserRole.STUDENT.value, show_default=True)
@click.password_option()
@click.pass_obj
def create(database: Database, username: str, name: str, email: str, role: str, password: str):
    """Create a user with a hashed password"""
    with database.get_db() as session:
        try:
            created = UserRepository(session).create_user(
                username=username, password=password, name=name, role=role, email=email
            )
        except ValueError as e:
            print_error(str(e))
            raise SystemExit(1)
        print_user(created)

@user.command('list')
@click.option('--role', type=click.Choice(ROLES), default=UserRole.STUDENT.value, show_default=True)
@click.pass_obj
def list_users(database: Database, role: str):
    """List users with a role"""
    with database.get_db() as session:
        users = UserRepository(session).list_by_role(role)
        if not users:
            click.echo(click.style(f"No {role} users", fg='yellow'))
            return
        for found in users:
            print_user(found)
