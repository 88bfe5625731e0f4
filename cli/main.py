# cli/main.py
import logging
import click
from core.config import settings
from core.sa.database import Database
from .commands.db import init_db, seed
from .commands.user import user
from .commands.loans import loans
from .commands.serve import serve

@click.group()
@click.option('--database-url', default=None, help='Overrides DATABASE_URL')
@click.option('--log-level', default=None, help='Overrides LOG_LEVEL')
@click.pass_context
def cli(ctx, database_url, log_level):
    """Library loans CLI"""
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s"
    )
    ctx.obj = Database(database_url)

cli.add_command(init_db)
cli.add_command(seed)
cli.add_command(user)
cli.add_command(loans)
cli.add_command(serve)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
