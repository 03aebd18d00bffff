# cli/main.py
import click
from core.config import configure_logging, settings
from core.sa.database import Database
from .commands.db import db
from .commands.book import book
from .commands.account import account
from .commands.circulation import circulation
from .commands.fines import fines

@click.group()
@click.option('--database-url', envvar='DATABASE_URL', default=None,
              help='SQLAlchemy database URL (defaults to DATABASE_URL or sqlite:///library.db)')
@click.option('--log-level', default=None, help='Logging level, e.g. DEBUG or WARNING')
@click.pass_context
def cli(ctx, database_url, log_level):
    """Library circulation CLI"""
    configure_logging(log_level or settings.log_level)
    ctx.obj = Database(database_url)
    ctx.call_on_close(ctx.obj.dispose)

cli.add_command(db)
cli.add_command(book)
cli.add_command(account)
cli.add_command(circulation)
cli.add_command(fines)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
