import click
from core.sa.database import Database
from core.services.accounts import AccountService
from ..utils import echo_result

@click.group()
def account():
    """Borrower account commands"""
    pass

@account.command()
@click.argument('username')
@click.option('--name', required=True, help='Display name')
@click.option('--email', required=True, help='Email address')
@click.password_option(help='Account password')
@click.pass_obj
def create(database: Database, username: str, name: str, email: str, password: str):
    """Register a borrower account

    Example:
        cli account create asha --name "Asha Rao" --email asha@example.com
    """
    result = AccountService(database).register_account(username, password, name, email)
    echo_result(result, detail=f"  Account ID: {result.account_id}" if result.success else None)
