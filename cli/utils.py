import click
from decimal import Decimal
from core.config import settings
from core.services.results import OperationResult

def fail(message: str) -> None:
    """Print an error to stderr and exit with status 1"""
    click.echo(click.style(f"Error: {message}", fg='red'), err=True)
    click.get_current_context().exit(1)

def echo_result(result: OperationResult, detail: str = None) -> None:
    """Print a service result; exit non-zero when it failed"""
    if not result.success:
        fail(result.message)
    click.echo(click.style(result.message, fg='green'))
    if detail:
        click.echo(detail)

def format_money(amount: Decimal) -> str:
    return f"{settings.currency_symbol}{Decimal(amount):.2f}"
