import click
from datetime import date, datetime
from typing import Optional
from core.sa.database import Database
from core.services.fine_policy import FinePolicy
from core.services.fines import FineAggregator
from ..utils import fail, format_money

@click.group()
def fines():
    """Fine reporting commands"""
    pass

@fines.command()
@click.option('--live/--no-live', default=False, help='Also show fines accrued on open loans')
@click.pass_obj
def report(database: Database, live: bool):
    """Accounts that owe fines or still hold books"""
    result = FineAggregator(database).list_accounts_with_outstanding(live_preview=live)
    if not result.success:
        fail(result.message)

    if not result.accounts:
        click.echo("No outstanding fines or pending books")
        return

    for entry in result.accounts:
        line = (
            click.style(f"[{entry.account_id}] {entry.username}", fg='cyan') +
            f" {entry.name} <{entry.email}>: fines {format_money(entry.total_fines)}, "
            f"{entry.pending_books} pending"
        )
        if live and entry.accrued_fines:
            line += click.style(f", {format_money(entry.accrued_fines)} accrued", fg='yellow')
        click.echo(line)

    click.echo("\n" + click.style("Total fines: ", fg='blue') + format_money(result.total_fines))
    click.echo(click.style("Total pending books: ", fg='blue') + str(result.total_pending_books))

@fines.command()
@click.argument('issue_date', type=click.DateTime(formats=['%Y-%m-%d']))
@click.option('--return-date', default=None, type=click.DateTime(formats=['%Y-%m-%d']),
              help='Defaults to today')
def preview(issue_date: datetime, return_date: Optional[datetime]):
    """Fine owed by a loan issued on ISSUE_DATE

    Example:
        cli fines preview 2024-03-01 --return-date 2024-03-11
    """
    details = FinePolicy.from_settings().compute(
        issue_date.date(),
        return_date.date() if return_date else date.today()
    )
    click.echo(f"Days issued: {details.days_issued}")
    click.echo(f"Days overdue: {details.days_overdue}")
    click.echo(f"Fine: {format_money(details.fine_amount)}")
