import click
from typing import Optional
from core.sa.database import Database
from core.services.catalog import CatalogService
from core.services.circulation import CirculationService
from ..utils import echo_result, format_money

@click.group()
def circulation():
    """Issue and return commands"""
    pass

@circulation.command()
@click.argument('account_id', type=int)
@click.argument('book_id', type=int)
@click.pass_obj
def issue(database: Database, account_id: int, book_id: int):
    """Issue a book to an account

    Example:
        cli circulation issue 1 42
    """
    result = CirculationService(database).issue_book(account_id, book_id)
    echo_result(result, detail=f"  Issue ID: {result.issue_id}" if result.success else None)

@circulation.command('return')
@click.argument('issue_id', type=int)
@click.pass_obj
def return_book(database: Database, issue_id: int):
    """Return a book by its issue ID and report the fine

    Example:
        cli circulation return 7
    """
    result = CirculationService(database).return_book(issue_id)
    detail = None
    if result.success:
        if result.fine > 0:
            detail = f"Fine of {format_money(result.fine)} applied for {result.days_overdue} days overdue"
        else:
            detail = "No fine applied"
    echo_result(result, detail=detail)

@circulation.command()
@click.option('--account-id', default=None, type=int, help='Only show loans of this account')
@click.pass_obj
def loans(database: Database, account_id: Optional[int]):
    """List loans, newest first, with the fine accrued on open ones"""
    catalog = CatalogService(database)
    views = catalog.get_issued_books(account_id) if account_id else catalog.get_all_issued_books()
    if not views:
        click.echo("No loans found")
        return
    for v in views:
        line = f"[{v.issue_id}] {v.title} (book {v.book_id}) -> account {v.account_id}"
        if v.username:
            line += f" ({v.username})"
        line += f", issued {v.issue_date.isoformat()}, {v.status}"
        if v.return_date:
            line += f" {v.return_date.isoformat()}, fine {format_money(v.fine_amount)}"
        elif v.fine_preview and v.fine_preview.has_fine:
            line += click.style(
                f", {format_money(v.fine_preview.fine_amount)} accrued "
                f"({v.fine_preview.days_overdue} days overdue)", fg='yellow'
            )
        click.echo(line)
