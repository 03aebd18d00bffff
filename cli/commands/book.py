import click
from typing import Optional
from core.sa.database import Database
from core.services.catalog import CatalogService
from ..utils import echo_result, fail

@click.group()
def book():
    """Book inventory commands"""
    pass

@book.command()
@click.argument('isbn')
@click.argument('title')
@click.argument('author')
@click.option('--quantity', default=1, type=int, show_default=True, help='Number of copies owned')
@click.pass_obj
def add(database: Database, isbn: str, title: str, author: str, quantity: int):
    """Add a book to the catalog

    Example:
        cli book add 9780261103573 "The Fellowship of the Ring" "J. R. R. Tolkien" --quantity 3
    """
    result = CatalogService(database).add_book(isbn, title, author, quantity)
    echo_result(result, detail=f"  Book ID: {result.book_id}" if result.success else None)

@book.command()
@click.argument('book_id', type=int)
@click.option('--isbn', default=None, help='New ISBN')
@click.option('--title', default=None, help='New title')
@click.option('--author', default=None, help='New author')
@click.option('--quantity', default=None, type=int, help='New total quantity')
@click.option('--available', 'available_quantity', default=None, type=int, help='New available quantity')
@click.pass_obj
def edit(database: Database, book_id: int, isbn: Optional[str], title: Optional[str],
         author: Optional[str], quantity: Optional[int], available_quantity: Optional[int]):
    """Edit a book; options left out keep their current value

    Example:
        cli book edit 1 --quantity 5 --available 4
    """
    catalog = CatalogService(database)
    current = catalog.get_book_by_id(book_id)
    if current is None:
        fail("Book not found")

    result = catalog.edit_book(
        book_id,
        isbn if isbn is not None else current.isbn,
        title if title is not None else current.title,
        author if author is not None else current.author,
        quantity if quantity is not None else current.quantity,
        available_quantity if available_quantity is not None else current.available_quantity,
    )
    echo_result(result)

@book.command('list')
@click.option('--available/--all', default=False, help='Only show books with copies on the shelf')
@click.pass_obj
def list_books(database: Database, available: bool):
    """List books ordered by title"""
    catalog = CatalogService(database)
    books = catalog.get_available_books() if available else catalog.get_all_books()
    if not books:
        click.echo("No books found")
        return
    for b in books:
        click.echo(
            click.style(f"[{b.book_id}] ", fg='cyan') +
            f"{b.title} by {b.author} (ISBN {b.isbn}) " +
            click.style(f"{b.available_quantity}/{b.quantity} available", fg='blue')
        )

@book.command()
@click.argument('book_id', type=int)
@click.pass_obj
def show(database: Database, book_id: int):
    """Show a single book"""
    b = CatalogService(database).get_book_by_id(book_id)
    if b is None:
        fail("Book not found")
    click.echo(f"Title: {b.title}")
    click.echo(f"Author: {b.author}")
    click.echo(f"ISBN: {b.isbn}")
    click.echo(f"Copies: {b.available_quantity}/{b.quantity} available")
