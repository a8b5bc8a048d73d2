# cli/commands/book.py
import click
from core.sa.database import Database
from core.sa.repositories.book import BookRepository

@click.group()
def book():
    """Manage lending stock of stored books"""
    pass

@book.command()
@click.argument('book_id')
@click.argument('total', type=int)
def stock(book_id, total):
    """Set the number of owned copies of BOOK_ID to TOTAL.

    Available copies move by the same amount, staying between 0 and TOTAL.
    """
    db = Database()
    with db.get_db() as session:
        try:
            updated = BookRepository(session).set_total_copies(book_id, total)
        except ValueError as e:
            raise click.ClickException(str(e))
        if not updated:
            raise click.ClickException(f"Book {book_id} is not stored locally; fetch it through GET /books/{book_id} first")
        click.echo(
            f"{updated.title}: {updated.available_copies}/{updated.total_copies} copies available"
        )
