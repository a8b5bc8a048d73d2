# cli/commands/db.py
import click
from core.sa.database import Database

@click.command('init-db')
@click.option('--database-url', envvar='DATABASE_URL', help='Database URL (defaults to DATABASE_URL)')
def init_db(database_url):
    """Create any missing tables."""
    db = Database(database_url)
    db.init_db()
    click.echo("Database schema is up to date")
