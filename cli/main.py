# cli/main.py
import click
from core.config import get_settings, configure_logging
from .commands.db import init_db
from .commands.user import user
from .commands.book import book

@click.group()
def cli():
    """Lending Library CLI"""
    configure_logging(get_settings().log_level)

cli.add_command(init_db)
cli.add_command(user)
cli.add_command(book)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
