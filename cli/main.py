# cli/main.py
import logging
import click
from .commands.db import db
from .commands.catalog import catalog
from .commands.chat import chat

@click.group()
@click.option('--verbose/--no-verbose', default=False, help='Show debug logging')
def cli(verbose: bool):
    """Library catalog search CLI"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

cli.add_command(db)
cli.add_command(catalog)
cli.add_command(chat)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
