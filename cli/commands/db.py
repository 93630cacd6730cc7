# cli/commands/db.py
import click
from sqlalchemy.exc import SQLAlchemyError
from catalog.sa.database import Database

@click.group()
def db():
    """Database management commands"""
    pass

@db.command()
@click.option('--db-url', default=None, help='Database URL (default: DATABASE_URL)')
def init(db_url: str):
    """Create the catalog tables if they don't exist

    Example:
        catalog-bot db init --db-url sqlite:///catalog.db
    """
    database = Database(db_url)
    database.init_db()
    click.echo(click.style("Schema created", fg='green'))

@db.command()
@click.option('--db-url', default=None, help='Database URL (default: DATABASE_URL)')
def check(db_url: str):
    """Check that the database is reachable"""
    database = Database(db_url)
    try:
        now = database.check_connection()
    except SQLAlchemyError as e:
        click.echo(click.style(f"Failed to connect to DB: {str(e)}", fg='red'))
        raise SystemExit(1)
    click.echo(click.style("DB connected at ", fg='green') + click.style(now, fg='cyan'))
