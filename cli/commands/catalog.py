# cli/commands/catalog.py
import logging
import click
from catalog.backfill import CatalogBackfill
from catalog.config import PAGE_SIZE
from catalog.models import SearchMode
from catalog.sa.database import Database
from catalog.sa.repositories import EditionRepository
from catalog.services import SearchService
from ..utils import create_progress_bar, print_work, print_edition, print_unavailable

logger = logging.getLogger(__name__)

@click.group()
def catalog():
    """Catalog search and maintenance commands"""
    pass

@catalog.command()
@click.option('--db-url', default=None, help='Database URL (default: DATABASE_URL)')
@click.option('--batch-size', default=None, type=int, help='Editions per transaction')
def backfill(db_url: str, batch_size: int):
    """Compute work keys, normalized fields and search documents

    Processes every edition that has no work key yet, one transaction per
    batch. Safe to re-run after a failure: finished batches stay committed.

    Example:
        catalog-bot catalog backfill
        catalog-bot catalog backfill --batch-size 500
    """
    database = Database(db_url)
    with database.get_db() as session:
        total = EditionRepository(session).count_unkeyed()

    if total == 0:
        click.echo(click.style("Nothing to process", fg='green'))
        return

    click.echo(click.style("Editions to process: ", fg='blue') + click.style(str(total), fg='cyan'))
    with create_progress_bar(total, label='Backfilling') as bar:
        done = 0

        def on_progress(processed: int, _total: int) -> None:
            nonlocal done
            bar.update(processed - done)
            done = processed

        job = CatalogBackfill(database, batch_size=batch_size, on_progress=on_progress)
        try:
            processed = job.run()
        except Exception as e:
            click.echo("\n" + click.style(f"Backfill failed: {str(e)}", fg='red'))
            raise SystemExit(1)

    click.echo(click.style("\nProcessed: ", fg='blue') + click.style(str(processed), fg='cyan') +
               click.style(" editions", fg='blue'))

@catalog.command()
@click.option('--db-url', default=None, help='Database URL (default: DATABASE_URL)')
def stats(db_url: str):
    """Show edition counts per catalog level and backfill coverage"""
    database = Database(db_url)
    with database.get_db() as session:
        repo = EditionRepository(session)
        total = repo.count_all()
        unkeyed = repo.count_unkeyed()
        levels = repo.count_by_level()

    click.echo(click.style("Editions: ", fg='blue') + click.style(str(total), fg='cyan'))
    click.echo(click.style("Missing work key: ", fg='blue') +
               click.style(str(unkeyed), fg='yellow' if unkeyed else 'green'))
    click.echo(click.style("\nBy level:", fg='blue'))
    for level_id, count in levels:
        label = "none" if level_id is None else str(level_id)
        excluded = " (excluded from search)" if level_id == repo.excluded_level_id else ""
        click.echo(f"  {label}: {count}{excluded}")

@catalog.command()
@click.argument('query')
@click.option('--mode', type=click.Choice([m.value for m in SearchMode]), default=SearchMode.ALL.value,
              help='Match title and author, title only or author only')
@click.option('--offset', default=0, type=int, help='Number of works to skip')
@click.option('--limit', default=PAGE_SIZE, type=int, help='Maximum number of works')
@click.option('--db-url', default=None, help='Database URL (default: DATABASE_URL)')
def search(query: str, mode: str, offset: int, limit: int, db_url: str):
    """Search works by title and/or author

    Example:
        catalog-bot catalog search "война и мир"
        catalog-bot catalog search толстой --mode author
    """
    database = Database(db_url)
    with database.get_db() as session:
        page = SearchService(session).search_works(query, offset, limit, SearchMode(mode))

    if not page.ok:
        print_unavailable("works")
        raise SystemExit(1)
    if not page.items:
        click.echo(click.style("No works found", fg='yellow'))
        return
    for i, work in enumerate(page.items):
        print_work(offset + i + 1, work)

@catalog.command()
@click.argument('work_key')
@click.option('--offset', default=0, type=int, help='Number of editions to skip')
@click.option('--limit', default=PAGE_SIZE, type=int, help='Maximum number of editions')
@click.option('--db-url', default=None, help='Database URL (default: DATABASE_URL)')
@click.option('--verbose/--no-verbose', default=False, help='Show empty fields too')
def editions(work_key: str, offset: int, limit: int, db_url: str, verbose: bool):
    """List the editions of a work"""
    database = Database(db_url)
    with database.get_db() as session:
        service = SearchService(session)
        location_stats = service.get_work_location_stats(work_key)
        page = service.get_editions(work_key, offset, limit)

    if not page.ok:
        print_unavailable("editions")
        raise SystemExit(1)

    click.echo(click.style("Editions: ", fg='blue') + click.style(str(page.total), fg='cyan'))
    if location_stats.locations:
        click.echo(click.style("Locations: ", fg='blue') + click.style(location_stats.locations, fg='cyan'))
    for edition in page.items:
        print_edition(edition, verbose)
