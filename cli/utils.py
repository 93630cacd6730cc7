import click
from typing import Optional
from catalog.models import Work, EditionView

def create_progress_bar(total: int, label: str = 'Processing') -> click.progressbar:
    """Create a standardized progress bar for batch operations"""
    return click.progressbar(
        length=total,
        label=click.style(label, fg='blue'),
        show_eta=True,
        show_percent=True,
        width=50
    )

def print_work(position: int, work: Work) -> None:
    """Print one search result line"""
    click.echo(click.style(f"{position}. ", fg='blue') +
               click.style(work.display_title or '', fg='cyan') +
               click.style(f" - {work.display_author or ''}", fg='blue'))
    click.echo(click.style("   Editions: ", fg='blue') +
               click.style(str(work.editions_count), fg='cyan') +
               click.style(f"  Key: {work.work_key}", fg='white'))

def print_edition(edition: EditionView, verbose: bool = False) -> None:
    """Print one edition with the fields it has"""
    click.echo("\n" + click.style(f"#{edition.id} ", fg='blue') + click.style(edition.title, fg='cyan'))
    fields = [
        ("Author", edition.author),
        ("Edition", edition.data_edition),
        ("Language", edition.language),
        ("Locations", ", ".join(edition.locations) if edition.locations else None),
        ("Index", edition.index_catalogue),
        ("Volume", edition.volume),
        ("Copies", edition.copy_count),
    ]
    for name, value in fields:
        if value or verbose:
            click.echo(click.style(f"  {name}: ", fg='blue') + click.style(str(value or '-'), fg='cyan'))

def print_unavailable(item_type: Optional[str] = None) -> None:
    what = f" {item_type}" if item_type else ""
    click.echo(click.style(f"Catalog unavailable, could not fetch{what}. See the log for details.", fg='red'))
