# catalog/models/__init__.py
from .search import (
    SearchMode, QueryOutcome, Work, EditionView,
    WorksPage, EditionsPage, LocationSummary
)

__all__ = [
    'SearchMode',
    'QueryOutcome',
    'Work',
    'EditionView',
    'WorksPage',
    'EditionsPage',
    'LocationSummary'
]
