# catalog/services/search_service.py

import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.config import LANGUAGE_LABELS, MIN_QUERY_LENGTH, PAGE_SIZE
from catalog.models import (
    SearchMode, QueryOutcome, Work, EditionView,
    WorksPage, EditionsPage, LocationSummary
)
from catalog.normalization import normalize_text
from catalog.sa.models import Edition
from catalog.sa.repositories import EditionRepository

logger = logging.getLogger(__name__)

def language_label(code: Optional[str]) -> Optional[str]:
    """Display label for a catalog language code; unknown codes are returned as-is"""
    if code is None or code == "":
        return None
    code = str(code)
    return LANGUAGE_LABELS.get(code, code)

class SearchService:
    """Searches the catalog and pages through works and their editions.

    Store errors never escape this class: they are logged and reported as
    pages tagged QueryOutcome.UNAVAILABLE, so callers can tell "nothing
    found" apart from "could not ask".
    """

    def __init__(self, session: Session, repository: Optional[EditionRepository] = None):
        self.session = session
        self.repository = repository or EditionRepository(session)

    def _recover(self) -> None:
        try:
            self.session.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Rollback after failed query failed: {str(e)}")

    def search_works(
        self,
        query: str,
        offset: int = 0,
        limit: int = PAGE_SIZE,
        mode: SearchMode = SearchMode.ALL
    ) -> WorksPage:
        """Search for works (editions grouped by work key).

        Queries normalizing to fewer than MIN_QUERY_LENGTH characters return
        an empty page without touching the store.
        """
        normalized_query = normalize_text(query)
        if len(normalized_query) < MIN_QUERY_LENGTH:
            return WorksPage()

        offset = max(0, offset)
        try:
            rows = self.repository.search_works(normalized_query, SearchMode(mode), limit=limit, offset=offset)
        except SQLAlchemyError as e:
            logger.error(f"Search error for '{query}': {str(e)}")
            self._recover()
            return WorksPage(outcome=QueryOutcome.UNAVAILABLE)

        works = [
            Work(
                work_key=row.work_key,
                display_title=row.display_title,
                display_author=row.display_author,
                editions_count=row.editions_count
            )
            for row in rows
        ]
        return WorksPage(items=works, total=offset + len(works))

    def get_editions(self, work_key: str, offset: int = 0, limit: int = PAGE_SIZE) -> EditionsPage:
        """Get a page of the editions of a work with languages and locations resolved"""
        offset = max(0, offset)
        try:
            editions, total = self.repository.get_editions(work_key, limit=limit, offset=offset)
            locations = self.repository.get_locations_by_edition([edition.id for edition in editions])
        except SQLAlchemyError as e:
            logger.error(f"Get editions error for {work_key}: {str(e)}")
            self._recover()
            return EditionsPage(outcome=QueryOutcome.UNAVAILABLE)

        items = [self._to_view(edition, locations.get(edition.id, [])) for edition in editions]
        return EditionsPage(items=items, total=total)

    def get_work_location_stats(self, work_key: str) -> LocationSummary:
        """Comma-joined storage locations across all editions of a work"""
        try:
            locations = self.repository.get_work_locations(work_key)
        except SQLAlchemyError as e:
            logger.error(f"Get location stats error for {work_key}: {str(e)}")
            self._recover()
            return LocationSummary(outcome=QueryOutcome.UNAVAILABLE)

        return LocationSummary(locations=", ".join(locations))

    @staticmethod
    def _to_view(edition: Edition, locations: list[str]) -> EditionView:
        return EditionView(
            id=edition.id,
            title=edition.title or "",
            author=edition.author or "",
            data_edition=edition.data_edition or None,
            language=language_label(edition.language),
            locations=locations,
            index_catalogue=edition.index_catalogue or None,
            volume=edition.volume or None,
            copy_count=edition.copy_count or None
        )
