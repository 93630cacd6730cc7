# catalog/sa/repositories/edition.py
from typing import Optional, List, Dict, Tuple, Any
from sqlalchemy import select, update, func, or_, literal_column
from sqlalchemy.orm import Session
from catalog.config import settings
from catalog.models import SearchMode
from ..models import Edition, InventoryItem

def to_prefix_tsquery(normalized_query: str) -> str:
    """Build an AND query over the words, matching the last word as a prefix.

    Example:
        >>> to_prefix_tsquery("война и мир")
        'война & и & мир:*'
    """
    tokens = [token for token in normalized_query.split(" ") if token]
    if not tokens:
        return ""
    return " & ".join(tokens) + ":*"

class EditionRepository:
    """Repository for catalog editions and the works they group into."""

    def __init__(self, session: Session, ts_config: Optional[str] = None, excluded_level_id: Optional[int] = None):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
            ts_config: Text-search configuration name (default from settings)
            excluded_level_id: Catalog level never returned by searches (default from settings)
        """
        self.session = session
        self.ts_config = ts_config or settings.ts_config
        self.excluded_level_id = settings.excluded_level_id if excluded_level_id is None else excluded_level_id

    @property
    def _is_postgresql(self) -> bool:
        return self.session.get_bind().dialect.name == "postgresql"

    def _matches_document(self, ts_query):
        if self._is_postgresql:
            return Edition.search_tsv.op("@@")(ts_query)
        return func.ts_match(Edition.search_tsv, ts_query) == 1

    def _is_circulating(self):
        return or_(Edition.level_id.is_(None), Edition.level_id != self.excluded_level_id)

    def search_works(
        self,
        normalized_query: str,
        mode: SearchMode = SearchMode.ALL,
        limit: int = 10,
        offset: int = 0
    ) -> List[Any]:
        """Find editions matching a query and group them into works.

        Groups are ranked by their best edition match (full-text mode only,
        other modes rank every edition equally), then by edition count, then
        by work key. Offset and limit apply to the ranked groups.

        Args:
            normalized_query: Query already passed through normalize_text
            mode: Full-text, title-only or author-only matching
            limit: Maximum number of works to return
            offset: Number of works to skip

        Returns:
            Rows with work_key, display_title, display_author, editions_count and max_rank
        """
        filters = [Edition.work_key.is_not(None), self._is_circulating()]

        if mode == SearchMode.ALL:
            ts_query = func.to_tsquery(self.ts_config, to_prefix_tsquery(normalized_query))
            filters.append(self._matches_document(ts_query))
            rank = func.ts_rank(Edition.search_tsv, ts_query)
        else:
            column = Edition.title_norm if mode == SearchMode.TITLE else Edition.author_norm
            filters.append(column.like(f"%{normalized_query}%"))
            rank = literal_column("1")

        matched = (
            select(
                Edition.work_key,
                Edition.title.label("title"),
                Edition.author.label("author"),
                rank.label("rank")
            )
            .where(*filters)
            .subquery("matched_works")
        )

        editions_count = func.count().label("editions_count")
        max_rank = func.max(matched.c.rank).label("max_rank")
        stmt = (
            select(
                matched.c.work_key,
                func.max(matched.c.title).label("display_title"),
                func.max(matched.c.author).label("display_author"),
                editions_count,
                max_rank
            )
            .group_by(matched.c.work_key)
            .order_by(max_rank.desc(), editions_count.desc(), matched.c.work_key)
            .limit(limit)
            .offset(offset)
        )
        return self.session.execute(stmt).all()

    def get_editions(self, work_key: str, limit: int = 10, offset: int = 0) -> Tuple[List[Edition], int]:
        """Get a page of editions of a work, newest catalog entries first.

        Args:
            work_key: The work key shared by the editions
            limit: Maximum number of editions to return
            offset: Number of editions to skip

        Returns:
            Tuple of (editions, total number of editions of the work)
        """
        full_count = func.count().over().label("full_count")
        stmt = (
            select(Edition, full_count)
            .where(Edition.work_key == work_key)
            .order_by(Edition.id.desc())
            .limit(limit)
            .offset(offset)
        )
        rows = self.session.execute(stmt).all()
        if rows:
            return [row[0] for row in rows], rows[0].full_count

        # Past the last page the window count is unavailable
        if offset > 0:
            return [], self.count_editions(work_key)
        return [], 0

    def count_editions(self, work_key: str) -> int:
        return (
            self.session.query(func.count(Edition.id))
            .filter(Edition.work_key == work_key)
            .scalar()
        )

    def get_locations_by_edition(self, edition_ids: List[int]) -> Dict[int, List[str]]:
        """Distinct, sorted storage locations for each of the given editions"""
        if not edition_ids:
            return {}

        stmt = (
            select(InventoryItem.edition_id, InventoryItem.location)
            .where(
                InventoryItem.edition_id.in_(edition_ids),
                InventoryItem.location.is_not(None),
                InventoryItem.location != ""
            )
            .distinct()
            .order_by(InventoryItem.edition_id, InventoryItem.location)
        )
        locations: Dict[int, List[str]] = {}
        for edition_id, location in self.session.execute(stmt):
            locations.setdefault(edition_id, []).append(location)
        return locations

    def get_work_locations(self, work_key: str) -> List[str]:
        """Distinct, sorted storage locations across all editions of a work"""
        stmt = (
            select(InventoryItem.location)
            .join(Edition, InventoryItem.edition_id == Edition.id)
            .where(
                Edition.work_key == work_key,
                InventoryItem.location.is_not(None),
                InventoryItem.location != ""
            )
            .group_by(InventoryItem.location)
            .order_by(InventoryItem.location)
        )
        return list(self.session.execute(stmt).scalars())

    def get_unkeyed_batch(self, after_id: int, limit: int) -> List[Edition]:
        """Get the next editions without a work key, in primary key order.

        Args:
            after_id: Only editions with a greater ID are returned
            limit: Maximum number of editions to return
        """
        return (
            self.session.query(Edition)
            .filter(Edition.work_key.is_(None), Edition.id > after_id)
            .order_by(Edition.id)
            .limit(limit)
            .all()
        )

    def count_unkeyed(self) -> int:
        return (
            self.session.query(func.count(Edition.id))
            .filter(Edition.work_key.is_(None))
            .scalar()
        )

    def count_all(self) -> int:
        return self.session.query(func.count(Edition.id)).scalar()

    def count_by_level(self) -> List[Tuple[Optional[int], int]]:
        """Number of editions per catalog level"""
        return (
            self.session.query(Edition.level_id, func.count(Edition.id))
            .group_by(Edition.level_id)
            .order_by(Edition.level_id)
            .all()
        )

    def update_derived_fields(
        self,
        edition_id: int,
        title_norm: str,
        author_norm: str,
        work_key: str,
        document_text: str
    ) -> None:
        """Store the normalized fields, work key and search document of one edition.

        The search document is built by the store from the raw text. The
        caller owns the transaction.
        """
        self.session.execute(
            update(Edition)
            .where(Edition.id == edition_id)
            .values(
                work_key=work_key,
                title_norm=title_norm,
                author_norm=author_norm,
                search_tsv=func.to_tsvector(self.ts_config, document_text)
            )
            .execution_options(synchronize_session=False)
        )
