# catalog/backfill.py
import logging
from typing import Callable, Optional

from catalog.config import settings
from catalog.normalization import normalize_text, generate_work_key
from catalog.sa.database import Database
from catalog.sa.repositories import EditionRepository

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

class CatalogBackfill:
    """Fills work keys, normalized fields and search documents of the catalog.

    Editions without a work key are processed in batches ordered by primary
    key. Each batch is one transaction: a failure rolls the batch back and
    propagates, leaving earlier batches committed. Re-running picks up
    whatever is still missing.
    """

    def __init__(self, db: Database, batch_size: Optional[int] = None,
                 on_progress: Optional[ProgressCallback] = None):
        """
        Args:
            db: Database to update
            batch_size: Editions per transaction (default from settings)
            on_progress: Called with (processed, total) after every batch
        """
        self.db = db
        self.batch_size = batch_size or settings.backfill_batch_size
        self.on_progress = on_progress

    def run(self) -> int:
        """Process every edition missing a work key.

        Returns:
            Number of editions updated
        """
        with self.db.get_session() as session:
            repository = EditionRepository(session)

            with session.begin():
                total = repository.count_unkeyed()
            logger.info(f"Editions to process: {total}")

            processed = 0
            last_id = 0
            while True:
                try:
                    with session.begin():
                        batch = repository.get_unkeyed_batch(last_id, self.batch_size)
                        if not batch:
                            break
                        for edition in batch:
                            self._update_edition(repository, edition)
                        batch_size = len(batch)
                        last_id = batch[-1].id
                except Exception:
                    logger.exception(f"Backfill batch after ID {last_id} failed, rolled back")
                    raise

                processed += batch_size
                logger.info(f"Processed {processed}/{total}")
                if self.on_progress:
                    self.on_progress(processed, total)

        logger.info("Backfill complete")
        return processed

    @staticmethod
    def _update_edition(repository: EditionRepository, edition) -> None:
        title = edition.title or ""
        author = edition.author or ""
        repository.update_derived_fields(
            edition.id,
            title_norm=normalize_text(title),
            author_norm=normalize_text(author),
            work_key=generate_work_key(author, title),
            document_text=f"{title} {author}"
        )
