# catalog/config.py
import os
from typing import Dict

PAGE_SIZE = 10
MIN_QUERY_LENGTH = 3

# Catalog language codes shown on edition cards. Unknown codes are shown as-is.
LANGUAGE_LABELS: Dict[str, str] = {
    "503": "Русский",
    "501": "Казахский",
    "504": "Английский",
    "521": "Арабский (религиозные тексты)",
}


class ColumnNames:
    """Physical column names of the catalog table.

    Legacy catalogs name these columns differently, so each one can be
    overridden with a COL_* environment variable.
    """

    def __init__(self):
        self.title = os.getenv("COL_TITLE", "title")
        self.author = os.getenv("COL_AUTHOR", "author")
        self.data_edition = os.getenv("COL_DATA_EDITION", "data_edition")
        self.language = os.getenv("COL_LANGUAGE", "language")
        self.index_catalogue = os.getenv("COL_INDEX_CATALOGUE", "index_catalogue")
        self.volume = os.getenv("COL_VOLUME", "volume")
        self.copy_count = os.getenv("COL_COPY_COUNT", "copy_count")


class Settings:
    def __init__(self):
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///catalog.db")
        self.ts_config = os.getenv("SEARCH_TS_CONFIG", "russian")
        self.excluded_level_id = int(os.getenv("EXCLUDED_LEVEL_ID", "5"))
        self.backfill_batch_size = int(os.getenv("BACKFILL_BATCH_SIZE", "1000"))
        self.session_max_idle_seconds = int(os.getenv("SESSION_MAX_IDLE_SECONDS", str(2 * 3600)))
        self.session_sweep_interval_seconds = int(os.getenv("SESSION_SWEEP_INTERVAL_SECONDS", "3600"))
        self.columns = ColumnNames()


settings = Settings()
