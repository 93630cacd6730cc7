# catalog/models/search.py

from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from enum import Enum

class SearchMode(str, Enum):
    ALL = "all"          # Full-text over title and author
    TITLE = "title"
    AUTHOR = "author"

class QueryOutcome(str, Enum):
    OK = "ok"
    UNAVAILABLE = "unavailable"  # The store could not be queried

class Work(BaseModel):
    """Editions sharing one work key, as returned by a search"""
    work_key: str
    display_title: Optional[str] = None
    display_author: Optional[str] = None
    editions_count: int

    model_config = ConfigDict(from_attributes=True)

class EditionView(BaseModel):
    id: int
    title: str = ""
    author: str = ""
    data_edition: Optional[str] = None
    language: Optional[str] = None
    locations: List[str] = []
    index_catalogue: Optional[str] = None
    volume: Optional[str] = None
    copy_count: Optional[str] = None

class WorksPage(BaseModel):
    outcome: QueryOutcome = QueryOutcome.OK
    items: List[Work] = []
    # Lower bound (offset + items returned), not an exact count
    total: int = 0

    @property
    def ok(self) -> bool:
        return self.outcome == QueryOutcome.OK

class EditionsPage(BaseModel):
    outcome: QueryOutcome = QueryOutcome.OK
    items: List[EditionView] = []
    total: int = 0

    @property
    def ok(self) -> bool:
        return self.outcome == QueryOutcome.OK

class LocationSummary(BaseModel):
    outcome: QueryOutcome = QueryOutcome.OK
    locations: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome == QueryOutcome.OK
