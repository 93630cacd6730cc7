# catalog/conversation/models.py

from pydantic import BaseModel, Field
from datetime import datetime, UTC
from typing import Optional, List
from enum import Enum

from catalog.models import SearchMode

class Language(str, Enum):
    RU = "ru"
    KZ = "kz"

class SessionState(str, Enum):
    IDLE = "idle"
    AWAITING_QUERY = "awaiting_query"
    BROWSING_RESULTS = "browsing_results"

class LastSearch(BaseModel):
    """The results page to return to with a "back" action"""
    query: str
    mode: SearchMode = SearchMode.ALL
    offset: int = 0

class ChatSession(BaseModel):
    language: Language = Language.RU
    state: SessionState = SessionState.IDLE
    mode: SearchMode = SearchMode.ALL
    last_search: Optional[LastSearch] = None
    # Work keys of the results page on screen, in display order
    last_results: List[str] = []
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def reset(self) -> None:
        self.state = SessionState.IDLE
        self.mode = SearchMode.ALL

class Button(BaseModel):
    label: str
    action: str

class Reply(BaseModel):
    text: str
    buttons: List[List[Button]] = []
