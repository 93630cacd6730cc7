# catalog/conversation/store.py
import logging
import threading
from datetime import datetime, timedelta, UTC
from typing import Callable, Dict, Optional, Protocol

from catalog.config import settings
from .models import ChatSession

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

def utc_now() -> datetime:
    return datetime.now(UTC)

class SessionStore(Protocol):
    """Where conversation sessions live between turns, keyed by user identity"""

    def get(self, user_id: str) -> Optional[ChatSession]: ...

    def set(self, user_id: str, session: ChatSession) -> None: ...

    def delete(self, user_id: str) -> None: ...

class InMemorySessionStore:
    """Process-local session store for a single bot instance.

    Concurrent turns of the same user are last-write-wins. Sessions idle for
    longer than max_idle are dropped by evict_idle().
    """

    def __init__(self, max_idle: Optional[timedelta] = None, clock: Clock = utc_now):
        self.max_idle = max_idle or timedelta(seconds=settings.session_max_idle_seconds)
        self.clock = clock
        self._sessions: Dict[str, ChatSession] = {}

    def get(self, user_id: str) -> Optional[ChatSession]:
        return self._sessions.get(user_id)

    def set(self, user_id: str, session: ChatSession) -> None:
        session.updated_at = self.clock()
        self._sessions[user_id] = session

    def delete(self, user_id: str) -> None:
        self._sessions.pop(user_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def evict_idle(self) -> int:
        """Remove sessions idle for longer than max_idle.

        Returns:
            Number of sessions removed
        """
        cutoff = self.clock() - self.max_idle
        expired = [user_id for user_id, session in list(self._sessions.items()) if session.updated_at < cutoff]
        for user_id in expired:
            self._sessions.pop(user_id, None)
        if expired:
            logger.info(f"Evicted {len(expired)} idle sessions")
        return len(expired)

class SessionSweeper:
    """Background thread calling evict_idle() on a store at a fixed interval"""

    def __init__(self, store: InMemorySessionStore, interval_seconds: Optional[float] = None):
        self.store = store
        self.interval_seconds = interval_seconds or settings.session_sweep_interval_seconds
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="session-sweeper", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self) -> None:
        while not self._stopped.wait(self.interval_seconds):
            self.store.evict_idle()
