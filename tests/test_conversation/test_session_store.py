# tests/test_conversation/test_session_store.py
import time
from datetime import datetime, timedelta, UTC
from catalog.conversation import ChatSession, InMemorySessionStore, SessionSweeper, SessionState

class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)

def test_get_set_delete():
    store = InMemorySessionStore()
    assert store.get("42") is None

    session = ChatSession(state=SessionState.AWAITING_QUERY)
    store.set("42", session)
    assert store.get("42").state == SessionState.AWAITING_QUERY
    assert len(store) == 1

    store.delete("42")
    store.delete("42")
    assert store.get("42") is None
    assert len(store) == 0

def test_set_stamps_activity_time():
    clock = FakeClock()
    store = InMemorySessionStore(clock=clock)
    store.set("42", ChatSession())
    assert store.get("42").updated_at == clock.now

def test_evict_idle_sessions():
    clock = FakeClock()
    store = InMemorySessionStore(max_idle=timedelta(hours=2), clock=clock)
    store.set("old", ChatSession())
    clock.advance(hours=1)
    store.set("recent", ChatSession())
    clock.advance(hours=1, minutes=30)

    assert store.evict_idle() == 1
    assert store.get("old") is None
    assert store.get("recent") is not None

def test_evict_idle_keeps_active_sessions():
    clock = FakeClock()
    store = InMemorySessionStore(max_idle=timedelta(hours=2), clock=clock)
    store.set("42", ChatSession())
    clock.advance(hours=1)
    assert store.evict_idle() == 0
    assert len(store) == 1

def test_sweeper_evicts_in_background():
    clock = FakeClock()
    store = InMemorySessionStore(max_idle=timedelta(minutes=1), clock=clock)
    store.set("42", ChatSession())
    clock.advance(minutes=5)

    sweeper = SessionSweeper(store, interval_seconds=0.01)
    sweeper.start()
    try:
        deadline = time.monotonic() + 2
        while len(store) and time.monotonic() < deadline:
            time.sleep(0.01)
    finally:
        sweeper.stop()

    assert len(store) == 0
