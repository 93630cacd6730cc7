# catalog/conversation/__init__.py
from .models import ChatSession, SessionState, Language, LastSearch, Button, Reply
from .store import SessionStore, InMemorySessionStore, SessionSweeper
from .recovery import recover_last_search, recover_query
from .handler import ConversationHandler

__all__ = [
    'ChatSession',
    'SessionState',
    'Language',
    'LastSearch',
    'Button',
    'Reply',
    'SessionStore',
    'InMemorySessionStore',
    'SessionSweeper',
    'recover_last_search',
    'recover_query',
    'ConversationHandler'
]
