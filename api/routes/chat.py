# api/routes/chat.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from catalog.conversation import ConversationHandler, InMemorySessionStore, SessionStore, Reply
from catalog.sa.database import get_db
from catalog.services import SearchService
from api.schemas.chat import ChatRequest

router = APIRouter(prefix="/chat", tags=["chat"])

session_store = InMemorySessionStore()

def get_session_store() -> SessionStore:
    return session_store

@router.post("/{user_id}", response_model=Reply)
def post_message(
    user_id: str,
    request: ChatRequest,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store)
):
    """
    Deliver one user input to the conversation and return the bot's reply.

    Send either `text` (a typed message) or `action` (a pressed button). With
    an action, `displayed_text` is the text of the message the button was
    attached to.
    """
    if bool(request.text is not None) == bool(request.action is not None):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Send exactly one of 'text' or 'action'")

    handler = ConversationHandler(SearchService(db), store)
    if request.action is not None:
        return handler.handle_action(user_id, request.action, request.displayed_text)
    return handler.handle_text(user_id, request.text)
