# api/schemas/chat.py
from typing import Optional
from pydantic import BaseModel

class ChatRequest(BaseModel):
    text: Optional[str] = None
    action: Optional[str] = None
    displayed_text: Optional[str] = None
