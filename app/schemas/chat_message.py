from typing import Optional, List, Dict, Any
from datetime import datetime

from app.schemas.base import CamelModel


class ConversationTurn(CamelModel):
    role: str
    content: str


class ChatRequest(CamelModel):
    # message and user_id are checked by the endpoint so a missing field is a 400, not a 422
    message: Optional[str] = None
    project_id: Optional[str] = None
    user_id: Optional[str] = None
    context: Optional[Dict[str, Any]] = None
    conversation_history: Optional[List[ConversationTurn]] = None


class ChatResponse(CamelModel):
    response: str
    chat_id: str


class ChatMessageRead(CamelModel):
    id: str
    message: str
    response: Optional[str] = None
    message_type: str
    user_id: str
    project_id: Optional[str] = None
    context: Optional[Dict[str, Any]] = None
    created_at: datetime
