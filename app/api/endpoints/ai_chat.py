import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from app.api.endpoints.auth import get_current_user
from app.database import get_session
from app.models.user import User
from app.schemas.chat_message import ChatRequest, ChatResponse, ChatMessageRead
from app.services.chat_flow import handle_chat, list_user_messages
from app.services.reply_generator import get_reply_generator

router = APIRouter()
logger = logging.getLogger(__name__)

MISSING_FIELDS = "Message and userId are required"


@router.post("/chat", response_model=ChatResponse)
def chat(
    message_in: ChatRequest,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
    generate_reply=Depends(get_reply_generator),
):
    if not message_in.message or not message_in.user_id:
        raise HTTPException(status_code=400, detail=MISSING_FIELDS)

    try:
        ai_msg = handle_chat(session, message_in, generate_reply)
    except Exception:
        logger.exception("Error in AI chat")
        session.rollback()
        raise HTTPException(status_code=500, detail="Internal server error")

    return ChatResponse(response=ai_msg.response, chat_id=ai_msg.id)


@router.get("/chat/history", response_model=List[ChatMessageRead])
def chat_history(
    project_id: Optional[str] = Query(default=None, alias="projectId"),
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return list_user_messages(session, current_user.id, project_id)
