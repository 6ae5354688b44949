import logging
from datetime import datetime
from typing import Callable, List, Optional
from sqlmodel import Session, select

from app.models.chat_message import ChatMessage
from app.schemas.chat_message import ChatRequest
from app.services.context_builder import (
    get_project_context,
    build_system_prompt,
    build_user_prompt,
)
from app.services.reply_generator import bind_question

logger = logging.getLogger(__name__)


def save_chat_message(session: Session, message_in: ChatRequest, message_type: str, response: Optional[str] = None) -> ChatMessage:
    msg = ChatMessage(
        message=message_in.message,
        response=response,
        message_type=message_type,
        user_id=message_in.user_id,
        project_id=message_in.project_id or None,
        context=message_in.context or {},
        created_at=datetime.utcnow(),
    )
    session.add(msg)
    session.commit()
    session.refresh(msg)
    return msg


def handle_chat(session: Session, message_in: ChatRequest, generate_reply: Callable) -> ChatMessage:
    """Stores the user's message, generates a reply and stores it as the assistant record.

    Each record is committed on its own: if generation or the second insert fails,
    the user message stays without a reply.
    """
    user_msg = save_chat_message(session, message_in, "user")
    logger.debug("Stored user message %s for user %s", user_msg.id, message_in.user_id)

    project = get_project_context(session, message_in.project_id)
    if message_in.project_id and project is None:
        logger.info("Project %s not found, answering without project context", message_in.project_id)

    system_prompt = build_system_prompt()
    user_prompt = build_user_prompt(message_in.message, project, message_in.conversation_history)
    generate = bind_question(generate_reply, message_in.message)
    reply = generate(system_prompt, user_prompt, project)

    return save_chat_message(session, message_in, "assistant", response=reply)


def list_user_messages(session: Session, user_id: str, project_id: Optional[str] = None) -> List[ChatMessage]:
    q = select(ChatMessage).where(ChatMessage.user_id == user_id)
    if project_id:
        q = q.where(ChatMessage.project_id == project_id)
    return session.exec(q.order_by(ChatMessage.created_at)).all()
