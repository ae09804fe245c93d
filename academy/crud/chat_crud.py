# Fichier: academy/crud/chat_crud.py
from typing import List, Optional

from sqlalchemy.orm import Session

from academy.models.chat_message_model import ChatMessage
from academy.schemas.chat_schema import ChatContext


def create_message(
    db: Session,
    user_id: str,
    content: str,
    response: Optional[str],
    context: Optional[ChatContext] = None,
) -> ChatMessage:
    message = ChatMessage(
        user_id=user_id,
        content=content,
        response=response,
        context_algorithm_id=context.algorithm_id if context else None,
        context_section_id=context.section_id if context else None,
        context_topic=context.topic if context else None,
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    return message


def list_messages(db: Session, user_id: str, limit: int = 100) -> List[ChatMessage]:
    return (
        db.query(ChatMessage)
        .filter(ChatMessage.user_id == user_id)
        .order_by(ChatMessage.created_at.asc(), ChatMessage.id.asc())
        .limit(limit)
        .all()
    )
