from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from academy.api.dependencies import get_db
from academy.schemas import chat_schema
from academy.services.chat_service import ChatService

router = APIRouter()


@router.post("")
def send_message(chat_in: chat_schema.ChatRequest, db: Session = Depends(get_db)):
    stored = ChatService(db).reply(chat_in.user_id, chat_in.message, chat_in.context)
    reply = chat_schema.ChatReply(response=stored.response, timestamp=stored.created_at, context=chat_in.context)
    return {"success": True, "data": reply}


@router.get("/{user_id}")
def chat_history(user_id: str, limit: int = Query(100, ge=1, le=500), db: Session = Depends(get_db)):
    messages = ChatService(db).history(user_id, limit=limit)
    return {"success": True, "data": [chat_schema.ChatMessage.model_validate(m) for m in messages]}
