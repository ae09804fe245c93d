# Fichier: academy/schemas/chat_schema.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ChatContext(BaseModel):
    algorithm_id: Optional[str] = None
    section_id: Optional[str] = None
    topic: Optional[str] = None


class ChatRequest(BaseModel):
    user_id: str
    message: str = Field(..., min_length=1)
    context: Optional[ChatContext] = None


class ChatReply(BaseModel):
    response: str
    timestamp: datetime
    context: Optional[ChatContext] = None


class ChatMessage(BaseModel):
    id: int
    user_id: str
    content: str
    response: Optional[str] = None
    context_algorithm_id: Optional[str] = None
    context_section_id: Optional[str] = None
    context_topic: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
