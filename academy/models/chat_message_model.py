from sqlalchemy import Integer, String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from academy.db.base_class import Base
from academy.core.utils import utcnow
from typing import Optional
from datetime import datetime


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[Optional[str]] = mapped_column(Text)

    context_algorithm_id: Mapped[Optional[str]] = mapped_column(String(128))
    context_section_id: Mapped[Optional[str]] = mapped_column(String(128))
    context_topic: Mapped[Optional[str]] = mapped_column(String(255))

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, server_default=func.now())
