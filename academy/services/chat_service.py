import logging
import random
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from academy.crud import chat_crud
from academy.models.chat_message_model import ChatMessage
from academy.schemas.chat_schema import ChatContext

logger = logging.getLogger(__name__)

# Placeholder tutor replies. No model is called.
CANNED_RESPONSES: Sequence[str] = (
    "That's a great question about machine learning! Let me explain...",
    "I'd be happy to help you understand this concept better.",
    "This is a fundamental topic in AI. Here's what you need to know...",
    "Let me break this down into simpler terms for you.",
    "That's an advanced topic! Let's start with the basics...",
)


class ChatService:
    def __init__(self, db: Session, rng: Optional[random.Random] = None):
        self.db = db
        self.rng = rng or random.Random()

    def reply(self, user_id: str, message: str, context: Optional[ChatContext] = None) -> ChatMessage:
        """Store the message together with a canned reply and return the row."""
        response = self.rng.choice(CANNED_RESPONSES)
        stored = chat_crud.create_message(self.db, user_id, message, response, context)
        logger.debug("Chat message %s stored for user %s", stored.id, user_id)
        return stored

    def history(self, user_id: str, limit: int = 100) -> List[ChatMessage]:
        return chat_crud.list_messages(self.db, user_id, limit=limit)
