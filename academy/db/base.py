"""Registers every SQLAlchemy model on ``Base.metadata`` for table creation."""

from academy.db.base_class import Base

from academy.models.user_model import User
from academy.models.progress_model import UserProgress, ProgressStatus
from academy.models.achievement_model import Achievement
from academy.models.chat_message_model import ChatMessage
from academy.models.learning_analytics_model import LearningAnalytics

__all__ = (
    "Base",
    "User",
    "UserProgress",
    "ProgressStatus",
    "Achievement",
    "ChatMessage",
    "LearningAnalytics",
)
