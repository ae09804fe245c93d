from sqlalchemy import Integer, Float, String, DateTime, JSON, func
from sqlalchemy.orm import Mapped, mapped_column
from academy.db.base_class import Base
from academy.core.utils import utcnow
from typing import Any, Dict, List
from datetime import datetime


class LearningAnalytics(Base):
    __tablename__ = "learning_analytics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)

    total_time_spent: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    algorithms_completed: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    average_accuracy: Mapped[float] = mapped_column(Float, default=0.0, server_default="0")
    learning_streak: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    categories_progress: Mapped[Dict[str, float]] = mapped_column(JSON, nullable=False, default=dict)
    difficulty_progress: Mapped[Dict[str, float]] = mapped_column(JSON, nullable=False, default=dict)
    weekly_stats: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    monthly_stats: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, server_default=func.now(), onupdate=utcnow)
