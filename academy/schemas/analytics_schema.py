# Fichier: academy/schemas/analytics_schema.py
from pydantic import BaseModel, Field
from typing import Dict, List
from datetime import datetime


class PeriodStat(BaseModel):
    """Activity bucket for one ISO week (``YYYY-WW``) or month (``YYYY-MM``)."""

    period: str
    time_spent: int = 0
    algorithms_started: int = 0
    algorithms_completed: int = 0


class LearningAnalytics(BaseModel):
    id: int
    user_id: str
    total_time_spent: int
    algorithms_completed: int
    average_accuracy: float
    learning_streak: int
    categories_progress: Dict[str, float] = Field(default_factory=dict)
    difficulty_progress: Dict[str, float] = Field(default_factory=dict)
    weekly_stats: List[PeriodStat] = Field(default_factory=list)
    monthly_stats: List[PeriodStat] = Field(default_factory=list)
    updated_at: datetime

    class Config:
        from_attributes = True
