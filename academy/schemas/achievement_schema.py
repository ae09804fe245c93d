# Fichier: academy/schemas/achievement_schema.py
from pydantic import BaseModel, Field
from datetime import datetime


class AchievementCreate(BaseModel):
    user_id: str
    achievement_id: str
    name: str
    description: str = ""
    icon: str = "🏆"
    category: str = "milestone"
    points: int = Field(0, ge=0)
    rarity: str = "common"


class Achievement(AchievementCreate):
    id: int
    unlocked_at: datetime

    class Config:
        from_attributes = True
