from sqlalchemy import Integer, String, DateTime, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column
from academy.db.base_class import Base
from academy.core.utils import utcnow
from datetime import datetime


class Achievement(Base):
    """Per-user unlock record carrying a denormalised copy of the achievement metadata."""

    __tablename__ = "achievements"
    __table_args__ = (UniqueConstraint("user_id", "achievement_id", name="uq_achievements_user_achievement"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    achievement_id: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(1024), nullable=False)
    icon: Mapped[str] = mapped_column(String(64), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    rarity: Mapped[str] = mapped_column(String(32), nullable=False)
    unlocked_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, server_default=func.now())
