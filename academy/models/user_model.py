from sqlalchemy import Integer, String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from academy.db.base_class import Base
from academy.core.utils import utcnow
from typing import Optional
from datetime import datetime


class User(Base):
    __tablename__ = "users"

    # --- Identity (supplied by the external identity provider) ---
    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    display_name: Mapped[Optional[str]] = mapped_column(String(255))
    photo_url: Mapped[Optional[str]] = mapped_column(String(1024))

    # --- Gamification counters ---
    level: Mapped[int] = mapped_column(Integer, default=1, server_default="1")
    experience_points: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    global_rank: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    total_time_spent: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    algorithms_completed: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    current_streak: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    longest_streak: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    preferred_language: Mapped[str] = mapped_column(String(8), default="en", server_default="en")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, server_default=func.now())
    last_active: Mapped[datetime] = mapped_column(DateTime, default=utcnow, server_default=func.now())

    def __repr__(self):
        return f"<User(id={self.id!r}, email={self.email!r})>"
