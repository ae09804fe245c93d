from sqlalchemy import Boolean, DateTime, Enum, Float, Integer, JSON, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column
from academy.db.base_class import Base
from academy.core.utils import utcnow
from typing import List, Optional
from datetime import datetime
import enum


class ProgressStatus(str, enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    LOCKED = "locked"


class UserProgress(Base):
    __tablename__ = "user_progress"
    __table_args__ = (UniqueConstraint("user_id", "algorithm_id", name="uq_user_progress_user_algorithm"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Logical reference to users.id, no FK constraint.
    user_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    algorithm_id: Mapped[str] = mapped_column(String(128), nullable=False)

    status: Mapped[ProgressStatus] = mapped_column(
        Enum(ProgressStatus, name="progressstatus", values_callable=lambda obj: [e.value for e in obj], native_enum=False),
        nullable=False,
        default=ProgressStatus.NOT_STARTED,
        server_default=ProgressStatus.NOT_STARTED.value,
    )
    completed_sections: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    time_spent: Mapped[int] = mapped_column(Integer, default=0, server_default="0")  # minutes
    accuracy: Mapped[float] = mapped_column(Float, default=0.0, server_default="0")
    attempts: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    bookmarked: Mapped[bool] = mapped_column(Boolean, default=False, server_default="0")
    rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    last_accessed: Mapped[datetime] = mapped_column(DateTime, default=utcnow, server_default=func.now())
    started_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    def __repr__(self):
        return f"<UserProgress(user_id={self.user_id!r}, algorithm_id={self.algorithm_id!r}, status={self.status.value})>"
