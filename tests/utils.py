"""Utility helpers for test factories."""

from __future__ import annotations

from datetime import datetime

from academy.core.utils import utcnow
from academy.models.progress_model import ProgressStatus, UserProgress
from academy.models.user_model import User


def create_user(db, **kwargs) -> User:
    defaults = {
        "id": "u1",
        "email": "u1@example.com",
        "display_name": "Learner",
        "created_at": utcnow(),
        "last_active": utcnow(),
    }
    defaults.update(kwargs)
    user = User(**defaults)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_progress(
    db,
    user_id: str = "u1",
    algorithm_id: str = "linear-regression",
    *,
    status: ProgressStatus = ProgressStatus.IN_PROGRESS,
    when: datetime | None = None,
    **kwargs,
) -> UserProgress:
    when = when or utcnow()
    defaults = {
        "completed_sections": [],
        "time_spent": 0,
        "accuracy": 0.0,
        "attempts": 1,
        "bookmarked": False,
        "started_at": when,
        "last_accessed": when,
        "completed_at": when if status == ProgressStatus.COMPLETED else None,
    }
    defaults.update(kwargs)
    row = UserProgress(user_id=user_id, algorithm_id=algorithm_id, status=status, **defaults)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
