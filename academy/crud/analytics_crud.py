# Fichier: academy/crud/analytics_crud.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.models.learning_analytics_model import LearningAnalytics

logger = logging.getLogger(__name__)


def get_analytics(db: Session, user_id: str) -> Optional[LearningAnalytics]:
    return db.query(LearningAnalytics).filter(LearningAnalytics.user_id == user_id).first()


def get_or_create_analytics(db: Session, user_id: str) -> LearningAnalytics:
    """Return the user's analytics row, inserting an all-zero one when absent."""
    row = get_analytics(db, user_id)
    if row is not None:
        return row

    row = LearningAnalytics(
        user_id=user_id,
        categories_progress={},
        difficulty_progress={},
        weekly_stats=[],
        monthly_stats=[],
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        row = get_analytics(db, user_id)
        if row is None:
            raise
        return row
    db.refresh(row)
    logger.info("Created analytics row for user %s", user_id)
    return row
