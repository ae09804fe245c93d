# Fichier: academy/crud/progress_crud.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.models.progress_model import UserProgress

logger = logging.getLogger(__name__)


def get_progress(db: Session, user_id: str, algorithm_id: str) -> Optional[UserProgress]:
    return (
        db.query(UserProgress)
        .filter(UserProgress.user_id == user_id, UserProgress.algorithm_id == algorithm_id)
        .first()
    )


def list_progress(db: Session, user_id: str) -> List[UserProgress]:
    return (
        db.query(UserProgress)
        .filter(UserProgress.user_id == user_id)
        .order_by(UserProgress.id)
        .all()
    )


def create_progress(db: Session, user_id: str, algorithm_id: str, **fields) -> UserProgress:
    """Insert a progress row; a concurrent insert for the same pair wins."""
    row = UserProgress(user_id=user_id, algorithm_id=algorithm_id, **fields)
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = get_progress(db, user_id, algorithm_id)
        if existing is None:
            raise
        logger.info("Progress row %s/%s already existed, keeping it", user_id, algorithm_id)
        return existing
    db.refresh(row)
    return row


def save_progress(db: Session, row: UserProgress) -> UserProgress:
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
