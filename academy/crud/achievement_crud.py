# Fichier: academy/crud/achievement_crud.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.crud import user_crud
from academy.models.achievement_model import Achievement
from academy.schemas.achievement_schema import AchievementCreate

logger = logging.getLogger(__name__)


def list_achievements(db: Session, user_id: str) -> List[Achievement]:
    """Unlocked achievements, newest first."""
    return (
        db.query(Achievement)
        .filter(Achievement.user_id == user_id)
        .order_by(Achievement.unlocked_at.desc(), Achievement.id.desc())
        .all()
    )


def get_achievement(db: Session, user_id: str, achievement_id: str) -> Optional[Achievement]:
    return (
        db.query(Achievement)
        .filter(Achievement.user_id == user_id, Achievement.achievement_id == achievement_id)
        .first()
    )


def unlock_achievement(db: Session, payload: AchievementCreate) -> Tuple[Achievement, bool]:
    """
    Insert-or-ignore d'un succès.

    Returns:
        ``(row, created)``: ``created`` est faux quand le succès était déjà
        débloqué, la ligne existante est alors renvoyée telle quelle.
    """
    existing = get_achievement(db, payload.user_id, payload.achievement_id)
    if existing:
        return existing, False

    achievement = Achievement(**payload.model_dump())
    db.add(achievement)
    # Appliquer la récompense XP à l'utilisateur s'il existe
    user_crud.grant_experience(db, payload.user_id, payload.points)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = get_achievement(db, payload.user_id, payload.achievement_id)
        if existing is None:
            raise
        return existing, False

    db.refresh(achievement)
    logger.info("Achievement %s unlocked for user %s", payload.achievement_id, payload.user_id)
    return achievement, True
