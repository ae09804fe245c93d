# Fichier: academy/crud/user_crud.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.core.exceptions import ConflictError
from academy.core.utils import utcnow
from academy.models.user_model import User
from academy.schemas.user_schema import UserUpdate, UserUpsert

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """
    Récupère un utilisateur par son adresse email.

    Args:
        db: La session de base de données.
        email: L'email de l'utilisateur à rechercher.

    Returns:
        L'objet User s'il est trouvé, sinon None.
    """
    return db.query(User).filter(User.email == email).first()


def upsert_user(db: Session, payload: UserUpsert) -> User:
    """
    Crée l'utilisateur au premier sign-in, met à jour son profil ensuite.

    Raises:
        ConflictError: l'email appartient déjà à un autre identifiant.
    """
    owner = get_user_by_email(db, payload.email)
    if owner is not None and owner.id != payload.id:
        raise ConflictError(f"Email {payload.email} is already registered to another user")

    db_user = get_user(db, payload.id)
    now = utcnow()
    if db_user is None:
        db_user = User(
            id=payload.id,
            email=payload.email,
            display_name=payload.display_name,
            photo_url=payload.photo_url,
            created_at=now,
            last_active=now,
        )
        db.add(db_user)
    else:
        db_user.email = payload.email
        db_user.display_name = payload.display_name
        db_user.photo_url = payload.photo_url
        db_user.last_active = now

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("User upsert rejected for id=%s: %s", payload.id, exc.orig)
        raise ConflictError(f"Email {payload.email} is already registered to another user") from exc
    db.refresh(db_user)
    return db_user


def update_user(db: Session, user_id: str, changes: UserUpdate) -> Optional[User]:
    db_user = get_user(db, user_id)
    if db_user is None:
        return None

    for field, value in changes.model_dump(exclude_unset=True).items():
        setattr(db_user, field, value)
    db_user.last_active = utcnow()
    db.commit()
    db.refresh(db_user)
    return db_user


def touch_user(db: Session, user_id: str) -> Optional[User]:
    db_user = get_user(db, user_id)
    if db_user is None:
        return None
    db_user.last_active = utcnow()
    db.commit()
    db.refresh(db_user)
    return db_user


def level_for_experience(experience_points: int) -> int:
    return 1 + max(experience_points, 0) // 500


def grant_experience(db: Session, user_id: str, points: int) -> Optional[User]:
    """Add XP to the user and recompute the level. Caller commits."""
    db_user = get_user(db, user_id)
    if db_user is None or not points:
        return db_user
    db_user.experience_points = (db_user.experience_points or 0) + int(points)
    db_user.level = level_for_experience(db_user.experience_points)
    return db_user
