from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.api.dependencies import get_db
from academy.core.exceptions import NotFoundError
from academy.crud import user_crud
from academy.schemas import user_schema

router = APIRouter()


@router.get("/{user_id}")
def read_user(user_id: str, db: Session = Depends(get_db)):
    db_user = user_crud.get_user(db, user_id)
    if db_user is None:
        raise NotFoundError("User not found")
    return {"success": True, "data": user_schema.User.model_validate(db_user)}


@router.post("")
def upsert_user(user_in: user_schema.UserUpsert, db: Session = Depends(get_db)):
    """
    Crée l'utilisateur au premier sign-in ou met à jour son profil.
    La réponse renvoie le corps reçu, tel quel.
    """
    user_crud.upsert_user(db, user_in)
    return {"success": True, "data": user_in}


@router.put("/{user_id}")
def update_user(user_id: str, changes: user_schema.UserUpdate, db: Session = Depends(get_db)):
    db_user = user_crud.update_user(db, user_id, changes)
    if db_user is None:
        raise NotFoundError("User not found")
    return {"success": True, "data": user_schema.User.model_validate(db_user)}


@router.post("/{user_id}/touch")
def touch_user(user_id: str, db: Session = Depends(get_db)):
    db_user = user_crud.touch_user(db, user_id)
    if db_user is None:
        raise NotFoundError("User not found")
    return {"success": True, "data": {"id": db_user.id, "last_active": db_user.last_active}}
