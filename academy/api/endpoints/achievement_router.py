from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.api.dependencies import get_catalog, get_db
from academy.content.catalog import AlgorithmCatalog
from academy.crud import achievement_crud
from academy.gamification.achievement_rules import check_achievements
from academy.schemas.achievement_schema import Achievement, AchievementCreate

router = APIRouter()


@router.get("/{user_id}")
def list_achievements(user_id: str, db: Session = Depends(get_db)):
    rows = achievement_crud.list_achievements(db, user_id)
    return {"success": True, "data": [Achievement.model_validate(r) for r in rows]}


@router.post("")
def unlock_achievement(achievement_in: AchievementCreate, db: Session = Depends(get_db)):
    row, created = achievement_crud.unlock_achievement(db, achievement_in)
    return {"success": True, "data": Achievement.model_validate(row), "created": created}


@router.post("/{user_id}/check")
def run_achievement_check(
    user_id: str,
    db: Session = Depends(get_db),
    catalog: AlgorithmCatalog = Depends(get_catalog),
):
    unlocked = check_achievements(db, user_id, catalog=catalog)
    return {"success": True, "data": [Achievement.model_validate(a) for a in unlocked], "count": len(unlocked)}
