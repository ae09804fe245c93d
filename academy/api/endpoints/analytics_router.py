from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.api.dependencies import get_catalog, get_db
from academy.content.catalog import AlgorithmCatalog
from academy.schemas.analytics_schema import LearningAnalytics
from academy.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get("/{user_id}")
def read_analytics(
    user_id: str,
    db: Session = Depends(get_db),
    catalog: AlgorithmCatalog = Depends(get_catalog),
):
    """Analytics are derived from the user's progress on every read and never 404."""
    analytics = AnalyticsService(db, catalog).get_analytics(user_id)
    return {"success": True, "data": LearningAnalytics.model_validate(analytics)}
