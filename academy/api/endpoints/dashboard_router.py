from datetime import timedelta

from fastapi import APIRouter, Depends

from academy.api.dependencies import get_catalog
from academy.content.catalog import AlgorithmCatalog
from academy.core.utils import utcnow

router = APIRouter()

# Demo payloads for the dashboard widgets. They are not derived from user data.
RECOMMENDATION_REASONS = {
    "linear-regression": "Perfect for beginners in machine learning",
    "k-means": "Builds on your statistics knowledge",
    "neural-networks": "Next step in your learning journey",
}


def _iso(delta: timedelta) -> str:
    return (utcnow() - delta).isoformat() + "Z"


@router.get("/stats")
def dashboard_stats(catalog: AlgorithmCatalog = Depends(get_catalog)):
    stats = {
        "total_algorithms": len(catalog),
        "completed_algorithms": 0,
        "current_streak": 0,
        "weekly_goal": 5,
        "weekly_progress": 2,
        "total_hours": 0,
        "avg_session_time": 0,
        "completion_rate": 0,
        "global_rank": 1000,
        "experience_points": 0,
    }
    return {"success": True, "data": stats}


@router.get("/activity")
def dashboard_activity():
    activities = [
        {
            "id": 1,
            "type": "completed",
            "algorithm": "Linear Regression",
            "timestamp": _iso(timedelta(days=1)),
            "duration": 120,
            "accuracy": 95,
        },
        {
            "id": 2,
            "type": "started",
            "algorithm": "Neural Networks",
            "timestamp": _iso(timedelta(hours=2)),
            "duration": 45,
            "accuracy": None,
        },
        {
            "id": 3,
            "type": "achievement",
            "algorithm": "K-Means Clustering",
            "timestamp": _iso(timedelta(days=2)),
            "achievement": "First Algorithm Completed",
            "points": 100,
        },
    ]
    return {"success": True, "data": activities}


@router.get("/recommended")
def dashboard_recommended(catalog: AlgorithmCatalog = Depends(get_catalog)):
    recommended = []
    for algorithm_id, reason in RECOMMENDATION_REASONS.items():
        record = catalog.get(algorithm_id)
        if record is None:
            continue
        recommended.append(
            {
                "id": record.id,
                "name": record.name,
                "category": record.category,
                "difficulty": record.difficulty,
                "estimated_time": record.estimated_time,
                "rating": record.rating,
                "reason": reason,
            }
        )
    return {"success": True, "data": recommended}
