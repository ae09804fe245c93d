import logging
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from academy.content.catalog import AlgorithmCatalog, get_catalog
from academy.core.utils import current_streak, longest_streak, utcnow
from academy.crud import analytics_crud, progress_crud, user_crud
from academy.gamification.achievement_rules import activity_days
from academy.models.learning_analytics_model import LearningAnalytics
from academy.models.progress_model import ProgressStatus, UserProgress

logger = logging.getLogger(__name__)


def _percent(done: int, total: int) -> float:
    return round(done * 100.0 / total, 2) if total else 0.0


def _bucket_progress(rows: List[UserProgress], key_for) -> Dict[str, float]:
    """Share of tracked algorithms completed, per bucket. Unknown algorithms are skipped."""
    totals: Dict[str, int] = {}
    done: Dict[str, int] = {}
    for row in rows:
        key = key_for(row.algorithm_id)
        if key is None:
            continue
        totals[key] = totals.get(key, 0) + 1
        if row.status == ProgressStatus.COMPLETED:
            done[key] = done.get(key, 0) + 1
    return {key: _percent(done.get(key, 0), total) for key, total in totals.items()}


def _period_stats(rows: List[UserProgress], period_of) -> List[dict]:
    buckets: Dict[str, dict] = {}

    def bucket(period: str) -> dict:
        return buckets.setdefault(
            period,
            {"period": period, "time_spent": 0, "algorithms_started": 0, "algorithms_completed": 0},
        )

    for row in rows:
        if row.last_accessed is not None:
            bucket(period_of(row.last_accessed.date()))["time_spent"] += row.time_spent or 0
        if row.started_at is not None:
            bucket(period_of(row.started_at.date()))["algorithms_started"] += 1
        if row.completed_at is not None and row.status == ProgressStatus.COMPLETED:
            bucket(period_of(row.completed_at.date()))["algorithms_completed"] += 1

    return [buckets[period] for period in sorted(buckets)]


def iso_week(day: date) -> str:
    year, week, _ = day.isocalendar()
    return f"{year}-{week:02d}"


def month(day: date) -> str:
    return f"{day.year}-{day.month:02d}"


class AnalyticsService:
    """Derives a user's learning analytics from their progress rows.

    The result is persisted on the user's single analytics row, which is
    created lazily on first read.
    """

    def __init__(self, db: Session, catalog: Optional[AlgorithmCatalog] = None):
        self.db = db
        self.catalog = catalog or get_catalog()

    def _category_of(self, algorithm_id: str) -> Optional[str]:
        record = self.catalog.get(algorithm_id)
        return record.category if record else None

    def _difficulty_of(self, algorithm_id: str) -> Optional[str]:
        record = self.catalog.get(algorithm_id)
        return record.difficulty.lower() if record else None

    def get_analytics(self, user_id: str, today: Optional[date] = None) -> LearningAnalytics:
        analytics = analytics_crud.get_or_create_analytics(self.db, user_id)
        rows = progress_crud.list_progress(self.db, user_id)
        completed = [row for row in rows if row.status == ProgressStatus.COMPLETED]
        days = activity_days(rows)

        analytics.total_time_spent = sum(row.time_spent or 0 for row in rows)
        analytics.algorithms_completed = len(completed)
        analytics.average_accuracy = (
            round(sum(row.accuracy or 0.0 for row in completed) / len(completed), 2) if completed else 0.0
        )
        analytics.learning_streak = current_streak(days, today=today)
        analytics.categories_progress = _bucket_progress(rows, self._category_of)
        analytics.difficulty_progress = _bucket_progress(rows, self._difficulty_of)
        analytics.weekly_stats = _period_stats(rows, iso_week)
        analytics.monthly_stats = _period_stats(rows, month)
        analytics.updated_at = utcnow()

        user = user_crud.get_user(self.db, user_id)
        if user is not None:
            user.total_time_spent = analytics.total_time_spent
            user.algorithms_completed = analytics.algorithms_completed
            user.current_streak = analytics.learning_streak
            user.longest_streak = max(user.longest_streak or 0, longest_streak(days))

        self.db.commit()
        self.db.refresh(analytics)
        logger.debug("Analytics refreshed for user %s", user_id)
        return analytics
