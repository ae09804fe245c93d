"""
Règles de succès déclaratives.

Chaque règle porte les métadonnées dénormalisées recopiées dans la table
``achievements`` au moment du déblocage, plus une exigence typée
(``algorithms_completed``, ``time_spent``, ``accuracy``, ``streak`` ou
``category_mastery``). Ajouter un succès revient à étendre ``ACHIEVEMENT_RULES``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from academy.content.catalog import AlgorithmCatalog, get_catalog
from academy.core.utils import current_streak
from academy.crud import achievement_crud, progress_crud
from academy.models.achievement_model import Achievement
from academy.models.progress_model import ProgressStatus, UserProgress
from academy.schemas.achievement_schema import AchievementCreate

logger = logging.getLogger(__name__)

REQUIREMENT_TYPES = ("algorithms_completed", "time_spent", "accuracy", "streak", "category_mastery")


@dataclass(frozen=True)
class AchievementRequirement:
    type: str
    value: float
    # Only used by category_mastery
    category: Optional[str] = None

    def __post_init__(self):
        if self.type not in REQUIREMENT_TYPES:
            raise ValueError(f"Unknown achievement requirement type: {self.type}")


@dataclass(frozen=True)
class AchievementRule:
    achievement_id: str
    name: str
    description: str
    icon: str
    category: str
    points: int
    rarity: str
    requirement: AchievementRequirement

    def to_create(self, user_id: str) -> AchievementCreate:
        return AchievementCreate(
            user_id=user_id,
            achievement_id=self.achievement_id,
            name=self.name,
            description=self.description,
            icon=self.icon,
            category=self.category,
            points=self.points,
            rarity=self.rarity,
        )


ACHIEVEMENT_RULES: List[AchievementRule] = [
    AchievementRule(
        achievement_id="first_algorithm",
        name="First Steps",
        description="Complete your first algorithm",
        icon="🎯",
        category="milestone",
        points=100,
        rarity="common",
        requirement=AchievementRequirement("algorithms_completed", 1),
    ),
    AchievementRule(
        achievement_id="five_algorithms",
        name="Getting Serious",
        description="Complete five algorithms",
        icon="📚",
        category="milestone",
        points=250,
        rarity="rare",
        requirement=AchievementRequirement("algorithms_completed", 5),
    ),
    AchievementRule(
        achievement_id="first_hour",
        name="Dedicated Learner",
        description="Spend an hour studying algorithms",
        icon="⏱️",
        category="time",
        points=100,
        rarity="common",
        requirement=AchievementRequirement("time_spent", 60),
    ),
    AchievementRule(
        achievement_id="ten_hours",
        name="Deep Diver",
        description="Spend ten hours studying algorithms",
        icon="🌊",
        category="time",
        points=300,
        rarity="epic",
        requirement=AchievementRequirement("time_spent", 600),
    ),
    AchievementRule(
        achievement_id="sharp_mind",
        name="Sharp Mind",
        description="Keep an average accuracy of 90% on completed algorithms",
        icon="🧠",
        category="skill",
        points=200,
        rarity="rare",
        requirement=AchievementRequirement("accuracy", 90),
    ),
    AchievementRule(
        achievement_id="week_streak",
        name="On Fire",
        description="Learn seven days in a row",
        icon="🔥",
        category="streak",
        points=200,
        rarity="rare",
        requirement=AchievementRequirement("streak", 7),
    ),
    AchievementRule(
        achievement_id="ml_explorer",
        name="Machine Learning Explorer",
        description="Complete three Machine Learning algorithms",
        icon="🤖",
        category="mastery",
        points=300,
        rarity="epic",
        requirement=AchievementRequirement("category_mastery", 3, category="Machine Learning"),
    ),
    AchievementRule(
        achievement_id="deep_learning_initiate",
        name="Deep Learning Initiate",
        description="Complete a Deep Learning algorithm",
        icon="🕸️",
        category="mastery",
        points=150,
        rarity="rare",
        requirement=AchievementRequirement("category_mastery", 1, category="Deep Learning"),
    ),
]


@dataclass
class ProgressSnapshot:
    """Aggregates over one user's progress rows, the input of every rule."""

    algorithms_completed: int = 0
    time_spent: int = 0
    average_accuracy: float = 0.0
    streak: int = 0
    completed_by_category: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[UserProgress],
        catalog: Optional[AlgorithmCatalog] = None,
        today: Optional[date] = None,
    ) -> "ProgressSnapshot":
        catalog = catalog or get_catalog()
        rows = list(rows)
        completed = [row for row in rows if row.status == ProgressStatus.COMPLETED]

        by_category: Dict[str, int] = {}
        for row in completed:
            record = catalog.get(row.algorithm_id)
            if record is None:
                continue
            by_category[record.category] = by_category.get(record.category, 0) + 1

        accuracy = sum(row.accuracy or 0.0 for row in completed) / len(completed) if completed else 0.0

        return cls(
            algorithms_completed=len(completed),
            time_spent=sum(row.time_spent or 0 for row in rows),
            average_accuracy=round(accuracy, 2),
            streak=current_streak(activity_days(rows), today=today),
            completed_by_category=by_category,
        )


def activity_days(rows: Iterable[UserProgress]) -> Set[date]:
    days: Set[date] = set()
    for row in rows:
        for stamp in (row.started_at, row.last_accessed, row.completed_at):
            if stamp is not None:
                days.add(stamp.date())
    return days


def is_satisfied(requirement: AchievementRequirement, snapshot: ProgressSnapshot) -> bool:
    if requirement.type == "algorithms_completed":
        return snapshot.algorithms_completed >= requirement.value
    if requirement.type == "time_spent":
        return snapshot.time_spent >= requirement.value
    if requirement.type == "accuracy":
        return snapshot.algorithms_completed > 0 and snapshot.average_accuracy >= requirement.value
    if requirement.type == "streak":
        return snapshot.streak >= requirement.value
    if requirement.type == "category_mastery":
        return snapshot.completed_by_category.get(requirement.category or "", 0) >= requirement.value
    return False


def check_achievements(
    db: Session,
    user_id: str,
    rules: Optional[List[AchievementRule]] = None,
    catalog: Optional[AlgorithmCatalog] = None,
) -> List[Achievement]:
    """Unlock every satisfied rule; only newly inserted rows are returned."""
    rules = ACHIEVEMENT_RULES if rules is None else rules
    snapshot = ProgressSnapshot.from_rows(progress_crud.list_progress(db, user_id), catalog=catalog)

    unlocked: List[Achievement] = []
    for rule in rules:
        if not is_satisfied(rule.requirement, snapshot):
            continue
        achievement, created = achievement_crud.unlock_achievement(db, rule.to_create(user_id))
        if created:
            unlocked.append(achievement)

    if unlocked:
        logger.info("User %s unlocked %s", user_id, ", ".join(a.achievement_id for a in unlocked))
    return unlocked
