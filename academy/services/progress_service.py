import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.orm import Session

from academy.core.exceptions import NotFoundError, ValidationError
from academy.core.utils import keep_earliest, utcnow
from academy.crud import progress_crud
from academy.gamification.achievement_rules import check_achievements
from academy.models.achievement_model import Achievement
from academy.models.progress_model import ProgressStatus, UserProgress
from academy.schemas.progress_schema import ProgressUpsert

logger = logging.getLogger(__name__)

# Fixed credit per completed section. Not a measured duration.
SECTION_TIME_INCREMENT_MINUTES = 5

MIN_RATING = 1
MAX_RATING = 5

UPDATABLE_FIELDS = {
    "status",
    "completed_sections",
    "time_spent",
    "accuracy",
    "attempts",
    "bookmarked",
    "notes",
}

NON_NULLABLE_FIELDS = {"status", "time_spent", "accuracy", "attempts", "bookmarked"}

# Path segments of ``/api/progress/{user_id}/...`` that are not algorithm ids.
RESERVED_ALGORITHM_IDS = {"summary"}


@dataclass
class ProgressOutcome:
    progress: UserProgress
    unlocked: List[Achievement] = field(default_factory=list)


class ProgressService:
    """State machine of one user's progress rows (one row per algorithm)."""

    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id

    # -----------------------------
    # Reads
    # -----------------------------

    def get_progress(self, algorithm_id: str) -> Optional[UserProgress]:
        return progress_crud.get_progress(self.db, self.user_id, algorithm_id)

    def list_progress(self) -> List[UserProgress]:
        return progress_crud.list_progress(self.db, self.user_id)

    def completion_rate(self) -> float:
        """Percentage of the user's progress rows that are completed."""
        rows = self.list_progress()
        if not rows:
            return 0.0
        completed = sum(1 for row in rows if row.status == ProgressStatus.COMPLETED)
        return round(completed * 100.0 / len(rows), 2)

    def time_spent(self) -> int:
        return sum(row.time_spent or 0 for row in self.list_progress())

    def _require(self, algorithm_id: str) -> UserProgress:
        row = self.get_progress(algorithm_id)
        if row is None:
            raise NotFoundError(f"No progress for algorithm '{algorithm_id}'")
        return row

    @staticmethod
    def _check_algorithm_id(algorithm_id: str) -> None:
        if algorithm_id in RESERVED_ALGORITHM_IDS:
            raise ValidationError(f"'{algorithm_id}' is a reserved name and cannot be used as an algorithm id")

    def _save_and_check(self, row: UserProgress) -> ProgressOutcome:
        row = progress_crud.save_progress(self.db, row)
        unlocked = check_achievements(self.db, self.user_id)
        return ProgressOutcome(progress=row, unlocked=unlocked)

    # -----------------------------
    # Transitions
    # -----------------------------

    def start(self, algorithm_id: str) -> ProgressOutcome:
        """Create the row in progress; an existing row is returned unchanged."""
        existing = self.get_progress(algorithm_id)
        if existing is not None:
            return ProgressOutcome(progress=existing)

        self._check_algorithm_id(algorithm_id)
        now = utcnow()
        row = progress_crud.create_progress(
            self.db,
            self.user_id,
            algorithm_id,
            status=ProgressStatus.IN_PROGRESS,
            completed_sections=[],
            time_spent=0,
            accuracy=0.0,
            attempts=1,
            bookmarked=False,
            started_at=now,
            last_accessed=now,
        )
        logger.info("User %s started %s", self.user_id, algorithm_id)
        return ProgressOutcome(progress=row)

    def update(self, algorithm_id: str, **fields) -> ProgressOutcome:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown progress fields: {', '.join(sorted(unknown))}")
        nulls = {name for name in NON_NULLABLE_FIELDS & set(fields) if fields[name] is None}
        if nulls:
            raise ValidationError(f"Fields cannot be null: {', '.join(sorted(nulls))}")

        row = self._require(algorithm_id)
        now = utcnow()
        for name, value in fields.items():
            if name == "completed_sections":
                value = list(value or [])
            setattr(row, name, value)

        row.last_accessed = now
        row.started_at = keep_earliest(row.started_at, now)
        if row.status == ProgressStatus.COMPLETED and row.completed_at is None:
            row.completed_at = now
        return self._save_and_check(row)

    def complete(self, algorithm_id: str) -> ProgressOutcome:
        row = self._require(algorithm_id)
        now = utcnow()
        row.status = ProgressStatus.COMPLETED
        row.completed_at = keep_earliest(row.completed_at, now)
        row.last_accessed = now
        row.started_at = keep_earliest(row.started_at, now)
        logger.info("User %s completed %s", self.user_id, algorithm_id)
        return self._save_and_check(row)

    def complete_section(self, algorithm_id: str, section_id: str) -> ProgressOutcome:
        """Record a finished section; repeating a section changes nothing but ``last_accessed``."""
        row = self._require(algorithm_id)
        sections = list(row.completed_sections or [])
        if section_id not in sections:
            sections.append(section_id)
            # A new list instance so the JSON column is flagged as dirty.
            row.completed_sections = sections
            row.time_spent = (row.time_spent or 0) + SECTION_TIME_INCREMENT_MINUTES
        row.last_accessed = utcnow()
        return self._save_and_check(row)

    def bookmark(self, algorithm_id: str) -> ProgressOutcome:
        row = self.get_progress(algorithm_id)
        if row is None:
            row = self.start(algorithm_id).progress
            row.bookmarked = True
        else:
            row.bookmarked = not row.bookmarked
        row.last_accessed = utcnow()
        return self._save_and_check(row)

    def rate(self, algorithm_id: str, rating: int) -> ProgressOutcome:
        if not isinstance(rating, int) or isinstance(rating, bool) or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}")
        row = self._require(algorithm_id)
        row.rating = rating
        row.last_accessed = utcnow()
        return self._save_and_check(row)

    def upsert(self, payload: ProgressUpsert) -> ProgressOutcome:
        """Insert or replace the mutable fields of the row, keeping ``started_at``."""
        now = utcnow()
        row = self.get_progress(payload.algorithm_id)
        if row is None:
            self._check_algorithm_id(payload.algorithm_id)
            row = progress_crud.create_progress(self.db, self.user_id, payload.algorithm_id, started_at=now)

        row.status = payload.status
        row.completed_sections = list(payload.completed_sections)
        row.time_spent = payload.time_spent
        row.accuracy = payload.accuracy
        row.attempts = payload.attempts
        row.bookmarked = payload.bookmarked
        row.rating = payload.rating
        row.notes = payload.notes
        row.last_accessed = now
        row.started_at = keep_earliest(row.started_at, now)
        if payload.status == ProgressStatus.COMPLETED and row.completed_at is None:
            row.completed_at = now
        return self._save_and_check(row)
