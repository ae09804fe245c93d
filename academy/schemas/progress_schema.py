# Fichier: academy/schemas/progress_schema.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from academy.models.progress_model import ProgressStatus
from academy.schemas.achievement_schema import Achievement


class ProgressUpsert(BaseModel):
    """Body of ``POST /api/progress``; omitted fields fall back to defaults."""

    user_id: str
    algorithm_id: str
    status: ProgressStatus = ProgressStatus.IN_PROGRESS
    completed_sections: List[str] = Field(default_factory=list)
    time_spent: int = Field(0, ge=0)
    accuracy: float = 0.0
    attempts: int = Field(1, ge=0)
    bookmarked: bool = False
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None


# Columns that are NOT NULL on ``user_progress``; an explicit null is rejected.
NON_NULLABLE_UPDATE_FIELDS = ("status", "time_spent", "accuracy", "attempts", "bookmarked")


class ProgressUpdate(BaseModel):
    """Partial update: only the fields actually sent are merged."""

    status: Optional[ProgressStatus] = None
    completed_sections: Optional[List[str]] = None
    time_spent: Optional[int] = Field(None, ge=0)
    accuracy: Optional[float] = None
    attempts: Optional[int] = Field(None, ge=0)
    bookmarked: Optional[bool] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _reject_nulls(self) -> "ProgressUpdate":
        for name in NON_NULLABLE_UPDATE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class SectionComplete(BaseModel):
    section_id: str = Field(..., min_length=1)


class RatingIn(BaseModel):
    # Range is checked by the service so the error shape matches other domain errors.
    rating: int


class Progress(BaseModel):
    id: int
    user_id: str
    algorithm_id: str
    status: ProgressStatus
    completed_sections: List[str]
    time_spent: int
    accuracy: float
    attempts: int
    bookmarked: bool
    rating: Optional[int] = None
    notes: Optional[str] = None
    last_accessed: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProgressSummary(BaseModel):
    completion_rate: float
    time_spent: int
    count: int


class ProgressMutationResponse(BaseModel):
    success: bool = True
    data: Progress
    unlocked: List[Achievement] = Field(default_factory=list)
