"""Pydantic schemas for the read-only algorithm catalog."""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class CodeExample(BaseModel):
    language: str
    code: str
    explanation: str


class MathContent(BaseModel):
    formulas: List[str] = Field(default_factory=list)
    concepts: List[str] = Field(default_factory=list)
    proofs: List[str] = Field(default_factory=list)


class VisualizationStep(BaseModel):
    id: int
    description: str
    animation: str


class Visualization(BaseModel):
    type: str
    config: dict = Field(default_factory=dict)
    steps: List[VisualizationStep] = Field(default_factory=list)


class RelatedAlgorithm(BaseModel):
    id: str
    name: str
    similarity: int


class Exercise(BaseModel):
    id: str
    title: str
    difficulty: str
    description: str


class Resource(BaseModel):
    type: str
    title: str
    url: str


class AlgorithmSummary(BaseModel):
    """Listing view of an algorithm."""

    id: str
    name: str
    category: str
    difficulty: str
    description: str
    estimated_time: str
    rating: float
    review_count: int
    tags: List[str] = Field(default_factory=list)
    popularity: int
    completion_rate: int


class AlgorithmRecord(AlgorithmSummary):
    """Full descriptive record served by the detail endpoint."""

    subcategory: Optional[str] = None
    long_description: str = ""
    time_to_complete: int = 0  # minutes
    prerequisites: List[str] = Field(default_factory=list)
    learning_objectives: List[str] = Field(default_factory=list)
    applications: List[str] = Field(default_factory=list)
    visualization: Optional[Visualization] = None
    code_examples: List[CodeExample] = Field(default_factory=list)
    mathematics: MathContent = Field(default_factory=MathContent)
    related_algorithms: List[RelatedAlgorithm] = Field(default_factory=list)
    exercises: List[Exercise] = Field(default_factory=list)
    resources: List[Resource] = Field(default_factory=list)
    last_updated: date
    level: Optional[str] = None

    def to_summary(self) -> AlgorithmSummary:
        return AlgorithmSummary.model_validate(self.model_dump(include=set(AlgorithmSummary.model_fields)))


class CategorySummary(BaseModel):
    name: str
    count: int
    difficulties: List[str] = Field(default_factory=list)


class DifficultyDistribution(BaseModel):
    beginner: int = 0
    intermediate: int = 0
    advanced: int = 0
    expert: int = 0


class CatalogStats(BaseModel):
    total_algorithms: int
    categories: List[str]
    category_counts: dict[str, int]
    difficulty_distribution: DifficultyDistribution
    average_rating: float
    average_completion_rate: float
    most_popular: List[AlgorithmSummary]
    recently_updated: List[AlgorithmSummary]
