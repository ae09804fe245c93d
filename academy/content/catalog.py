# Fichier: academy/content/catalog.py
import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional

from academy.content.algorithms import ALGORITHM_DATA
from academy.schemas.algorithm_schema import (
    AlgorithmRecord,
    AlgorithmSummary,
    CatalogStats,
    CategorySummary,
    DifficultyDistribution,
)

logger = logging.getLogger(__name__)

DIFFICULTY_ORDER = ("beginner", "intermediate", "advanced", "expert")
TOP_N = 5


class AlgorithmCatalog:
    """Read-only lookups over the built-in algorithm content."""

    def __init__(self, records: Iterable[dict]):
        self._records: Dict[str, AlgorithmRecord] = {}
        for raw in records:
            record = AlgorithmRecord.model_validate(raw)
            self._records[record.id] = record
        logger.debug("Catalog loaded with %s algorithms", len(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, algorithm_id: str) -> bool:
        return algorithm_id in self._records

    def get(self, algorithm_id: str) -> Optional[AlgorithmRecord]:
        return self._records.get(algorithm_id)

    def all(self) -> List[AlgorithmRecord]:
        return list(self._records.values())

    def list(self) -> List[AlgorithmSummary]:
        return [record.to_summary() for record in self._records.values()]

    def list_by_category(self, category: str) -> List[AlgorithmSummary]:
        wanted = category.strip().lower()
        return [
            record.to_summary()
            for record in self._records.values()
            if record.category.lower() == wanted
        ]

    def search(self, query: str) -> List[AlgorithmRecord]:
        """Case-insensitive substring match over names, descriptions and tags.

        An empty query returns the whole catalog.
        """
        needle = (query or "").strip().lower()
        if not needle:
            return self.all()

        matches = []
        for record in self._records.values():
            haystack = [record.name, record.description, record.long_description, *record.tags]
            if any(needle in field.lower() for field in haystack):
                matches.append(record)
        return matches

    def categories(self) -> List[CategorySummary]:
        grouped: Dict[str, List[AlgorithmRecord]] = {}
        for record in self._records.values():
            grouped.setdefault(record.category, []).append(record)

        summaries = []
        for name, records in grouped.items():
            difficulties = sorted(
                {r.difficulty for r in records},
                key=lambda d: DIFFICULTY_ORDER.index(d.lower()) if d.lower() in DIFFICULTY_ORDER else len(DIFFICULTY_ORDER),
            )
            summaries.append(CategorySummary(name=name, count=len(records), difficulties=difficulties))
        return summaries

    def stats(self) -> CatalogStats:
        records = self.all()
        total = len(records)

        category_counts = Counter(record.category for record in records)
        histogram = Counter(record.difficulty.lower() for record in records)
        distribution = DifficultyDistribution(**{key: histogram.get(key, 0) for key in DIFFICULTY_ORDER})

        average_rating = round(sum(r.rating for r in records) / total, 2) if total else 0.0
        average_completion = round(sum(r.completion_rate for r in records) / total, 2) if total else 0.0

        # sorted() returns new lists, the catalog order stays untouched.
        most_popular = sorted(records, key=lambda r: r.popularity, reverse=True)[:TOP_N]
        recently_updated = sorted(records, key=lambda r: r.last_updated, reverse=True)[:TOP_N]

        return CatalogStats(
            total_algorithms=total,
            categories=list(category_counts.keys()),
            category_counts=dict(category_counts),
            difficulty_distribution=distribution,
            average_rating=average_rating,
            average_completion_rate=average_completion,
            most_popular=[r.to_summary() for r in most_popular],
            recently_updated=[r.to_summary() for r in recently_updated],
        )


catalog = AlgorithmCatalog(ALGORITHM_DATA.values())


def get_catalog() -> AlgorithmCatalog:
    return catalog
