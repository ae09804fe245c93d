from __future__ import annotations

import pytest

from academy.core.exceptions import NotFoundError, ValidationError
from academy.models.achievement_model import Achievement
from academy.models.progress_model import ProgressStatus, UserProgress
from academy.models.user_model import User
from academy.schemas.progress_schema import ProgressUpsert
from academy.services.progress_service import SECTION_TIME_INCREMENT_MINUTES, ProgressService
from tests.utils import create_user


def test_start_creates_in_progress_row(db_session):
    service = ProgressService(db=db_session, user_id="u1")

    row = service.start("linear-regression").progress

    assert row.status == ProgressStatus.IN_PROGRESS
    assert row.attempts == 1
    assert row.time_spent == 0
    assert row.completed_sections == []
    assert row.started_at is not None
    assert service.get_progress("linear-regression").id == row.id


def test_repeated_start_is_idempotent(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    first = service.start("k-means").progress
    started_at = first.started_at

    second = service.start("k-means").progress

    assert second.id == first.id
    assert second.attempts == 1
    assert second.started_at == started_at
    assert db_session.query(UserProgress).count() == 1


def test_update_keeps_started_at_and_refreshes_last_accessed(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    row = service.start("linear-regression").progress
    started_at = row.started_at
    last_accessed = row.last_accessed

    updated = service.update("linear-regression", accuracy=87.5, notes="gradient descent clicked").progress

    assert updated.started_at == started_at
    assert updated.last_accessed >= last_accessed
    assert updated.accuracy == 87.5
    assert updated.notes == "gradient descent clicked"


def test_update_requires_existing_row(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    with pytest.raises(NotFoundError):
        service.update("linear-regression", accuracy=10)


def test_update_rejects_unknown_fields(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    service.start("linear-regression")
    with pytest.raises(ValidationError):
        service.update("linear-regression", started_at=None)


@pytest.mark.parametrize("field", ["status", "time_spent", "accuracy", "attempts", "bookmarked"])
def test_update_rejects_null_for_required_fields(db_session, field):
    service = ProgressService(db=db_session, user_id="u1")
    service.start("linear-regression")
    with pytest.raises(ValidationError):
        service.update("linear-regression", **{field: None})
    assert getattr(service.get_progress("linear-regression"), field) is not None


def test_reserved_algorithm_id_is_rejected(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    with pytest.raises(ValidationError):
        service.start("summary")
    with pytest.raises(ValidationError):
        service.upsert(ProgressUpsert(user_id="u1", algorithm_id="summary"))
    assert service.list_progress() == []


def test_linear_regression_walkthrough(db_session):
    service = ProgressService(db=db_session, user_id="u1")

    assert service.start("linear-regression").progress.time_spent == 0

    service.complete_section("linear-regression", "introduction")
    row = service.complete_section("linear-regression", "mathematics").progress
    assert row.time_spent == 2 * SECTION_TIME_INCREMENT_MINUTES == 10
    assert row.completed_sections == ["introduction", "mathematics"]

    outcome = service.complete("linear-regression")
    assert outcome.progress.status == ProgressStatus.COMPLETED
    assert outcome.progress.completed_at is not None
    assert [a.achievement_id for a in outcome.unlocked] == ["first_algorithm"]


def test_complete_section_is_idempotent(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    service.start("k-means")

    service.complete_section("k-means", "intro")
    row = service.complete_section("k-means", "intro").progress

    assert row.completed_sections == ["intro"]
    assert row.time_spent == SECTION_TIME_INCREMENT_MINUTES


def test_complete_section_requires_existing_row(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    with pytest.raises(NotFoundError):
        service.complete_section("k-means", "intro")


def test_complete_keeps_first_completion_timestamp(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    service.start("k-means")
    completed_at = service.complete("k-means").progress.completed_at

    again = service.complete("k-means")

    assert again.progress.completed_at == completed_at
    assert again.unlocked == []


def test_bookmark_toggles_existing_row(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    service.start("k-means")

    assert service.bookmark("k-means").progress.bookmarked is True
    assert service.bookmark("k-means").progress.bookmarked is False


def test_bookmark_without_row_starts_and_bookmarks(db_session):
    service = ProgressService(db=db_session, user_id="u1")

    row = service.bookmark("neural-networks").progress

    assert row.bookmarked is True
    assert row.status == ProgressStatus.IN_PROGRESS
    assert row.attempts == 1


@pytest.mark.parametrize("rating", [0, 6, -1])
def test_rate_rejects_out_of_range(db_session, rating):
    service = ProgressService(db=db_session, user_id="u1")
    service.start("k-means")
    with pytest.raises(ValidationError):
        service.rate("k-means", rating)


def test_rate_sets_rating(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    service.start("k-means")
    assert service.rate("k-means", 4).progress.rating == 4


def test_rate_requires_existing_row(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    with pytest.raises(NotFoundError):
        service.rate("k-means", 3)


def test_upsert_inserts_then_replaces_preserving_started_at(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    first = service.upsert(ProgressUpsert(user_id="u1", algorithm_id="k-means", time_spent=15)).progress
    started_at = first.started_at
    assert first.attempts == 1
    assert first.completed_at is None

    second = service.upsert(
        ProgressUpsert(user_id="u1", algorithm_id="k-means", status=ProgressStatus.COMPLETED, time_spent=30, accuracy=95)
    ).progress

    assert second.id == first.id
    assert second.started_at == started_at
    assert second.completed_at is not None
    assert second.time_spent == 30
    assert db_session.query(UserProgress).count() == 1


def test_derived_reads(db_session):
    service = ProgressService(db=db_session, user_id="u1")
    assert service.completion_rate() == 0
    assert service.time_spent() == 0

    service.start("linear-regression")
    service.start("k-means")
    service.complete_section("k-means", "intro")
    service.complete("k-means")

    assert service.completion_rate() == 50.0
    assert service.time_spent() == SECTION_TIME_INCREMENT_MINUTES
    assert len(service.list_progress()) == 2


def test_progress_is_scoped_per_user(db_session):
    ProgressService(db=db_session, user_id="u1").start("k-means")
    other = ProgressService(db=db_session, user_id="u2")
    assert other.get_progress("k-means") is None
    assert other.list_progress() == []


def test_unlock_rewards_existing_user(db_session):
    create_user(db_session, id="u1", email="u1@example.com")
    service = ProgressService(db=db_session, user_id="u1")
    service.start("k-means")
    service.complete("k-means")

    achievement = db_session.query(Achievement).filter_by(user_id="u1", achievement_id="first_algorithm").one()
    user = db_session.get(User, "u1")
    assert user.experience_points == achievement.points
