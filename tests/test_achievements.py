from __future__ import annotations

from datetime import date, datetime, timedelta

from academy.crud import achievement_crud, progress_crud
from academy.gamification.achievement_rules import (
    ACHIEVEMENT_RULES,
    AchievementRequirement,
    ProgressSnapshot,
    check_achievements,
    is_satisfied,
)
from academy.models.achievement_model import Achievement
from academy.models.progress_model import ProgressStatus
from academy.models.user_model import User
from academy.schemas.achievement_schema import AchievementCreate
from tests.utils import create_progress, create_user


def test_first_rule_is_first_algorithm():
    rule = ACHIEVEMENT_RULES[0]
    assert rule.achievement_id == "first_algorithm"
    assert rule.name == "First Steps"
    assert rule.icon == "🎯"
    assert rule.points == 100
    assert rule.rarity == "common"
    assert rule.requirement == AchievementRequirement("algorithms_completed", 1)


def test_rule_ids_are_unique():
    ids = [rule.achievement_id for rule in ACHIEVEMENT_RULES]
    assert len(ids) == len(set(ids))


def test_check_achievements_is_idempotent(db_session):
    create_progress(db_session, "u1", "linear-regression", status=ProgressStatus.COMPLETED)

    first = check_achievements(db_session, "u1")
    second = check_achievements(db_session, "u1")

    assert [a.achievement_id for a in first] == ["first_algorithm"]
    assert second == []
    assert db_session.query(Achievement).filter_by(user_id="u1", achievement_id="first_algorithm").count() == 1


def test_no_progress_unlocks_nothing(db_session):
    assert check_achievements(db_session, "nobody") == []


def test_time_and_category_rules(db_session):
    for algorithm_id in ("linear-regression", "k-means", "logistic-regression"):
        create_progress(db_session, "u1", algorithm_id, status=ProgressStatus.COMPLETED, time_spent=25)

    unlocked = {a.achievement_id for a in check_achievements(db_session, "u1")}

    assert {"first_algorithm", "first_hour", "ml_explorer"} <= unlocked
    assert "deep_learning_initiate" not in unlocked


def test_snapshot_aggregates_rows(db_session):
    today = date(2024, 12, 20)
    for offset, algorithm_id in enumerate(["linear-regression", "k-means", "neural-networks"]):
        when = datetime.combine(today - timedelta(days=offset), datetime.min.time())
        status = ProgressStatus.COMPLETED if algorithm_id != "k-means" else ProgressStatus.IN_PROGRESS
        create_progress(db_session, "u1", algorithm_id, status=status, when=when, time_spent=20, accuracy=90.0)

    snapshot = ProgressSnapshot.from_rows(progress_crud.list_progress(db_session, "u1"), today=today)

    assert snapshot.algorithms_completed == 2
    assert snapshot.time_spent == 60
    assert snapshot.average_accuracy == 90.0
    assert snapshot.streak == 3
    assert snapshot.completed_by_category == {"Machine Learning": 1, "Deep Learning": 1}


def test_accuracy_rule_needs_a_completed_algorithm():
    requirement = AchievementRequirement("accuracy", 90)
    assert is_satisfied(requirement, ProgressSnapshot(average_accuracy=95.0)) is False
    assert is_satisfied(requirement, ProgressSnapshot(algorithms_completed=1, average_accuracy=95.0)) is True


def test_unlock_is_insert_or_ignore(db_session):
    payload = AchievementCreate(user_id="u1", achievement_id="custom", name="Custom", points=10)

    row, created = achievement_crud.unlock_achievement(db_session, payload)
    again, created_again = achievement_crud.unlock_achievement(db_session, payload)

    assert created is True
    assert created_again is False
    assert again.id == row.id


def test_unlock_grants_experience_and_level(db_session):
    create_user(db_session, id="u1", email="u1@example.com", experience_points=450)

    achievement_crud.unlock_achievement(
        db_session, AchievementCreate(user_id="u1", achievement_id="big", name="Big", points=100)
    )

    user = db_session.get(User, "u1")
    assert user.experience_points == 550
    assert user.level == 2


def test_list_achievements_newest_first(db_session):
    older = Achievement(
        user_id="u1", achievement_id="a", name="A", description="", icon="🏆", category="milestone",
        points=1, rarity="common", unlocked_at=datetime(2024, 1, 1),
    )
    newer = Achievement(
        user_id="u1", achievement_id="b", name="B", description="", icon="🏆", category="milestone",
        points=1, rarity="common", unlocked_at=datetime(2024, 6, 1),
    )
    db_session.add_all([older, newer])
    db_session.commit()

    assert [a.achievement_id for a in achievement_crud.list_achievements(db_session, "u1")] == ["b", "a"]
