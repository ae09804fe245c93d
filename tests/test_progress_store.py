from __future__ import annotations

import threading

import pytest

from academy.client.api_client import ApiError, ApiUnavailable
from academy.client.progress_store import (
    AddAchievement,
    ProgressState,
    ProgressStore,
    SetLoading,
    UpdateProgress,
    progress_reducer,
)


class FakeClient:
    """In-memory stand-in for ``AcademyClient`` mimicking the server rules."""

    def __init__(self):
        self.online = True
        self.rows: dict[str, dict] = {}
        self.calls: list[tuple] = []
        self.reject: set[str] = set()

    def _guard(self, method, algorithm_id):
        if not self.online:
            raise ApiUnavailable("offline")
        self.calls.append((method, algorithm_id))
        if method in self.reject:
            raise ApiError(404, "Progress not found")

    def _envelope(self, algorithm_id, unlocked=None):
        return {"success": True, "data": dict(self.rows[algorithm_id]), "unlocked": unlocked or []}

    def start_algorithm(self, user_id, algorithm_id):
        self._guard("start_algorithm", algorithm_id)
        self.rows.setdefault(
            algorithm_id,
            {"algorithm_id": algorithm_id, "status": "in_progress", "completed_sections": [], "time_spent": 0,
             "bookmarked": False, "rating": None},
        )
        return self._envelope(algorithm_id)

    def complete_section(self, user_id, algorithm_id, section_id):
        self._guard("complete_section", algorithm_id)
        row = self.rows[algorithm_id]
        if section_id not in row["completed_sections"]:
            row["completed_sections"] = [*row["completed_sections"], section_id]
            row["time_spent"] += 5
        return self._envelope(algorithm_id)

    def complete_algorithm(self, user_id, algorithm_id):
        self._guard("complete_algorithm", algorithm_id)
        self.rows[algorithm_id]["status"] = "completed"
        return self._envelope(algorithm_id, unlocked=[{"achievement_id": "first_algorithm", "name": "First Steps"}])

    def update_progress(self, user_id, algorithm_id, **changes):
        self._guard("update_progress", algorithm_id)
        self.rows[algorithm_id].update(changes)
        return self._envelope(algorithm_id)

    def rate_algorithm(self, user_id, algorithm_id, rating):
        self._guard("rate_algorithm", algorithm_id)
        self.rows[algorithm_id]["rating"] = rating
        return self._envelope(algorithm_id)

    def bookmark_algorithm(self, user_id, algorithm_id):
        self._guard("bookmark_algorithm", algorithm_id)
        self.start_algorithm(user_id, algorithm_id)
        self.rows[algorithm_id]["bookmarked"] = not self.rows[algorithm_id]["bookmarked"]
        return self._envelope(algorithm_id)

    def get_progress(self, user_id, algorithm_id):
        if not self.online:
            raise ApiUnavailable("offline")
        if algorithm_id not in self.rows:
            raise ApiError(404, "Progress not found")
        return dict(self.rows[algorithm_id])

    def list_progress(self, user_id):
        if not self.online:
            raise ApiUnavailable("offline")
        return [dict(row) for row in self.rows.values()]

    def list_achievements(self, user_id):
        return []

    def get_analytics(self, user_id):
        if not self.online:
            raise ApiUnavailable("offline")
        return {"user_id": user_id, "total_time_spent": sum(r["time_spent"] for r in self.rows.values())}


@pytest.fixture()
def fake_client():
    return FakeClient()


@pytest.fixture()
def store(fake_client):
    return ProgressStore(fake_client, "u1")


def test_reducer_returns_new_state():
    state = ProgressState()
    updated = progress_reducer(state, UpdateProgress({"algorithm_id": "k-means", "status": "in_progress"}))

    assert state.user_progress == {}
    assert updated.user_progress["k-means"]["status"] == "in_progress"
    assert progress_reducer(updated, SetLoading(True)).loading is True


def test_reducer_ignores_duplicate_achievements():
    achievement = {"achievement_id": "first_algorithm", "name": "First Steps"}
    state = progress_reducer(ProgressState(), AddAchievement(achievement))
    assert progress_reducer(state, AddAchievement(dict(achievement))) is state
    assert len(state.achievements) == 1


def test_online_actions_merge_server_rows(store):
    store.start_algorithm("linear-regression")
    store.complete_section("linear-regression", "intro")
    store.complete_section("linear-regression", "math")
    store.complete_algorithm("linear-regression")

    row = store.get_progress("linear-regression")
    assert row["status"] == "completed"
    assert row["time_spent"] == 10
    assert [a["achievement_id"] for a in store.state.achievements] == ["first_algorithm"]
    assert store.get_completion_rate() == 100.0
    assert store.get_time_spent() == 10
    assert store.pending == []


def test_offline_writes_are_applied_locally_and_journalled(store, fake_client):
    fake_client.online = False

    store.start_algorithm("k-means")
    store.complete_section("k-means", "intro")
    store.complete_section("k-means", "intro")
    store.bookmark_algorithm("k-means")

    row = store.get_progress("k-means")
    assert row["time_spent"] == 5
    assert row["completed_sections"] == ["intro"]
    assert row["bookmarked"] is True
    assert [w.method for w in store.pending] == [
        "start_algorithm", "complete_section", "complete_section", "bookmark_algorithm"
    ]


def test_flush_replays_in_order(store, fake_client):
    fake_client.online = False
    store.start_algorithm("k-means")
    store.complete_section("k-means", "intro")

    fake_client.online = True
    delivered = store.flush_pending()

    assert delivered == 2
    assert store.pending == []
    assert fake_client.calls == [("start_algorithm", "k-means"), ("complete_section", "k-means")]
    assert store.get_progress("k-means")["time_spent"] == 5


def test_flush_stops_while_still_offline(store, fake_client):
    fake_client.online = False
    store.start_algorithm("k-means")

    assert store.flush_pending() == 0
    assert len(store.pending) == 1


def test_flush_drops_rejected_writes(store, fake_client):
    fake_client.online = False
    store.start_algorithm("k-means")
    store.rate_algorithm("k-means", 4)
    store.complete_algorithm("k-means")

    fake_client.online = True
    fake_client.reject = {"rate_algorithm"}
    delivered = store.flush_pending()

    assert delivered == 2
    assert store.pending == []
    row = store.get_progress("k-means")
    assert row["status"] == "completed"
    # The optimistic rating was rolled back to the server's copy.
    assert row["rating"] is None


def test_flush_drops_local_row_the_server_never_created(store, fake_client):
    fake_client.online = False
    store.start_algorithm("k-means")
    assert store.get_progress("k-means") is not None

    fake_client.online = True
    fake_client.reject = {"start_algorithm"}

    assert store.flush_pending() == 0
    assert store.pending_count() == 0
    assert store.get_progress("k-means") is None


def test_flush_keeps_local_row_when_resync_is_offline(store, fake_client, monkeypatch):
    fake_client.online = False
    store.start_algorithm("k-means")

    fake_client.online = True
    fake_client.reject = {"start_algorithm"}

    def unreachable(user_id, algorithm_id):
        raise ApiUnavailable("offline")

    monkeypatch.setattr(fake_client, "get_progress", unreachable)

    assert store.flush_pending() == 0
    assert store.get_progress("k-means")["status"] == "in_progress"


def test_journal_is_shared_safely_between_threads(store, fake_client):
    fake_client.online = False

    def worker(algorithm_id):
        for _ in range(25):
            store.bookmark_algorithm(algorithm_id)

    threads = [threading.Thread(target=worker, args=(f"algo-{i}",)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.pending_count() == 100


def test_rejected_online_write_raises(store, fake_client):
    fake_client.reject = {"rate_algorithm"}
    with pytest.raises(ApiError):
        store.rate_algorithm("k-means", 3)
    assert store.pending == []


def test_rate_is_validated_before_sending(store, fake_client):
    with pytest.raises(ValueError):
        store.rate_algorithm("k-means", 9)
    assert fake_client.calls == []


def test_stale_response_is_ignored(store):
    store.start_algorithm("k-means")
    stale_token = store._next_token("k-means")
    store._next_token("k-means")

    store.apply_response("k-means", stale_token, {"data": {"algorithm_id": "k-means", "status": "completed"}})

    assert store.get_progress("k-means")["status"] == "in_progress"


def test_load_and_refresh_analytics(store, fake_client):
    fake_client.start_algorithm("u1", "k-means")

    state = store.load()

    assert state.loading is False
    assert set(state.user_progress) == {"k-means"}
    assert store.refresh_analytics()["total_time_spent"] == 0


def test_load_offline_keeps_local_state(store, fake_client):
    fake_client.online = False
    store.start_algorithm("k-means")

    state = store.load()

    assert state.loading is False
    assert "k-means" in state.user_progress
