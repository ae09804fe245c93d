"""Client-side progress state: a pure reducer plus a store driving the API.

Writes that cannot reach the API are applied locally and kept in a journal
of :class:`PendingWrite` entries until :meth:`ProgressStore.flush_pending`
replays them. Each algorithm carries a request token; a response whose
token is no longer the latest one for that algorithm is dropped.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from academy.client.api_client import AcademyClient, ApiError, ApiUnavailable
from academy.core.utils import utcnow

logger = logging.getLogger(__name__)

SECTION_TIME_INCREMENT_MINUTES = 5


# -----------------------------
# State & actions
# -----------------------------

@dataclass(frozen=True)
class ProgressState:
    user_progress: Dict[str, dict] = field(default_factory=dict)
    achievements: List[dict] = field(default_factory=list)
    analytics: Optional[dict] = None
    loading: bool = False


@dataclass(frozen=True)
class SetLoading:
    loading: bool


@dataclass(frozen=True)
class SetProgress:
    user_progress: Dict[str, dict]


@dataclass(frozen=True)
class UpdateProgress:
    progress: dict


@dataclass(frozen=True)
class SetAchievements:
    achievements: List[dict]


@dataclass(frozen=True)
class AddAchievement:
    achievement: dict


@dataclass(frozen=True)
class SetAnalytics:
    analytics: Optional[dict]


ProgressAction = Union[SetLoading, SetProgress, UpdateProgress, SetAchievements, AddAchievement, SetAnalytics]


def _achievement_key(achievement: dict) -> Any:
    return achievement.get("achievement_id", achievement.get("id"))


def progress_reducer(state: ProgressState, action: ProgressAction) -> ProgressState:
    """Return the next state; ``state`` itself is never modified."""
    if isinstance(action, SetLoading):
        return replace(state, loading=action.loading)
    if isinstance(action, SetProgress):
        return replace(state, user_progress=dict(action.user_progress))
    if isinstance(action, UpdateProgress):
        user_progress = dict(state.user_progress)
        user_progress[action.progress["algorithm_id"]] = action.progress
        return replace(state, user_progress=user_progress)
    if isinstance(action, SetAchievements):
        return replace(state, achievements=list(action.achievements))
    if isinstance(action, AddAchievement):
        key = _achievement_key(action.achievement)
        if any(_achievement_key(a) == key for a in state.achievements):
            return state
        return replace(state, achievements=[*state.achievements, action.achievement])
    if isinstance(action, SetAnalytics):
        return replace(state, analytics=action.analytics)
    return state


# -----------------------------
# Store
# -----------------------------

@dataclass
class PendingWrite:
    """A write that could not be delivered, replayed by ``flush_pending``."""

    method: str
    algorithm_id: str
    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)
    queued_at: str = field(default_factory=lambda: utcnow().isoformat())


class ProgressStore:
    def __init__(self, client: AcademyClient, user_id: str):
        self.client = client
        self.user_id = user_id
        self.state = ProgressState()
        self.pending: List[PendingWrite] = []
        self._tokens: Dict[str, int] = {}
        self._lock = threading.Lock()

    def dispatch(self, action: ProgressAction) -> ProgressState:
        with self._lock:
            self.state = progress_reducer(self.state, action)
            return self.state

    # --- request tokens ---

    def _next_token(self, algorithm_id: str) -> int:
        with self._lock:
            token = self._tokens.get(algorithm_id, 0) + 1
            self._tokens[algorithm_id] = token
            return token

    def _is_current(self, algorithm_id: str, token: int) -> bool:
        with self._lock:
            return self._tokens.get(algorithm_id) == token

    def apply_response(self, algorithm_id: str, token: int, envelope: dict) -> Optional[dict]:
        """Merge a mutation response unless a newer request superseded it."""
        if not self._is_current(algorithm_id, token):
            logger.debug("Dropping stale response for %s (token %s)", algorithm_id, token)
            return self.get_progress(algorithm_id)

        progress = envelope.get("data")
        if progress:
            self.dispatch(UpdateProgress(progress))
        for achievement in envelope.get("unlocked") or []:
            self.dispatch(AddAchievement(achievement))
        return self.get_progress(algorithm_id)

    # --- write pipeline ---

    def _write(
        self,
        method: str,
        algorithm_id: str,
        args: Tuple[Any, ...],
        local: Callable[[Optional[dict]], Optional[dict]],
        kwargs: Optional[Dict[str, Any]] = None,
    ) -> Optional[dict]:
        kwargs = kwargs or {}
        token = self._next_token(algorithm_id)
        try:
            envelope = getattr(self.client, method)(self.user_id, algorithm_id, *args, **kwargs)
        except ApiUnavailable:
            updated = local(self.get_progress(algorithm_id))
            if updated is not None:
                self.dispatch(UpdateProgress(updated))
            with self._lock:
                self.pending.append(PendingWrite(method, algorithm_id, args, dict(kwargs)))
                queued = len(self.pending)
            logger.info("Queued %s for %s while offline (%s pending)", method, algorithm_id, queued)
            return self.get_progress(algorithm_id)
        return self.apply_response(algorithm_id, token, envelope)

    def _new_local_row(self, algorithm_id: str) -> dict:
        now = utcnow().isoformat()
        return {
            "user_id": self.user_id,
            "algorithm_id": algorithm_id,
            "status": "in_progress",
            "completed_sections": [],
            "time_spent": 0,
            "accuracy": 0.0,
            "attempts": 1,
            "bookmarked": False,
            "rating": None,
            "notes": None,
            "last_accessed": now,
            "started_at": now,
            "completed_at": None,
        }

    @staticmethod
    def _touched(row: dict, **changes) -> dict:
        return {**row, **changes, "last_accessed": utcnow().isoformat()}

    # -----------------------------
    # Actions
    # -----------------------------

    def load(self) -> ProgressState:
        self.dispatch(SetLoading(True))
        try:
            rows = self.client.list_progress(self.user_id)
            self.dispatch(SetProgress({row["algorithm_id"]: row for row in rows}))
            self.dispatch(SetAchievements(self.client.list_achievements(self.user_id)))
            self.dispatch(SetAnalytics(self.client.get_analytics(self.user_id)))
        except ApiUnavailable:
            logger.warning("Could not load progress for %s, keeping local state", self.user_id)
        finally:
            self.dispatch(SetLoading(False))
        return self.state

    def start_algorithm(self, algorithm_id: str) -> Optional[dict]:
        def local(row):
            return row if row is not None else self._new_local_row(algorithm_id)

        return self._write("start_algorithm", algorithm_id, (), local)

    def update_progress(self, algorithm_id: str, **changes) -> Optional[dict]:
        def local(row):
            if row is None:
                return None
            return self._touched(row, **changes)

        return self._write("update_progress", algorithm_id, (), local, kwargs=changes)

    def complete_algorithm(self, algorithm_id: str) -> Optional[dict]:
        def local(row):
            if row is None:
                return None
            return self._touched(row, status="completed", completed_at=row.get("completed_at") or utcnow().isoformat())

        return self._write("complete_algorithm", algorithm_id, (), local)

    def complete_section(self, algorithm_id: str, section_id: str) -> Optional[dict]:
        def local(row):
            if row is None:
                return None
            sections = list(row.get("completed_sections") or [])
            if section_id in sections:
                return self._touched(row)
            return self._touched(
                row,
                completed_sections=[*sections, section_id],
                time_spent=(row.get("time_spent") or 0) + SECTION_TIME_INCREMENT_MINUTES,
            )

        return self._write("complete_section", algorithm_id, (section_id,), local)

    def bookmark_algorithm(self, algorithm_id: str) -> Optional[dict]:
        def local(row):
            if row is None:
                return {**self._new_local_row(algorithm_id), "bookmarked": True}
            return self._touched(row, bookmarked=not row.get("bookmarked", False))

        return self._write("bookmark_algorithm", algorithm_id, (), local)

    def rate_algorithm(self, algorithm_id: str, rating: int) -> Optional[dict]:
        if not 1 <= int(rating) <= 5:
            raise ValueError("rating must be between 1 and 5")

        def local(row):
            if row is None:
                return None
            return self._touched(row, rating=int(rating))

        return self._write("rate_algorithm", algorithm_id, (int(rating),), local)

    def refresh_analytics(self) -> Optional[dict]:
        try:
            self.dispatch(SetAnalytics(self.client.get_analytics(self.user_id)))
        except ApiUnavailable:
            logger.warning("Analytics unavailable for %s", self.user_id)
        return self.state.analytics

    # -----------------------------
    # Derived reads
    # -----------------------------

    def get_progress(self, algorithm_id: str) -> Optional[dict]:
        return self.state.user_progress.get(algorithm_id)

    def get_completion_rate(self) -> float:
        rows = list(self.state.user_progress.values())
        if not rows:
            return 0.0
        completed = sum(1 for row in rows if row.get("status") == "completed")
        return completed * 100.0 / len(rows)

    def get_time_spent(self) -> int:
        return sum(row.get("time_spent") or 0 for row in self.state.user_progress.values())

    # -----------------------------
    # Journal
    # -----------------------------

    def pending_count(self) -> int:
        with self._lock:
            return len(self.pending)

    def _peek_pending(self) -> Optional[PendingWrite]:
        with self._lock:
            return self.pending[0] if self.pending else None

    def _pop_pending(self) -> None:
        with self._lock:
            self.pending.pop(0)

    def _resync(self, algorithm_id: str) -> None:
        """Replace the local row of ``algorithm_id`` with the server's copy."""
        try:
            row = self.client.get_progress(self.user_id, algorithm_id)
        except ApiUnavailable:
            logger.info("Could not resync %s, keeping local row", algorithm_id)
            return
        except ApiError as exc:
            if exc.status_code != 404:
                logger.warning("Could not resync %s: %s", algorithm_id, exc)
                return
            row = None

        if row:
            self.dispatch(UpdateProgress(row))
        else:
            with self._lock:
                user_progress = {k: v for k, v in self.state.user_progress.items() if k != algorithm_id}
            self.dispatch(SetProgress(user_progress))

    def flush_pending(self) -> int:
        """Replay queued writes in order.

        Stops at the first write that still cannot be delivered (it stays
        queued with everything after it). Writes the server rejects with a
        4xx status are dropped and the affected row is reloaded from the
        server. Returns the number of writes delivered.
        """
        delivered = 0
        while True:
            write = self._peek_pending()
            if write is None:
                break
            token = self._next_token(write.algorithm_id)
            try:
                envelope = getattr(self.client, write.method)(self.user_id, write.algorithm_id, *write.args, **write.kwargs)
            except ApiUnavailable:
                logger.info("Still offline, %s writes left in journal", self.pending_count())
                break
            except ApiError as exc:
                if not exc.is_client_error:
                    logger.warning("Server error while replaying %s: %s", write.method, exc)
                    break
                logger.warning("Dropping rejected %s for %s: %s", write.method, write.algorithm_id, exc)
                self._pop_pending()
                self._resync(write.algorithm_id)
                continue

            self._pop_pending()
            delivered += 1
            self.apply_response(write.algorithm_id, token, envelope)
        return delivered
