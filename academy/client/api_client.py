import copy
import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from academy.client.fallback_data import FALLBACK_ALGORITHMS, FALLBACK_CATEGORIES
from academy.core.config import settings

logger = logging.getLogger(__name__)


class ApiUnavailable(Exception):
    """The API could not be reached (connection refused, DNS, timeout...)."""


class ApiError(Exception):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, error: str, payload: Optional[dict] = None):
        super().__init__(f"{status_code}: {error}")
        self.status_code = status_code
        self.error = error
        self.payload = payload or {}

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class AcademyClient:
    """Thin synchronous client for the Academy REST API.

    Every method returns the ``data`` member of the JSON envelope, except
    the mutation endpoints that also report unlocked achievements, which
    return the whole envelope.
    """

    def __init__(self, base_url: str, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = settings.CLIENT_TIMEOUT_SECONDS if timeout is None else timeout
        self.session = session or requests.Session()

    # -----------------------------
    # Transport
    # -----------------------------

    def _request(self, method: str, path: str, **kwargs) -> dict:
        url = f"{self.base_url}/api{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("API unreachable (%s %s): %s", method, url, exc)
            raise ApiUnavailable(str(exc)) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.status_code >= 400:
            error = payload.get("error") if isinstance(payload, dict) else None
            raise ApiError(response.status_code, error or response.reason or "Request failed", payload)
        return payload

    def _data(self, method: str, path: str, **kwargs) -> Any:
        return self._request(method, path, **kwargs).get("data")

    # -----------------------------
    # Catalog
    # -----------------------------

    def health(self) -> dict:
        return self._request("GET", "/health")

    def connection_status(self) -> dict:
        return self._request("GET", "/connection-status")

    def list_algorithms(self) -> list:
        try:
            return self._data("GET", "/algorithms")
        except ApiUnavailable:
            logger.info("Using fallback algorithm data")
            return copy.deepcopy(FALLBACK_ALGORITHMS)

    def list_categories(self) -> list:
        try:
            return self._data("GET", "/algorithms/categories")
        except ApiUnavailable:
            logger.info("Using fallback category data")
            return copy.deepcopy(FALLBACK_CATEGORIES)

    def get_algorithm(self, algorithm_id: str) -> dict:
        return self._data("GET", f"/algorithms/detailed/{_segment(algorithm_id)}")

    def list_algorithms_by_category(self, category: str) -> list:
        return self._data("GET", f"/algorithms/category/{_segment(category)}")

    def search_algorithms(self, query: str) -> list:
        return self._data("GET", "/algorithms/search", params={"q": query})

    def algorithm_stats(self) -> dict:
        return self._data("GET", "/algorithms/stats")

    # -----------------------------
    # Users
    # -----------------------------

    def get_user(self, user_id: str) -> dict:
        return self._data("GET", f"/users/{_segment(user_id)}")

    def upsert_user(self, user_id: str, email: str, display_name: Optional[str] = None, photo_url: Optional[str] = None) -> dict:
        body = {"id": user_id, "email": email, "display_name": display_name, "photo_url": photo_url}
        return self._data("POST", "/users", json=body)

    def update_user(self, user_id: str, **changes) -> dict:
        return self._data("PUT", f"/users/{_segment(user_id)}", json=changes)

    def touch_user(self, user_id: str) -> dict:
        return self._data("POST", f"/users/{_segment(user_id)}/touch")

    # -----------------------------
    # Progress
    # -----------------------------

    def _progress_path(self, user_id: str, algorithm_id: str, action: str = "") -> str:
        path = f"/progress/{_segment(user_id)}/{_segment(algorithm_id)}"
        return f"{path}/{action}" if action else path

    def list_progress(self, user_id: str) -> list:
        return self._data("GET", f"/progress/{_segment(user_id)}")

    def progress_summary(self, user_id: str) -> dict:
        return self._data("GET", f"/progress/{_segment(user_id)}/summary")

    def get_progress(self, user_id: str, algorithm_id: str) -> dict:
        return self._data("GET", self._progress_path(user_id, algorithm_id))

    def save_progress(self, progress: dict) -> dict:
        return self._request("POST", "/progress", json=progress)

    def start_algorithm(self, user_id: str, algorithm_id: str) -> dict:
        return self._request("POST", self._progress_path(user_id, algorithm_id, "start"))

    def update_progress(self, user_id: str, algorithm_id: str, **changes) -> dict:
        return self._request("PATCH", self._progress_path(user_id, algorithm_id), json=changes)

    def complete_algorithm(self, user_id: str, algorithm_id: str) -> dict:
        return self._request("POST", self._progress_path(user_id, algorithm_id, "complete"))

    def complete_section(self, user_id: str, algorithm_id: str, section_id: str) -> dict:
        return self._request("POST", self._progress_path(user_id, algorithm_id, "sections"), json={"section_id": section_id})

    def bookmark_algorithm(self, user_id: str, algorithm_id: str) -> dict:
        return self._request("POST", self._progress_path(user_id, algorithm_id, "bookmark"))

    def rate_algorithm(self, user_id: str, algorithm_id: str, rating: int) -> dict:
        return self._request("POST", self._progress_path(user_id, algorithm_id, "rating"), json={"rating": rating})

    # -----------------------------
    # Achievements, analytics, chat, dashboard
    # -----------------------------

    def list_achievements(self, user_id: str) -> list:
        return self._data("GET", f"/achievements/{_segment(user_id)}")

    def unlock_achievement(self, achievement: dict) -> dict:
        return self._request("POST", "/achievements", json=achievement)

    def check_achievements(self, user_id: str) -> list:
        return self._data("POST", f"/achievements/{_segment(user_id)}/check")

    def get_analytics(self, user_id: str) -> dict:
        return self._data("GET", f"/analytics/{_segment(user_id)}")

    def send_chat_message(self, user_id: str, message: str, context: Optional[dict] = None) -> dict:
        return self._data("POST", "/chat", json={"user_id": user_id, "message": message, "context": context})

    def chat_history(self, user_id: str) -> list:
        return self._data("GET", f"/chat/{_segment(user_id)}")

    def dashboard_stats(self) -> dict:
        return self._data("GET", "/dashboard/stats")

    def dashboard_activity(self) -> list:
        return self._data("GET", "/dashboard/activity")

    def dashboard_recommended(self) -> list:
        return self._data("GET", "/dashboard/recommended")
