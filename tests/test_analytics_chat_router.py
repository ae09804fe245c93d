from academy.services.chat_service import CANNED_RESPONSES


def test_analytics_lazy_row_is_reused(client):
    first = client.get("/api/analytics/u-new")
    assert first.status_code == 200
    data = first.json()["data"]
    assert data["total_time_spent"] == 0
    assert data["algorithms_completed"] == 0
    assert data["categories_progress"] == {}

    second = client.get("/api/analytics/u-new").json()["data"]
    assert second["id"] == data["id"]


def test_analytics_follow_progress(client):
    client.post("/api/progress/u1/k-means/start")
    client.post("/api/progress/u1/k-means/sections", json={"section_id": "intro"})
    client.post("/api/progress/u1/k-means/complete")

    data = client.get("/api/analytics/u1").json()["data"]
    assert data["algorithms_completed"] == 1
    assert data["total_time_spent"] == 5
    assert data["categories_progress"] == {"Machine Learning": 100.0}
    assert data["learning_streak"] == 1


def test_chat_stores_message_and_returns_canned_reply(client):
    response = client.post(
        "/api/chat",
        json={"user_id": "u1", "message": "What is gradient descent?", "context": {"algorithm_id": "linear-regression"}},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["response"] in CANNED_RESPONSES
    assert data["context"]["algorithm_id"] == "linear-regression"
    assert data["timestamp"]

    history = client.get("/api/chat/u1").json()["data"]
    assert len(history) == 1
    assert history[0]["content"] == "What is gradient descent?"
    assert history[0]["context_algorithm_id"] == "linear-regression"


def test_chat_requires_message(client):
    response = client.post("/api/chat", json={"user_id": "u1", "message": ""})
    assert response.status_code == 422
