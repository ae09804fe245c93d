import pytest
from fastapi.testclient import TestClient

from academy.core.config import Settings
from academy.main import SECURITY_HEADERS, create_app


def _settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite:///:memory:",
        "ENVIRONMENT": "test",
        "RATE_LIMIT_ENABLED": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def limited_client(database):
    app = create_app(database=database, config=_settings(RATE_LIMIT="2/minute", RATE_LIMIT_ENABLED=True))
    with TestClient(app) as test_client:
        yield test_client


def test_rate_limit_rejects_third_request(limited_client):
    codes = [limited_client.get("/api/algorithms").status_code for _ in range(3)]
    assert codes == [200, 200, 429]

    response = limited_client.get("/api/algorithms")
    assert response.status_code == 429
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Too many requests from this IP, please try again later."


def test_rate_limit_is_shared_across_api_routes(limited_client):
    assert limited_client.get("/api/health").status_code == 200
    assert limited_client.post("/api/progress/u1/k-means/start").status_code == 200
    assert limited_client.get("/api/progress/u1").status_code == 429


def test_rate_limit_leaves_root_alone(limited_client):
    for _ in range(3):
        assert limited_client.get("/").status_code == 200


def test_rate_limit_disabled(client):
    codes = {client.get("/api/algorithms").status_code for _ in range(5)}
    assert codes == {200}


def test_rate_limit_counters_are_per_app(database):
    config = _settings(RATE_LIMIT="1/minute", RATE_LIMIT_ENABLED=True)
    with TestClient(create_app(database=database, config=config)) as first:
        assert first.get("/api/health").status_code == 200
        assert first.get("/api/health").status_code == 429
    with TestClient(create_app(database=database, config=config)) as second:
        assert second.get("/api/health").status_code == 200


def test_security_headers_on_every_response(client):
    for path in ("/api/health", "/api/does-not-exist"):
        response = client.get(path)
        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value


def test_large_responses_are_gzipped(database):
    app = create_app(database=database, config=_settings(GZIP_MINIMUM_SIZE=100))
    with TestClient(app) as test_client:
        response = test_client.get("/api/algorithms", headers={"Accept-Encoding": "gzip"})
        assert response.status_code == 200
        assert response.headers["content-encoding"] == "gzip"
        assert response.json()["success"] is True

        small = test_client.get("/api/connection-status", headers={"Accept-Encoding": "identity"})
        assert "content-encoding" not in small.headers


def test_health_reports_configured_version(database):
    app = create_app(database=database, config=_settings(VERSION="9.9.9"))
    with TestClient(app) as test_client:
        assert test_client.get("/api/health").json()["version"] == "9.9.9"
