"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS", "0")

from academy.core.config import Settings
from academy.db.session import Database
from academy.main import create_app


@pytest.fixture()
def database():
    database = Database("sqlite:///:memory:")
    database.create_all()
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture()
def db_session(database) -> Session:
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        ENVIRONMENT="test",
        RATE_LIMIT_ENABLED=False,
        FRONTEND_URL="http://frontend.test",
    )


@pytest.fixture()
def client(database, test_settings):
    app = create_app(database=database, config=test_settings)
    with TestClient(app) as test_client:
        yield test_client
