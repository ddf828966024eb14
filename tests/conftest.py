# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.session_manager import build_session_manager
from core.state_store import StateStore
from main import create_app
from services.assistant import AssistantClient
from services.seed_data import build_entity_store


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime = datetime(2024, 2, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(GEMINI_API_KEY=None, STATE_FILE=None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock):
    return build_entity_store(clock)


@pytest.fixture
def state() -> StateStore:
    return StateStore()


@pytest.fixture
def manager(store, state, test_settings, clock):
    """Console kernel without a scheduler: expiry is checked against the fake clock."""
    return build_session_manager(
        store,
        state=state,
        config=test_settings,
        clock=clock,
        rng=random.Random(7),
    )


@pytest.fixture
def login(manager):
    """login("superadmin") signs in with the seeded credentials for that account."""
    credentials = {
        "superadmin": ("superadmin@university.edu", "SuperSecure123!"),
        "dormadmin": ("dormadmin1@university.edu", "DormAdmin123!"),
        "staff": ("maint1@university.edu", "Maintenance123!"),
        "security": ("security1@university.edu", "GateAccess123!"),
        "student": ("s1001@university.edu", "StudentTemp123!"),
        "student2": ("s1002@university.edu", "StudentTemp123!"),
    }

    def _login(who: str):
        email, secret = credentials[who]
        return manager.authenticate(email, secret)

    return _login


@pytest.fixture(scope="function")
def app(test_settings):
    """Create a test FastAPI application instance."""
    return create_app(
        config=test_settings,
        store=build_entity_store(),
        state=StateStore(),
        assistant=AssistantClient(test_settings),
    )


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
