"""
Shared pytest fixtures.

Uses a throwaway SQLite file so no external database is required for tests.
Every test starts from empty collections and a planner at the year view.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.db.base import Base, get_db
from app.main import app
from app.models.collection import StoredCollection
from app.services.reward import get_reward_client

SQLITE_URL = "sqlite:///./test_dashboard.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeRewardClient:
    """Stands in for the text-generation service; records every call."""

    def __init__(self, answer: str = "**Primer**\n\nA film about causality."):
        self.answer = answer
        self.calls: list[tuple[str, str]] = []

    async def recommend(self, title: str, author: str) -> str:
        self.calls.append((title, author))
        return self.answer


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_state():
    db = TestingSessionLocal()
    try:
        db.query(StoredCollection).delete()
        db.commit()
    finally:
        db.close()
    app.state.navigator.reset()
    yield


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def reward_client():
    return FakeRewardClient()


@pytest.fixture()
def client(reward_client):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_reward_client] = lambda: reward_client
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
