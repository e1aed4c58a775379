"""
Shared pytest fixtures.

Uses a SQLite database file so no Postgres is required for tests.
Every test gets its own habit, so score series never bleed across tests.
"""
import os
import uuid

SQLITE_URL = "sqlite:///./test_habitscore.db"
os.environ.setdefault("DATABASE_URL", SQLITE_URL)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from habitscore.db.base import Base, get_db  # noqa: E402
from habitscore.main import app  # noqa: E402
from habitscore.models.habit import Habit  # noqa: E402
from habitscore.models.repetition import Repetition  # noqa: E402

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def make_habit(db):
    def _make(freq_num: int = 1, freq_den: int = 1) -> Habit:
        habit = Habit(name=f"habit-{uuid.uuid4().hex[:8]}", freq_num=freq_num, freq_den=freq_den)
        db.add(habit)
        db.commit()
        db.refresh(habit)
        return habit
    return _make


@pytest.fixture()
def habit(make_habit):
    return make_habit()


@pytest.fixture()
def check(db):
    """Insert raw check-ins directly, bypassing score invalidation."""
    def _check(habit: Habit, *timestamps: int) -> None:
        for ts in timestamps:
            db.add(Repetition(habit_id=habit.id, timestamp=ts))
        db.commit()
    return _check
