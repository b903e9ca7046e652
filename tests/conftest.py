"""Pytest configuration and fixtures for test suite."""

import os

import pytest

# Set test environment BEFORE any application imports: local store, no Telegram
os.environ["DATABASE_URL"] = ""
os.environ["TELEGRAM_BOT_TOKEN"] = ""
os.environ["TELEGRAM_ADMIN_CHAT_ID"] = ""
os.environ["TELEGRAM_DEV_CHAT_ID"] = ""
os.environ["ENVIRONMENT"] = "test"


@pytest.fixture
def local_store(tmp_path):
    """LocalStore backed by a JSON file in a temporary directory."""
    from financekeem.storage import LocalStore

    return LocalStore(tmp_path / "data" / "store.json")


@pytest.fixture
def sql_store():
    """SqlStore on a fresh in-memory SQLite database."""
    from financekeem.database import create_db_engine, create_session_factory, init_db
    from financekeem.storage import SqlStore

    engine = create_db_engine("sqlite://")
    init_db(bind=engine)
    yield SqlStore(create_session_factory(engine))
    engine.dispose()


@pytest.fixture(params=["local", "sql"])
def store(request):
    """Each test using this fixture runs against both backends."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(store):
    """TestClient with the storage dependency pointed at the test store."""
    from fastapi.testclient import TestClient

    from financekeem.main import app
    from financekeem.storage import get_store

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def future_weekday():
    """A Monday at least a week from today, as YYYY-MM-DD."""
    from datetime import date, timedelta

    day = date.today() + timedelta(days=7)
    while day.weekday() != 0:
        day += timedelta(days=1)
    return day.strftime("%Y-%m-%d")


@pytest.fixture
def best_answers():
    """Assessment answer sheet with the top option for every question."""
    from financekeem.services.quiz import QUIZ_QUESTIONS

    return {q["id"]: q["options"][0]["value"] for q in QUIZ_QUESTIONS}


@pytest.fixture
def worst_answers():
    """Assessment answer sheet with the bottom option for every question."""
    from financekeem.services.quiz import QUIZ_QUESTIONS

    return {q["id"]: q["options"][-1]["value"] for q in QUIZ_QUESTIONS}
