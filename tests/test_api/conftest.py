# tests/test_api/conftest.py
import pytest
from fastapi.testclient import TestClient
from api.main import create_app
from core.config import Settings


@pytest.fixture
def settings(database_url):
    return Settings(
        database_url=database_url,
        google_books_api_key=None,
        cors_origins=["http://localhost:5173"],
        default_loan_days=14,
        session_ttl_days=30,
        log_level="WARNING"
    )


@pytest.fixture
def app(settings, database, fake_catalog):
    return create_app(settings=settings, database=database, catalog=fake_catalog)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
