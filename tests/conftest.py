# tests/conftest.py
import sys
import pytest
from pathlib import Path
from datetime import timedelta
from sqlalchemy.orm import Session
from sqlalchemy.sql import text

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from core.sa.database import Database
from core.sa.models import Base, Book, User
from core.sa.repositories.user import UserRepository
from tests.utils import FakeCatalog, make_volume


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_library.db")


@pytest.fixture(scope="session")
def database_url(test_db_path):
    return f"sqlite:///{test_db_path}"


@pytest.fixture(scope="session")
def database(database_url):
    """Create a test database instance"""
    db = Database(database_url)

    Base.metadata.drop_all(db.engine)
    Base.metadata.create_all(db.engine)

    yield db

    db.dispose()


@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def cleanup_db(db_session):
    """Clean up database tables before each test"""
    # Delete all data from tables in reverse order of dependencies
    db_session.execute(text("DELETE FROM loan"))
    db_session.execute(text("DELETE FROM wishlist_entry"))
    db_session.execute(text("DELETE FROM reading_status"))
    db_session.execute(text("DELETE FROM user_session"))
    db_session.execute(text("DELETE FROM book"))
    db_session.execute(text("DELETE FROM user"))
    db_session.commit()
    yield
    db_session.rollback()


@pytest.fixture
def fake_catalog():
    return FakeCatalog([make_volume("vol_dune")])


@pytest.fixture
def sample_user(db_session):
    """Create a sample user for testing."""
    user = User(name="Test User", email="test@example.com")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def other_user(db_session):
    user = User(name="Other User", email="other@example.com")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def sample_book(db_session):
    """Create a stored book with a single copy."""
    book = Book(
        id="vol_dune",
        title="Dune",
        authors=["Frank Herbert"],
        description="Desert planet",
        page_count=300,
        categories=["Fiction"],
        is_available=True,
        total_copies=1,
        available_copies=1
    )
    db_session.add(book)
    db_session.commit()
    return book


@pytest.fixture
def user_token(db_session, sample_user):
    """A valid bearer token for sample_user."""
    user_session = UserRepository(db_session).create_session(sample_user, timedelta(days=1))
    return user_session.token


@pytest.fixture
def auth_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}
