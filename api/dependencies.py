# api/dependencies.py
from typing import Iterator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from core.auth import SESSION_COOKIE
from core.catalog.google_books import GoogleBooksClient
from core.config import Settings
from core.errors import Unauthorized
from core.sa.models import User


def get_db(request: Request) -> Iterator[Session]:
    """Get a database session.

    This is a FastAPI dependency that opens one session per request and
    closes it when the request is complete.

    Yields:
        Session: A SQLAlchemy session
    """
    session = request.app.state.database.get_session()
    try:
        yield session
    finally:
        session.close()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> GoogleBooksClient:
    return request.app.state.catalog


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Resolve the session token on the request, or fail with 401."""
    authenticator = request.app.state.authenticator
    token = authenticator.extract_token(
        request.headers.get("Authorization"),
        request.cookies.get(SESSION_COOKIE)
    )
    user = authenticator.resolve(db, token)
    if user is None:
        raise Unauthorized()
    return user
