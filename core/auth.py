# core/auth.py
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from core.sa.models import User, UserSession
from core.sa.repositories.user import UserRepository

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session_token"


class SessionAuthenticator:
    """Resolves bearer tokens and session cookies to users.

    Built once when the application starts and shared by every request.
    """

    def __init__(self, ttl_days: int = 30):
        self.ttl = timedelta(days=ttl_days)

    @staticmethod
    def extract_token(authorization: Optional[str], cookie: Optional[str]) -> Optional[str]:
        """Pick the token from an ``Authorization: Bearer`` header, else the cookie."""
        if authorization:
            scheme, _, credentials = authorization.partition(" ")
            if scheme.lower() == "bearer" and credentials.strip():
                return credentials.strip()
        if cookie:
            return cookie
        return None

    def resolve(self, session: Session, token: Optional[str]) -> Optional[User]:
        if not token:
            return None
        user_session = UserRepository(session).get_session(token)
        if user_session is None:
            logger.debug("Rejected unknown or expired session token")
            return None
        return user_session.user

    def issue_token(self, session: Session, user: User, ttl: Optional[timedelta] = None) -> UserSession:
        return UserRepository(session).create_session(user, ttl or self.ttl)
