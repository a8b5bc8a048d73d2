# core/sa/repositories/user.py
import secrets
from typing import Optional
from datetime import datetime, timedelta
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from ..models import User, UserSession
from ..models.base import utcnow


class UserRepository:
    """Repository for managing User entities and their session tokens."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.session.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.query(User).filter(User.email == email).first()

    def create_user(self, name: str, email: str) -> User:
        """Create a new user.

        Args:
            name: Display name of the user
            email: Unique email address

        Returns:
            The created User object

        Raises:
            ValueError: If a user with the given email already exists
        """
        existing = self.get_by_email(email)
        if existing:
            raise ValueError(f"User with email '{email}' already exists")

        user = User(name=name, email=email)
        self.session.add(user)
        try:
            self.session.commit()
            return user
        except IntegrityError:
            self.session.rollback()
            raise ValueError(f"User with email '{email}' already exists")

    def create_session(self, user: User, ttl: timedelta) -> UserSession:
        """Issue a new random session token for the user."""
        user_session = UserSession(
            token=secrets.token_urlsafe(32),
            user_id=user.id,
            expires_at=utcnow() + ttl
        )
        self.session.add(user_session)
        self.session.commit()
        return user_session

    def get_session(self, token: str, now: Optional[datetime] = None) -> Optional[UserSession]:
        """Get an unexpired session by token, with its user loaded."""
        now = now or utcnow()
        return (
            self.session.query(UserSession)
            .options(joinedload(UserSession.user))
            .filter(
                UserSession.token == token,
                UserSession.expires_at > now
            )
            .first()
        )

    def revoke_session(self, token: str) -> bool:
        result = self.session.query(UserSession).filter(UserSession.token == token).delete()
        self.session.commit()
        return result > 0
