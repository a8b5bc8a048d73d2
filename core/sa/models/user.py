# core/sa/models/user.py
from datetime import datetime
from sqlalchemy import String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin, new_id, utcnow


class User(Base, TimestampMixin):
    __tablename__ = 'user'

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    # Relationships
    sessions = relationship('UserSession', back_populates='user', cascade='all, delete-orphan')
    loans = relationship('Loan', back_populates='user')
    wishlist_entries = relationship('WishlistEntry', back_populates='user')
    reading_statuses = relationship('ReadingStatus', back_populates='user')


class UserSession(Base):
    """Bearer token issued to a user."""
    __tablename__ = 'user_session'

    token: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey('user.id', ondelete='CASCADE'), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    user = relationship('User', back_populates='sessions')

    __table_args__ = (
        Index('idx_user_session_user_id', 'user_id'),
    )
