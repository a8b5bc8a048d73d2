# core/sa/models/wishlist.py
from sqlalchemy import String, Integer, Text, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin, new_id


class WishlistEntry(Base, TimestampMixin):
    """Books a user would like to borrow, ranked by priority."""
    __tablename__ = 'wishlist_entry'

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey('user.id', ondelete='CASCADE'), nullable=False)
    book_id: Mapped[str] = mapped_column(String(64), ForeignKey('book.id', ondelete='CASCADE'), nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    user = relationship('User', back_populates='wishlist_entries')
    book = relationship('Book', back_populates='wishlist_entries')

    __table_args__ = (
        UniqueConstraint('user_id', 'book_id', name='uix_wishlist_user_book'),
        CheckConstraint('priority BETWEEN 1 AND 5', name='ck_wishlist_priority_range'),
    )
