# core/sa/models/book.py
from sqlalchemy import String, Integer, Float, Boolean, Text, JSON, CheckConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin


class Book(Base, TimestampMixin):
    """A catalog volume known locally, with its lending stock."""
    __tablename__ = 'book'

    # Google Books volume ID
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    authors: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    published_date: Mapped[str | None] = mapped_column(String(32), nullable=True)
    publisher: Mapped[str | None] = mapped_column(String, nullable=True)
    page_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    categories: Mapped[list | None] = mapped_column(JSON, nullable=True)
    average_rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    ratings_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    language: Mapped[str | None] = mapped_column(String(16), nullable=True, default="en")
    isbn10: Mapped[str | None] = mapped_column(String(10), nullable=True)
    isbn13: Mapped[str | None] = mapped_column(String(13), nullable=True)
    preview_link: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    info_link: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    canonical_volume_link: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Lending stock
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    total_copies: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    available_copies: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Relationships
    loans = relationship('Loan', back_populates='book')
    wishlist_entries = relationship('WishlistEntry', back_populates='book')
    reading_statuses = relationship('ReadingStatus', back_populates='book')

    __table_args__ = (
        CheckConstraint('available_copies >= 0', name='ck_book_available_copies_non_negative'),
        CheckConstraint('available_copies <= total_copies', name='ck_book_available_within_total'),
    )
