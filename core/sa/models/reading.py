# core/sa/models/reading.py
from datetime import datetime
from enum import Enum
from sqlalchemy import String, Integer, Text, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin, new_id


class ReadingState(str, Enum):
    WANT_TO_READ = "want_to_read"
    CURRENTLY_READING = "currently_reading"
    READ = "read"
    DID_NOT_FINISH = "did_not_finish"


class ReadingStatus(Base, TimestampMixin):
    __tablename__ = 'reading_status'

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey('user.id', ondelete='CASCADE'), nullable=False)
    book_id: Mapped[str] = mapped_column(String(64), ForeignKey('book.id', ondelete='CASCADE'), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    current_page: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)
    progress_percentage: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    review: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    finish_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship('User', back_populates='reading_statuses')
    book = relationship('Book', back_populates='reading_statuses')

    __table_args__ = (
        UniqueConstraint('user_id', 'book_id', name='uix_reading_status_user_book'),
        CheckConstraint('progress_percentage BETWEEN 0 AND 100', name='ck_reading_status_progress_range'),
    )
