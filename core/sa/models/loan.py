# core/sa/models/loan.py
from datetime import datetime
from enum import Enum
from sqlalchemy import String, Integer, Text, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin, new_id, utcnow


class LoanStatus(str, Enum):
    ACTIVE = "active"
    RETURNED = "returned"
    # Declared for the data model; nothing in this service sets it
    OVERDUE = "overdue"


class Loan(Base, TimestampMixin):
    __tablename__ = 'loan'

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey('user.id', ondelete='CASCADE'), nullable=False)
    book_id: Mapped[str] = mapped_column(String(64), ForeignKey('book.id', ondelete='CASCADE'), nullable=False)
    loan_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    return_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=LoanStatus.ACTIVE.value)
    renewal_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    user = relationship('User', back_populates='loans')
    book = relationship('Book', back_populates='loans')

    __table_args__ = (
        Index('idx_loan_user_status', 'user_id', 'status'),
        Index('idx_loan_book_id', 'book_id'),
        # At most one active loan per user and book
        Index(
            'uix_loan_user_book_active', 'user_id', 'book_id', unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )
