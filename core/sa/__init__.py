# core/sa/__init__.py
from .database import Database
from .models import (
    Base, User, UserSession, Book, Loan, LoanStatus,
    WishlistEntry, ReadingStatus, ReadingState
)

__all__ = [
    'Database',
    'Base',
    'User',
    'UserSession',
    'Book',
    'Loan',
    'LoanStatus',
    'WishlistEntry',
    'ReadingStatus',
    'ReadingState'
]
