# core/sa/models/__init__.py
from .base import Base, TimestampMixin
from .user import User, UserSession
from .book import Book
from .loan import Loan, LoanStatus
from .wishlist import WishlistEntry
from .reading import ReadingStatus, ReadingState

__all__ = [
    'Base',
    'TimestampMixin',
    'User',
    'UserSession',
    'Book',
    'Loan',
    'LoanStatus',
    'WishlistEntry',
    'ReadingStatus',
    'ReadingState'
]
