# core/sa/repositories/__init__.py
from .book import BookRepository
from .loan import LoanRepository
from .wishlist import WishlistRepository
from .reading import ReadingStatusRepository
from .user import UserRepository

__all__ = [
    'BookRepository',
    'LoanRepository',
    'WishlistRepository',
    'ReadingStatusRepository',
    'UserRepository'
]
