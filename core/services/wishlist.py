# core/services/wishlist.py
from typing import Optional

from sqlalchemy.orm import Session

from core.errors import BookNotFound, DuplicateWishlistEntry, WishlistEntryNotFound
from core.pagination import Page
from core.sa.models import WishlistEntry
from core.sa.repositories.book import BookRepository
from core.sa.repositories.wishlist import WishlistRepository


class WishlistLedger:
    def __init__(self, session: Session):
        self.session = session
        self.books = BookRepository(session)
        self.entries = WishlistRepository(session)

    def add(self, user_id: str, book_id: str, priority: int = 1, notes: Optional[str] = None) -> WishlistEntry:
        if self.books.get_by_id(book_id) is None:
            raise BookNotFound(book_id)
        if self.entries.get_entry(user_id, book_id) is not None:
            raise DuplicateWishlistEntry(book_id)
        try:
            return self.entries.create_entry(user_id, book_id, priority=priority, notes=notes)
        except ValueError:
            # Lost a race against an identical request
            raise DuplicateWishlistEntry(book_id)

    def update(
        self,
        user_id: str,
        book_id: str,
        priority: Optional[int] = None,
        notes: Optional[str] = None
    ) -> WishlistEntry:
        entry = self.entries.update_entry(user_id, book_id, priority=priority, notes=notes)
        if entry is None:
            raise WishlistEntryNotFound(book_id)
        return entry

    def remove(self, user_id: str, book_id: str) -> None:
        if not self.entries.delete_entry(user_id, book_id):
            raise WishlistEntryNotFound(book_id)

    def list(self, user_id: str, page: int = 1, limit: int = 20) -> Page[WishlistEntry]:
        """Get a page of the wishlist, highest priority first."""
        result = Page(page=page, limit=limit)
        result.items, result.total = self.entries.list_for_user(user_id, limit=limit, offset=result.offset)
        return result
