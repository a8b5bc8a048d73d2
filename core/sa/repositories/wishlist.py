# core/sa/repositories/wishlist.py
from typing import Optional, List, Tuple
from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from ..models import WishlistEntry


class WishlistRepository:
    """Repository for managing WishlistEntry entities."""

    def __init__(self, session: Session):
        self.session = session

    def get_entry(self, user_id: str, book_id: str) -> Optional[WishlistEntry]:
        return (
            self.session.query(WishlistEntry)
            .filter(
                WishlistEntry.user_id == user_id,
                WishlistEntry.book_id == book_id
            )
            .first()
        )

    def create_entry(
        self,
        user_id: str,
        book_id: str,
        priority: int = 1,
        notes: Optional[str] = None
    ) -> WishlistEntry:
        """Create a new wishlist entry.

        Raises:
            ValueError: If the user already has this book on their wishlist
        """
        entry = WishlistEntry(
            user_id=user_id,
            book_id=book_id,
            priority=priority,
            notes=notes
        )
        self.session.add(entry)
        try:
            self.session.commit()
            return entry
        except IntegrityError:
            self.session.rollback()
            raise ValueError(f"Book '{book_id}' is already on the wishlist of user '{user_id}'")

    def update_entry(
        self,
        user_id: str,
        book_id: str,
        priority: Optional[int] = None,
        notes: Optional[str] = None
    ) -> Optional[WishlistEntry]:
        """Update the supplied fields of a wishlist entry.

        Returns:
            The updated entry if found, None otherwise
        """
        entry = self.get_entry(user_id, book_id)
        if not entry:
            return None

        if priority is not None:
            entry.priority = priority
        if notes is not None:
            entry.notes = notes

        self.session.commit()
        return entry

    def delete_entry(self, user_id: str, book_id: str) -> bool:
        result = (
            self.session.query(WishlistEntry)
            .filter(
                WishlistEntry.user_id == user_id,
                WishlistEntry.book_id == book_id
            )
            .delete()
        )
        self.session.commit()
        return result > 0

    def list_for_user(self, user_id: str, limit: int = 20, offset: int = 0) -> Tuple[List[WishlistEntry], int]:
        """Get a page of a user's wishlist, highest priority first, then newest."""
        base_query = self.session.query(WishlistEntry).filter(WishlistEntry.user_id == user_id)
        total = base_query.count()
        entries = (
            base_query
            .options(joinedload(WishlistEntry.book))
            .order_by(desc(WishlistEntry.priority), desc(WishlistEntry.created_at))
            .offset(offset)
            .limit(limit)
            .all()
        )
        return entries, total
