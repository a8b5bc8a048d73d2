# core/services/book_store.py
import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.catalog.google_books import GoogleBooksClient, map_volume
from core.errors import BookNotFound
from core.sa.models import Book
from core.sa.repositories.book import BookRepository

logger = logging.getLogger(__name__)

AVAILABILITY_FIELDS = ("is_available", "total_copies", "available_copies")


def book_to_dict(book: Book) -> Dict[str, Any]:
    """Full internal book record for a stored row."""
    return {column.key: getattr(book, column.key) for column in Book.__table__.columns}


class BookStore:
    """Catalog lookups merged with the locally stored lending stock.

    The catalog owns descriptive metadata; the local row owns availability.
    """

    def __init__(self, session: Session, catalog: GoogleBooksClient):
        self.session = session
        self.catalog = catalog
        self.books = BookRepository(session)

    def search(self, params: Dict[str, Any]) -> Tuple[List[Dict[str, Any]], int]:
        """Search the catalog and overlay local availability.

        Returns:
            Tuple of (merged book records, catalog total item count)
        """
        result = self.catalog.search(params)
        mapped = [map_volume(volume) for volume in result.items]
        if not mapped:
            return [], 0

        local = self.books.get_many(book["id"] for book in mapped)
        for book in mapped:
            existing = local.get(book["id"])
            if existing is not None:
                for field in AVAILABILITY_FIELDS:
                    book[field] = getattr(existing, field)
        return mapped, result.total_items

    def get_by_id(self, book_id: str) -> Dict[str, Any]:
        """Get a book, caching catalog-only books locally on first sight.

        Raises:
            BookNotFound: If neither the store nor the catalog knows the ID
            CatalogUnavailable: If the catalog had to be asked and failed
        """
        existing = self.books.get_by_id(book_id)
        if existing is not None:
            return book_to_dict(existing)

        volume = self.catalog.get_by_id(book_id)
        if volume is None:
            raise BookNotFound(book_id)

        book = map_volume(volume)
        self._save_best_effort(book)
        return book

    def _save_best_effort(self, book: Dict[str, Any]) -> None:
        # A concurrent request may have inserted the same ID first; the row
        # existing is all that matters.
        try:
            self.books.add_book(book)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.warning("Failed to save book %s to database: %s", book["id"], e)
