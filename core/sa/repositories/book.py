# core/sa/repositories/book.py
from typing import Optional, List, Dict, Any, Iterable
from sqlalchemy import update
from sqlalchemy.orm import Session
from ..models import Book


class BookRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, book_id: str) -> Optional[Book]:
        """Get a book by its catalog volume ID"""
        return self.session.query(Book).filter(Book.id == book_id).first()

    def get_many(self, book_ids: Iterable[str]) -> Dict[str, Book]:
        """Load every locally known book among ``book_ids`` in one query.

        Returns:
            Mapping of book ID to Book for the IDs that exist locally
        """
        ids = list(book_ids)
        if not ids:
            return {}
        books = self.session.query(Book).filter(Book.id.in_(ids)).all()
        return {book.id: book for book in books}

    def add_book(self, data: Dict[str, Any]) -> Book:
        """Stage a new book row built from a mapped catalog record.

        The caller owns the transaction.
        """
        columns = {column.key for column in Book.__table__.columns}
        book = Book(**{key: value for key, value in data.items() if key in columns})
        self.session.add(book)
        self.session.flush()
        return book

    def decrement_available_copies(self, book_id: str) -> bool:
        """Take one copy out of stock if any is left.

        A single conditional UPDATE so that two requests racing for the last
        copy cannot both succeed. The caller owns the transaction.

        Returns:
            True if a copy was taken, False if none was available
        """
        stmt = (
            update(Book)
            .where(Book.id == book_id, Book.available_copies > 0)
            .values(
                available_copies=Book.available_copies - 1,
                is_available=(Book.available_copies - 1) > 0,
            )
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return result.rowcount == 1

    def increment_available_copies(self, book_id: str) -> bool:
        """Put one copy back in stock, never exceeding total copies.

        Returns:
            True if the counter moved, False if the book is missing or already full
        """
        stmt = (
            update(Book)
            .where(Book.id == book_id, Book.available_copies < Book.total_copies)
            .values(
                available_copies=Book.available_copies + 1,
                is_available=(Book.available_copies + 1) > 0,
            )
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return result.rowcount == 1

    def set_total_copies(self, book_id: str, total_copies: int) -> Optional[Book]:
        """Change the stock of a book, moving available copies by the same delta.

        Args:
            book_id: The catalog volume ID
            total_copies: New number of owned copies

        Returns:
            The updated Book, or None if the book is not known locally

        Raises:
            ValueError: If total_copies is negative
        """
        if total_copies < 0:
            raise ValueError("total_copies must be >= 0")

        book = self.get_by_id(book_id)
        if not book:
            return None

        delta = total_copies - book.total_copies
        book.total_copies = total_copies
        book.available_copies = min(total_copies, max(0, book.available_copies + delta))
        book.is_available = book.available_copies > 0
        self.session.commit()
        return book
