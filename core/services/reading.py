# core/services/reading.py
import logging
import math
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import BookNotFound, ReadingStatusNotFound
from core.pagination import Page
from core.sa.models import ReadingStatus, ReadingState
from core.sa.models.base import utcnow
from core.sa.repositories.book import BookRepository
from core.sa.repositories.reading import ReadingStatusRepository

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def derive_progress(
    page_count: Optional[int],
    current_page: Optional[int] = None,
    progress_percentage: Optional[int] = None
) -> Dict[str, int]:
    """Fill in the reciprocal of whichever progress measure was supplied.

    current_page wins when both are given and is capped at the page count,
    so the percentage never exceeds 100. Without a positive page count only
    the supplied value is returned.
    """
    fields: Dict[str, int] = {}
    known_pages = bool(page_count and page_count > 0)
    if current_page is not None:
        if known_pages:
            current_page = min(current_page, page_count)
            fields["progress_percentage"] = round_half_up(current_page / page_count * 100)
        fields["current_page"] = current_page
    elif progress_percentage is not None:
        fields["progress_percentage"] = progress_percentage
        if known_pages:
            fields["current_page"] = round_half_up(progress_percentage / 100 * page_count)
    return fields


class ReadingTracker:
    """Per-user reading status and progress for stored books."""

    def __init__(self, session: Session):
        self.session = session
        self.books = BookRepository(session)
        self.statuses = ReadingStatusRepository(session)

    def upsert(
        self,
        user_id: str,
        book_id: str,
        status: str,
        current_page: Optional[int] = None,
        progress_percentage: Optional[int] = None,
        rating: Optional[int] = None,
        review: Optional[str] = None,
        start_date: Optional[datetime] = None,
        finish_date: Optional[datetime] = None
    ) -> Tuple[ReadingStatus, bool]:
        """Create or update the user's reading status for a book.

        Returns:
            Tuple of (reading status, True if it was created)

        Raises:
            BookNotFound: If the book is not stored locally
        """
        book = self.books.get_by_id(book_id)
        if book is None:
            raise BookNotFound(book_id)

        now = utcnow()
        fields: Dict[str, Any] = {"status": status}
        fields.update(derive_progress(book.page_count, current_page, progress_percentage))
        if rating is not None:
            fields["rating"] = rating
        if review is not None:
            fields["review"] = review
        if start_date is not None:
            fields["start_date"] = start_date
        if finish_date is not None:
            fields["finish_date"] = finish_date

        existing = self.statuses.get_status(user_id, book_id)
        if existing is None:
            created = dict(fields)
            if status == ReadingState.CURRENTLY_READING.value:
                created["start_date"] = start_date or now
            if status == ReadingState.READ.value:
                created["finish_date"] = finish_date or now
            try:
                return self.statuses.create_status(user_id, book_id, created), True
            except IntegrityError:
                # Another request created the row first; update it instead.
                self.session.rollback()
                logger.info("Reading status for %s/%s created concurrently", user_id, book_id)
                existing = self.statuses.get_status(user_id, book_id)
                if existing is None:
                    raise

        if status == ReadingState.CURRENTLY_READING.value and existing.start_date is None:
            fields["start_date"] = start_date or now
        if status == ReadingState.READ.value and existing.finish_date is None:
            fields["finish_date"] = finish_date or now
        fields["updated_at"] = now
        return self.statuses.update_status(existing, fields), False

    def get(self, user_id: str, book_id: str) -> ReadingStatus:
        reading_status = self.statuses.get_status(user_id, book_id)
        if reading_status is None:
            raise ReadingStatusNotFound(book_id)
        return reading_status

    def list(self, user_id: str, page: int = 1, limit: int = 20) -> Page[ReadingStatus]:
        result = Page(page=page, limit=limit)
        result.items, result.total = self.statuses.list_for_user(user_id, limit=limit, offset=result.offset)
        return result

    def remove(self, user_id: str, book_id: str) -> None:
        if not self.statuses.delete_status(user_id, book_id):
            raise ReadingStatusNotFound(book_id)
