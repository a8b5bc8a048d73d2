# core/sa/repositories/reading.py
from typing import Optional, List, Tuple, Dict, Any
from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload
from ..models import ReadingStatus


class ReadingStatusRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_status(self, user_id: str, book_id: str) -> Optional[ReadingStatus]:
        """Get a user's reading status for a book"""
        return (
            self.session.query(ReadingStatus)
            .options(joinedload(ReadingStatus.book))
            .filter(
                ReadingStatus.user_id == user_id,
                ReadingStatus.book_id == book_id
            )
            .first()
        )

    def create_status(self, user_id: str, book_id: str, fields: Dict[str, Any]) -> ReadingStatus:
        reading_status = ReadingStatus(user_id=user_id, book_id=book_id, **fields)
        self.session.add(reading_status)
        self.session.commit()
        return reading_status

    def update_status(self, reading_status: ReadingStatus, fields: Dict[str, Any]) -> ReadingStatus:
        for key, value in fields.items():
            setattr(reading_status, key, value)
        self.session.commit()
        return reading_status

    def delete_status(self, user_id: str, book_id: str) -> bool:
        """Delete a reading status.

        Returns:
            True if the status was deleted, False if not found
        """
        result = (
            self.session.query(ReadingStatus)
            .filter(
                ReadingStatus.user_id == user_id,
                ReadingStatus.book_id == book_id
            )
            .delete()
        )
        self.session.commit()
        return result > 0

    def list_for_user(self, user_id: str, limit: int = 20, offset: int = 0) -> Tuple[List[ReadingStatus], int]:
        """Get a page of a user's reading statuses, most recently updated first."""
        base_query = self.session.query(ReadingStatus).filter(ReadingStatus.user_id == user_id)
        total = base_query.count()
        statuses = (
            base_query
            .options(joinedload(ReadingStatus.book))
            .order_by(desc(ReadingStatus.updated_at))
            .offset(offset)
            .limit(limit)
            .all()
        )
        return statuses, total
