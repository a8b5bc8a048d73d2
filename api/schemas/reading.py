# api/schemas/reading.py
from datetime import datetime
from typing import Optional, List
from .common import CamelModel, PaginationMeta
from .book import ReadingBookSummary


class ReadingStatusSchema(CamelModel):
    id: str
    user_id: str
    book_id: str
    status: str
    current_page: Optional[int] = None
    progress_percentage: Optional[int] = None
    rating: Optional[int] = None
    review: Optional[str] = None
    start_date: Optional[datetime] = None
    finish_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReadingStatusWithBook(ReadingStatusSchema):
    book: Optional[ReadingBookSummary] = None


class ReadingStatusResponse(CamelModel):
    reading_status: ReadingStatusSchema
    message: str


class ReadingStatusList(CamelModel):
    reading_status: List[ReadingStatusWithBook]
    pagination: PaginationMeta
