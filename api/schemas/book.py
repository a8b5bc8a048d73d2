# api/schemas/book.py
from datetime import datetime
from typing import Optional, List
from .common import CamelModel


class BookSchema(CamelModel):
    id: str
    title: str
    authors: List[str] = []
    description: Optional[str] = None
    published_date: Optional[str] = None
    publisher: Optional[str] = None
    page_count: Optional[int] = None
    categories: Optional[List[str]] = []
    average_rating: Optional[float] = None
    ratings_count: Optional[int] = None
    thumbnail: Optional[str] = None
    language: Optional[str] = "en"
    isbn10: Optional[str] = None
    isbn13: Optional[str] = None
    preview_link: Optional[str] = None
    info_link: Optional[str] = None
    canonical_volume_link: Optional[str] = None
    is_available: bool = True
    total_copies: int = 1
    available_copies: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookSearchResponse(CamelModel):
    books: List[BookSchema]
    total_items: int
    start_index: int
    max_results: int


class BookSummary(CamelModel):
    id: str
    title: str
    authors: List[str] = []
    thumbnail: Optional[str] = None


class WishlistBookSummary(BookSummary):
    description: Optional[str] = None
    is_available: bool = True
    available_copies: int = 1


class ReadingBookSummary(BookSummary):
    page_count: Optional[int] = None
