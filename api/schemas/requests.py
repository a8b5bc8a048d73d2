# api/schemas/requests.py
from datetime import datetime
from typing import Optional, Literal
from pydantic import Field, model_validator
from .common import CamelModel


class BookSearchParams(CamelModel):
    q: Optional[str] = None
    intitle: Optional[str] = None
    inauthor: Optional[str] = None
    inpublisher: Optional[str] = None
    subject: Optional[str] = None
    isbn: Optional[str] = None
    start_index: int = Field(default=0, ge=0)
    max_results: int = Field(default=20, ge=1, le=40)
    order_by: Literal["relevance", "newest"] = "relevance"
    print_type: Literal["all", "books", "magazines"] = "books"
    filter: Optional[Literal["partial", "full", "free-ebooks", "paid-ebooks", "ebooks"]] = None
    lang_restrict: Optional[str] = None

    @model_validator(mode="after")
    def require_search_term(self):
        if not any((self.q, self.intitle, self.inauthor, self.inpublisher, self.subject, self.isbn)):
            raise ValueError("At least one search term is required")
        return self

    def to_catalog_params(self) -> dict:
        """Parameters keyed by the catalog's own (camelCase) names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Pagination(CamelModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class LoanFilters(Pagination):
    status: Optional[Literal["active", "returned", "overdue"]] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class CreateLoanRequest(CamelModel):
    book_id: str = Field(min_length=1)
    due_date: Optional[datetime] = None


class ReturnLoanRequest(CamelModel):
    notes: Optional[str] = None


class AddWishlistRequest(CamelModel):
    book_id: str = Field(min_length=1)
    priority: int = Field(default=1, ge=1, le=5)
    notes: Optional[str] = None


class UpdateWishlistRequest(CamelModel):
    priority: Optional[int] = Field(default=None, ge=1, le=5)
    notes: Optional[str] = None


class UpdateReadingStatusRequest(CamelModel):
    status: Literal["want_to_read", "currently_reading", "read", "did_not_finish"]
    current_page: Optional[int] = Field(default=None, ge=0)
    progress_percentage: Optional[int] = Field(default=None, ge=0, le=100)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    review: Optional[str] = None
    start_date: Optional[datetime] = None
    finish_date: Optional[datetime] = None
