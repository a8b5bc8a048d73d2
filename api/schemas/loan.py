# api/schemas/loan.py
from datetime import datetime
from typing import Optional, List
from .common import CamelModel, PaginationMeta
from .book import BookSummary


class LoanSchema(CamelModel):
    id: str
    user_id: str
    book_id: str
    loan_date: datetime
    due_date: datetime
    return_date: Optional[datetime] = None
    status: str
    renewal_count: int = 0
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoanWithBook(LoanSchema):
    book: Optional[BookSummary] = None


class LoanResponse(CamelModel):
    loan: LoanSchema
    message: str


class LoanList(CamelModel):
    loans: List[LoanWithBook]
    pagination: PaginationMeta


class LoanHistory(CamelModel):
    history: List[LoanWithBook]
    pagination: PaginationMeta
