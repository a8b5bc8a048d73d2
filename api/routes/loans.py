# api/routes/loans.py

from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_current_user, get_settings
from api.schemas.common import PaginationMeta
from api.schemas.loan import LoanSchema, LoanWithBook, LoanResponse, LoanList, LoanHistory
from api.schemas.requests import CreateLoanRequest, ReturnLoanRequest, LoanFilters
from api.validation import validate
from core.config import Settings
from core.sa.models import User
from core.services.lending import LendingLedger

router = APIRouter(prefix="/loans", tags=["loans"])


def _loan_filters(request: Request) -> dict:
    filters = validate(LoanFilters, request.query_params).unwrap()
    return filters.model_dump()


@router.get("", response_model=LoanList)
def list_loans(
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    Get a paginated list of the current user's loans, newest first.

    Query: page, limit, status (active|returned|overdue), startDate, endDate.
    """
    page = LendingLedger(db).list_loans(user.id, **_loan_filters(request))
    return LoanList(
        loans=[LoanWithBook.model_validate(loan) for loan in page.items],
        pagination=PaginationMeta.from_page(page),
    )


@router.post("", response_model=LoanResponse)
def create_loan(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings)
):
    """Borrow a copy of a stored book. Body: {bookId, dueDate?}."""
    loan_request = validate(CreateLoanRequest, payload).unwrap()
    ledger = LendingLedger(db, default_loan_days=settings.default_loan_days)
    loan = ledger.create_loan(user.id, loan_request.book_id, loan_request.due_date)
    return LoanResponse(loan=LoanSchema.model_validate(loan), message="Loan created successfully")


@router.patch("/{loan_id}/return", response_model=LoanResponse)
def return_loan(
    loan_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Return an active loan. Body: {notes?}."""
    return_request = validate(ReturnLoanRequest, payload).unwrap()
    loan = LendingLedger(db).return_loan(user.id, loan_id, return_request.notes)
    return LoanResponse(loan=LoanSchema.model_validate(loan), message="Book returned successfully")


@router.get("/history", response_model=LoanHistory)
def loan_history(
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Same filters as the loan listing, returned under ``history``."""
    page = LendingLedger(db).history(user.id, **_loan_filters(request))
    return LoanHistory(
        history=[LoanWithBook.model_validate(loan) for loan in page.items],
        pagination=PaginationMeta.from_page(page),
    )
