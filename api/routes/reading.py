# api/routes/reading.py

from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_current_user
from api.schemas.common import PaginationMeta, MessageResponse
from api.schemas.reading import ReadingStatusSchema, ReadingStatusWithBook, ReadingStatusResponse, ReadingStatusList
from api.schemas.requests import UpdateReadingStatusRequest, Pagination
from api.validation import validate
from core.sa.models import User
from core.services.reading import ReadingTracker

router = APIRouter(prefix="/reading", tags=["reading"])


@router.get("", response_model=ReadingStatusList)
def list_reading_status(
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Get the user's reading status for all books, most recently updated first."""
    pagination = validate(Pagination, request.query_params).unwrap()
    page = ReadingTracker(db).list(user.id, page=pagination.page, limit=pagination.limit)
    return ReadingStatusList(
        reading_status=[ReadingStatusWithBook.model_validate(status) for status in page.items],
        pagination=PaginationMeta.from_page(page),
    )


@router.get("/{book_id}", response_model=ReadingStatusWithBook)
def get_reading_status(
    book_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return ReadingStatusWithBook.model_validate(ReadingTracker(db).get(user.id, book_id))


@router.put("/{book_id}", response_model=ReadingStatusResponse)
def update_reading_status(
    book_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    Create or update the reading status for a book.

    Body: {status, currentPage?, progressPercentage?, rating?, review?,
    startDate?, finishDate?}. Supplying one of currentPage and
    progressPercentage fills in the other from the book's page count.
    """
    data = validate(UpdateReadingStatusRequest, payload).unwrap()
    reading_status, created = ReadingTracker(db).upsert(
        user.id,
        book_id,
        **data.model_dump()
    )
    return ReadingStatusResponse(
        reading_status=ReadingStatusSchema.model_validate(reading_status),
        message="Reading status created successfully" if created else "Reading status updated successfully",
    )


@router.delete("/{book_id}", response_model=MessageResponse)
def remove_reading_status(
    book_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    ReadingTracker(db).remove(user.id, book_id)
    return MessageResponse(message="Reading status removed successfully")
