# api/routes/books.py

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_catalog
from api.schemas.book import BookSchema, BookSearchResponse
from api.schemas.requests import BookSearchParams
from api.validation import validate
from core.catalog.google_books import GoogleBooksClient
from core.services.book_store import BookStore

router = APIRouter(prefix="/books", tags=["books"])


@router.get("", response_model=BookSearchResponse)
def search_books(
    request: Request,
    db: Session = Depends(get_db),
    catalog: GoogleBooksClient = Depends(get_catalog)
):
    """
    Search the catalog, reporting local availability for books already stocked.

    Query parameters follow the Google Books names: q, intitle, inauthor,
    inpublisher, subject, isbn, startIndex, maxResults, orderBy, printType,
    filter, langRestrict.
    """
    params = validate(BookSearchParams, request.query_params).unwrap()

    books, total_items = BookStore(db, catalog).search(params.to_catalog_params())

    return BookSearchResponse(
        books=[BookSchema.model_validate(book) for book in books],
        total_items=total_items,
        start_index=params.start_index,
        max_results=params.max_results,
    )


@router.get("/{book_id}", response_model=BookSchema)
def get_book(
    book_id: str,
    db: Session = Depends(get_db),
    catalog: GoogleBooksClient = Depends(get_catalog)
):
    """Get one book; unknown local books are fetched from the catalog and stored."""
    book = BookStore(db, catalog).get_by_id(book_id)
    return BookSchema.model_validate(book)
