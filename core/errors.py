# core/errors.py
from typing import List, Optional, Dict, Any


class LibraryError(Exception):
    """Base class for errors rendered as an ``{error, message}`` body."""
    error = "Request failed"
    status_code = 200

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.error
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


class ValidationError(LibraryError):
    error = "Validation failed"

    def __init__(self, details: List[Dict[str, str]], message: Optional[str] = None):
        self.details = details
        if message is None:
            message = "; ".join(f"{d['field']}: {d['message']}" for d in details) or "Invalid request"
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["details"] = self.details
        return body


class BookNotFound(LibraryError):
    error = "Book not found"

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__(f"Book with ID {book_id} does not exist")


class BookUnavailable(LibraryError):
    error = "Book not available"

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__("This book is currently not available for loan")


class DuplicateActiveLoan(LibraryError):
    error = "Loan already exists"

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__("You already have an active loan for this book")


class LoanNotFound(LibraryError):
    error = "Loan not found"

    def __init__(self, loan_id: str):
        self.loan_id = loan_id
        super().__init__("Active loan not found or you don't have permission to return it")


class DuplicateWishlistEntry(LibraryError):
    error = "Book already in wishlist"

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__("This book is already in your wishlist")


class WishlistEntryNotFound(LibraryError):
    error = "Wishlist item not found"

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__("This book is not in your wishlist")


class ReadingStatusNotFound(LibraryError):
    error = "Reading status not found"

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__("No reading status found for this book")


class CatalogUnavailable(LibraryError):
    """The external catalog failed or could not be reached."""
    error = "Catalog unavailable"

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class Unauthorized(LibraryError):
    error = "Unauthorized"
    status_code = 401

    def __init__(self, message: str = "A valid session is required"):
        super().__init__(message)
