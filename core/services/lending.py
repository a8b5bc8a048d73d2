# core/services/lending.py
import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import BookNotFound, BookUnavailable, DuplicateActiveLoan, LoanNotFound
from core.pagination import Page
from core.sa.models import Loan
from core.sa.models.base import utcnow
from core.sa.repositories.book import BookRepository
from core.sa.repositories.loan import LoanRepository

logger = logging.getLogger(__name__)

DEFAULT_LOAN_DAYS = 14


class LendingLedger:
    """Creates and closes loans while keeping book stock consistent."""

    def __init__(self, session: Session, default_loan_days: int = DEFAULT_LOAN_DAYS):
        self.session = session
        self.default_loan_days = default_loan_days
        self.books = BookRepository(session)
        self.loans = LoanRepository(session)

    def create_loan(self, user_id: str, book_id: str, due_date: Optional[datetime] = None) -> Loan:
        """Lend one copy of a book to a user.

        Args:
            user_id: Borrowing user
            book_id: Catalog volume ID of a locally stored book
            due_date: Optional due date, defaults to now + default_loan_days

        Returns:
            The new active Loan

        Raises:
            BookNotFound: If the book is not stored locally
            BookUnavailable: If no copy is left, including when another request
                             took the last copy between the check and the update
            DuplicateActiveLoan: If the user already has this book on loan,
                                 including one committed by a concurrent request
        """
        book = self.books.get_by_id(book_id)
        if book is None:
            raise BookNotFound(book_id)

        if not book.is_available or book.available_copies <= 0:
            raise BookUnavailable(book_id)

        if self.loans.get_active(user_id, book_id) is not None:
            raise DuplicateActiveLoan(book_id)

        if due_date is None:
            due_date = utcnow() + timedelta(days=self.default_loan_days)

        try:
            loan = self.loans.create_loan(user_id, book_id, due_date)
            if not self.books.decrement_available_copies(book_id):
                self.session.rollback()
                logger.info("Last copy of book %s was taken concurrently", book_id)
                raise BookUnavailable(book_id)
            self.session.commit()
        except BookUnavailable:
            raise
        except IntegrityError:
            # An active loan for this user and book was committed concurrently
            self.session.rollback()
            raise DuplicateActiveLoan(book_id)
        except Exception:
            self.session.rollback()
            raise

        logger.info("Loan %s created: user=%s book=%s due=%s", loan.id, user_id, book_id, due_date)
        return loan

    def return_loan(self, user_id: str, loan_id: str, notes: Optional[str] = None) -> Loan:
        """Close an active loan and put the copy back in stock.

        Raises:
            LoanNotFound: If the user has no active loan with this ID
        """
        loan = self.loans.get_by_id(loan_id)
        if loan is None or loan.user_id != user_id:
            raise LoanNotFound(loan_id)

        try:
            if not self.loans.mark_returned(user_id, loan_id, notes):
                self.session.rollback()
                raise LoanNotFound(loan_id)
            if not self.books.increment_available_copies(loan.book_id):
                logger.warning("Book %s already had every copy in stock when loan %s was returned", loan.book_id, loan_id)
            self.session.commit()
        except LoanNotFound:
            raise
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(loan)
        logger.info("Loan %s returned: user=%s book=%s", loan_id, user_id, loan.book_id)
        return loan

    def list_loans(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 20,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> Page[Loan]:
        """Get a page of the user's loans, newest first."""
        result = Page(page=page, limit=limit)
        result.items, result.total = self.loans.list_for_user(
            user_id,
            status=status,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
            offset=result.offset
        )
        return result

    # Loan history is the same filtered view as the listing
    history = list_loans
