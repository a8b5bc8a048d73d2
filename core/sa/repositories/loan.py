# core/sa/repositories/loan.py
from typing import Optional, List, Tuple
from datetime import datetime
from sqlalchemy import update, desc
from sqlalchemy.orm import Session, joinedload
from ..models import Loan, LoanStatus
from ..models.base import utcnow


class LoanRepository:
    """Repository for managing Loan entities.

    Write methods only flush; the lending ledger commits them together with
    the stock update.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, loan_id: str) -> Optional[Loan]:
        return self.session.query(Loan).filter(Loan.id == loan_id).first()

    def get_active(self, user_id: str, book_id: str) -> Optional[Loan]:
        """Get the user's active loan for a book, if any."""
        return (
            self.session.query(Loan)
            .filter(
                Loan.user_id == user_id,
                Loan.book_id == book_id,
                Loan.status == LoanStatus.ACTIVE.value
            )
            .first()
        )

    def create_loan(self, user_id: str, book_id: str, due_date: datetime) -> Loan:
        loan = Loan(
            user_id=user_id,
            book_id=book_id,
            loan_date=utcnow(),
            due_date=due_date,
            status=LoanStatus.ACTIVE.value,
            renewal_count=0
        )
        self.session.add(loan)
        self.session.flush()
        return loan

    def mark_returned(self, user_id: str, loan_id: str, notes: Optional[str] = None) -> bool:
        """Close an active loan owned by the user.

        Returns:
            True if an active loan was closed, False otherwise
        """
        now = utcnow()
        stmt = (
            update(Loan)
            .where(
                Loan.id == loan_id,
                Loan.user_id == user_id,
                Loan.status == LoanStatus.ACTIVE.value
            )
            .values(
                status=LoanStatus.RETURNED.value,
                return_date=now,
                notes=notes,
                updated_at=now
            )
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return result.rowcount == 1

    def _user_loans_query(
        self,
        user_id: str,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ):
        query = self.session.query(Loan).filter(Loan.user_id == user_id)
        if status:
            query = query.filter(Loan.status == status)
        if start_date:
            query = query.filter(Loan.loan_date >= start_date)
        if end_date:
            query = query.filter(Loan.loan_date <= end_date)
        return query

    def list_for_user(
        self,
        user_id: str,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 20,
        offset: int = 0
    ) -> Tuple[List[Loan], int]:
        """Get a page of a user's loans, newest first.

        Args:
            user_id: Owner of the loans
            status: Optional status filter
            start_date: Only loans made at or after this time
            end_date: Only loans made at or before this time
            limit: Maximum number of loans to return
            offset: Number of loans to skip

        Returns:
            Tuple of (loans with their book loaded, total matching count)
        """
        base_query = self._user_loans_query(user_id, status, start_date, end_date)
        total = base_query.count()
        loans = (
            base_query
            .options(joinedload(Loan.book))
            .order_by(desc(Loan.created_at))
            .offset(offset)
            .limit(limit)
            .all()
        )
        return loans, total
