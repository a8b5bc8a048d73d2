# tests/test_sa/test_models.py
import pytest
from datetime import datetime, timedelta, UTC
from sqlalchemy.exc import IntegrityError
from core.sa.models import Book, Loan, LoanStatus, WishlistEntry, ReadingStatus, ReadingState, User, UserSession


def test_book_defaults(db_session):
    """A book stored with only an ID and title gets one available copy"""
    db_session.add(Book(id="vol_min", title="Minimal"))
    db_session.commit()

    book = db_session.query(Book).filter_by(id="vol_min").first()
    assert book.total_copies == 1
    assert book.available_copies == 1
    assert book.is_available is True
    assert book.language == "en"
    assert book.authors == []
    assert book.created_at is not None


def test_book_json_columns_round_trip(db_session, sample_book):
    db_session.expire_all()
    book = db_session.get(Book, sample_book.id)
    assert book.authors == ["Frank Herbert"]
    assert book.categories == ["Fiction"]


def test_available_copies_cannot_exceed_total(db_session):
    db_session.add(Book(id="vol_bad", title="Bad", total_copies=1, available_copies=2))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_available_copies_cannot_go_negative(db_session):
    db_session.add(Book(id="vol_bad", title="Bad", total_copies=1, available_copies=-1))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_user_email_is_unique(db_session, sample_user):
    db_session.add(User(name="Someone Else", email=sample_user.email))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_loan_relationships(db_session, sample_user, sample_book):
    loan = Loan(
        user_id=sample_user.id,
        book_id=sample_book.id,
        due_date=datetime.now(UTC) + timedelta(days=14)
    )
    db_session.add(loan)
    db_session.commit()

    assert loan.id is not None
    assert loan.status == LoanStatus.ACTIVE.value
    assert loan.renewal_count == 0
    assert loan.book.title == "Dune"
    assert loan.user.email == "test@example.com"
    assert sample_book.loans == [loan]


def test_one_active_loan_per_user_and_book(db_session, sample_user, sample_book):
    due = datetime.now(UTC) + timedelta(days=14)
    db_session.add(Loan(user_id=sample_user.id, book_id=sample_book.id, due_date=due))
    db_session.commit()

    db_session.add(Loan(user_id=sample_user.id, book_id=sample_book.id, due_date=due))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_returned_loans_do_not_block_a_new_active_loan(db_session, sample_user, sample_book):
    due = datetime.now(UTC) + timedelta(days=14)
    db_session.add_all([
        Loan(user_id=sample_user.id, book_id=sample_book.id, due_date=due, status=LoanStatus.RETURNED.value),
        Loan(user_id=sample_user.id, book_id=sample_book.id, due_date=due, status=LoanStatus.RETURNED.value),
        Loan(user_id=sample_user.id, book_id=sample_book.id, due_date=due),
    ])
    db_session.commit()

    assert db_session.query(Loan).filter_by(user_id=sample_user.id).count() == 3


def test_wishlist_entry_unique_per_user_and_book(db_session, sample_user, sample_book):
    db_session.add(WishlistEntry(user_id=sample_user.id, book_id=sample_book.id))
    db_session.commit()

    db_session.add(WishlistEntry(user_id=sample_user.id, book_id=sample_book.id, priority=3))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_wishlist_priority_range(db_session, sample_user, sample_book):
    db_session.add(WishlistEntry(user_id=sample_user.id, book_id=sample_book.id, priority=6))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_reading_status_defaults(db_session, sample_user, sample_book):
    reading_status = ReadingStatus(
        user_id=sample_user.id,
        book_id=sample_book.id,
        status=ReadingState.WANT_TO_READ.value
    )
    db_session.add(reading_status)
    db_session.commit()

    assert reading_status.current_page == 0
    assert reading_status.progress_percentage == 0
    assert reading_status.start_date is None
    assert reading_status.book.page_count == 300


def test_reading_progress_range(db_session, sample_user, sample_book):
    db_session.add(ReadingStatus(
        user_id=sample_user.id,
        book_id=sample_book.id,
        status=ReadingState.CURRENTLY_READING.value,
        progress_percentage=150
    ))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_user_session_cascade(db_session, sample_user):
    db_session.add(UserSession(
        token="abc",
        user_id=sample_user.id,
        expires_at=datetime.now(UTC) + timedelta(days=1)
    ))
    db_session.commit()

    assert [s.token for s in sample_user.sessions] == ["abc"]
    db_session.delete(sample_user)
    db_session.commit()
    assert db_session.query(UserSession).count() == 0
