# tests/test_sa/test_repositories/test_loan_repository.py

import pytest
from datetime import datetime, timedelta, UTC
from core.sa.models import Book, Loan, LoanStatus
from core.sa.repositories.loan import LoanRepository


@pytest.fixture
def loan_repo(db_session):
    return LoanRepository(db_session)


@pytest.fixture
def due():
    return datetime.now(UTC) + timedelta(days=14)


@pytest.fixture
def many_books(db_session):
    books = [Book(id=f"vol_{i}", title=f"Book {i}") for i in range(1, 6)]
    db_session.add_all(books)
    db_session.commit()
    return books


def test_create_loan(loan_repo, db_session, sample_user, sample_book, due):
    loan = loan_repo.create_loan(sample_user.id, sample_book.id, due)
    db_session.commit()

    assert loan.id is not None
    assert loan.status == LoanStatus.ACTIVE.value
    assert loan.loan_date is not None
    assert loan.return_date is None


def test_get_active(loan_repo, db_session, sample_user, sample_book, due):
    assert loan_repo.get_active(sample_user.id, sample_book.id) is None

    loan = loan_repo.create_loan(sample_user.id, sample_book.id, due)
    db_session.commit()

    assert loan_repo.get_active(sample_user.id, sample_book.id).id == loan.id


def test_mark_returned(loan_repo, db_session, sample_user, sample_book, due):
    loan = loan_repo.create_loan(sample_user.id, sample_book.id, due)
    db_session.commit()

    assert loan_repo.mark_returned(sample_user.id, loan.id, "Great read") is True
    db_session.commit()

    db_session.expire_all()
    returned = loan_repo.get_by_id(loan.id)
    assert returned.status == LoanStatus.RETURNED.value
    assert returned.return_date is not None
    assert returned.notes == "Great read"
    assert loan_repo.get_active(sample_user.id, sample_book.id) is None


def test_mark_returned_only_once(loan_repo, db_session, sample_user, sample_book, due):
    loan = loan_repo.create_loan(sample_user.id, sample_book.id, due)
    db_session.commit()

    assert loan_repo.mark_returned(sample_user.id, loan.id) is True
    assert loan_repo.mark_returned(sample_user.id, loan.id) is False


def test_mark_returned_requires_owner(loan_repo, db_session, sample_user, other_user, sample_book, due):
    loan = loan_repo.create_loan(sample_user.id, sample_book.id, due)
    db_session.commit()

    assert loan_repo.mark_returned(other_user.id, loan.id) is False


def test_list_for_user_newest_first(loan_repo, db_session, sample_user, many_books, due):
    for book in many_books:
        loan_repo.create_loan(sample_user.id, book.id, due)
        db_session.commit()

    loans, total = loan_repo.list_for_user(sample_user.id, limit=2, offset=0)
    assert total == 5
    assert [loan.book_id for loan in loans] == ["vol_5", "vol_4"]
    assert loans[0].book.title == "Book 5"


def test_list_for_user_offset_past_end(loan_repo, db_session, sample_user, many_books, due):
    for book in many_books:
        loan_repo.create_loan(sample_user.id, book.id, due)
    db_session.commit()

    loans, total = loan_repo.list_for_user(sample_user.id, limit=20, offset=40)
    assert loans == []
    assert total == 5


def test_list_for_user_filters_by_status(loan_repo, db_session, sample_user, many_books, due):
    loans = [loan_repo.create_loan(sample_user.id, book.id, due) for book in many_books]
    db_session.commit()
    loan_repo.mark_returned(sample_user.id, loans[0].id)
    db_session.commit()

    returned, total = loan_repo.list_for_user(sample_user.id, status=LoanStatus.RETURNED.value)
    assert total == 1
    assert returned[0].id == loans[0].id

    _, active_total = loan_repo.list_for_user(sample_user.id, status=LoanStatus.ACTIVE.value)
    assert active_total == 4


def test_list_for_user_filters_by_loan_date(loan_repo, db_session, sample_user, many_books, due):
    old = loan_repo.create_loan(sample_user.id, "vol_1", due)
    old.loan_date = datetime.now(UTC) - timedelta(days=60)
    loan_repo.create_loan(sample_user.id, "vol_2", due)
    db_session.commit()

    cutoff = datetime.now(UTC) - timedelta(days=30)
    recent, total = loan_repo.list_for_user(sample_user.id, start_date=cutoff)
    assert total == 1
    assert recent[0].book_id == "vol_2"

    older, total = loan_repo.list_for_user(sample_user.id, end_date=cutoff)
    assert total == 1
    assert older[0].book_id == "vol_1"


def test_list_for_user_excludes_other_users(loan_repo, db_session, sample_user, other_user, sample_book, due):
    loan_repo.create_loan(other_user.id, sample_book.id, due)
    db_session.commit()

    loans, total = loan_repo.list_for_user(sample_user.id)
    assert loans == []
    assert total == 0
