# tests/test_services/test_book_store.py

import pytest
from tests.utils import FakeCatalog, make_volume
from core.errors import BookNotFound, CatalogUnavailable
from core.sa.models import Book
from core.services.book_store import BookStore, book_to_dict


@pytest.fixture
def catalog():
    return FakeCatalog([
        make_volume("vol_dune", title="Dune"),
        make_volume("vol_messiah", title="Dune Messiah"),
    ], total_items=57)


@pytest.fixture
def store(db_session, catalog):
    return BookStore(db_session, catalog)


class FailingCatalog:
    def search(self, params):
        raise CatalogUnavailable("Google Books API error: 503 Service Unavailable", status=503)

    def get_by_id(self, volume_id):
        raise CatalogUnavailable("Google Books API error: 503 Service Unavailable", status=503)


def test_search_defaults_availability_for_unknown_books(store, catalog):
    books, total = store.search({"q": "dune"})

    assert total == 57
    assert [book["id"] for book in books] == ["vol_dune", "vol_messiah"]
    for book in books:
        assert (book["is_available"], book["total_copies"], book["available_copies"]) == (True, 1, 1)
    assert catalog.search_calls == [{"q": "dune"}]


def test_search_overlays_local_stock(store, db_session):
    db_session.add(Book(
        id="vol_messiah",
        title="Local title",
        total_copies=3,
        available_copies=0,
        is_available=False
    ))
    db_session.commit()

    books, _ = store.search({"q": "dune"})
    messiah = next(book for book in books if book["id"] == "vol_messiah")

    assert (messiah["is_available"], messiah["total_copies"], messiah["available_copies"]) == (False, 3, 0)
    # Descriptive metadata still comes from the catalog
    assert messiah["title"] == "Dune Messiah"


def test_search_does_not_store_books(store, db_session):
    store.search({"q": "dune"})
    assert db_session.query(Book).count() == 0


def test_search_without_results(db_session):
    books, total = BookStore(db_session, FakeCatalog([], total_items=12)).search({"q": "nothing"})
    assert books == []
    assert total == 0


def test_search_propagates_catalog_failure(db_session):
    with pytest.raises(CatalogUnavailable):
        BookStore(db_session, FailingCatalog()).search({"q": "dune"})


def test_get_by_id_prefers_local_row(store, catalog, sample_book):
    book = store.get_by_id("vol_dune")

    assert book["description"] == "Desert planet"
    assert book["page_count"] == 300
    assert catalog.lookup_calls == []


def test_get_by_id_fetches_and_stores(store, catalog, db_session):
    book = store.get_by_id("vol_messiah")

    assert book["title"] == "Dune Messiah"
    assert book["isbn13"] == "9780441172719"
    assert book["available_copies"] == 1
    assert catalog.lookup_calls == ["vol_messiah"]

    stored = db_session.get(Book, "vol_messiah")
    assert stored is not None
    assert stored.total_copies == 1
    assert stored.authors == ["Frank Herbert"]


def test_get_by_id_second_call_is_local(store, catalog):
    store.get_by_id("vol_messiah")
    store.get_by_id("vol_messiah")
    assert catalog.lookup_calls == ["vol_messiah"]


def test_get_by_id_unknown_everywhere(store):
    with pytest.raises(BookNotFound, match="Book with ID vol_nope does not exist"):
        store.get_by_id("vol_nope")


def test_get_by_id_catalog_failure(db_session):
    with pytest.raises(CatalogUnavailable):
        BookStore(db_session, FailingCatalog()).get_by_id("vol_dune")


def test_get_by_id_save_failure_still_returns_book(store, db_session, monkeypatch):
    """A row that cannot be stored does not fail the lookup."""
    from sqlalchemy.exc import OperationalError

    def broken_add(data):
        raise OperationalError("INSERT INTO book", {}, Exception("database is locked"))

    monkeypatch.setattr(store.books, "add_book", broken_add)

    book = store.get_by_id("vol_messiah")
    assert book["id"] == "vol_messiah"
    assert db_session.get(Book, "vol_messiah") is None


def test_book_to_dict_has_every_column(sample_book):
    record = book_to_dict(sample_book)
    assert record["id"] == "vol_dune"
    assert record["available_copies"] == 1
    assert set(record) == {column.key for column in Book.__table__.columns}
