# tests/utils.py
from core.catalog.google_books import CatalogSearchResult


def make_volume(volume_id, title="Dune", authors=None, page_count=412, **info):
    """Build a Google Books volume payload."""
    volume_info = {
        "title": title,
        "authors": authors if authors is not None else ["Frank Herbert"],
        "pageCount": page_count,
        "publishedDate": "1965",
        "publisher": "Chilton Books",
        "categories": ["Fiction"],
        "language": "en",
        "industryIdentifiers": [
            {"type": "ISBN_10", "identifier": "0441172717"},
            {"type": "ISBN_13", "identifier": "9780441172719"},
        ],
        "imageLinks": {"thumbnail": f"http://books.example.com/{volume_id}.jpg"},
    }
    volume_info.update(info)
    return {"id": volume_id, "volumeInfo": volume_info}


class FakeCatalog:
    """In-memory stand-in for GoogleBooksClient."""

    def __init__(self, volumes=None, total_items=None):
        self.volumes = {volume["id"]: volume for volume in (volumes or [])}
        self.total_items = total_items
        self.search_calls = []
        self.lookup_calls = []

    def search(self, params):
        self.search_calls.append(params)
        items = list(self.volumes.values())
        total = self.total_items if self.total_items is not None else len(items)
        return CatalogSearchResult(items=items, total_items=total)

    def get_by_id(self, volume_id):
        self.lookup_calls.append(volume_id)
        return self.volumes.get(volume_id)
