# core/catalog/google_books.py
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

import requests

from core.errors import CatalogUnavailable

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.googleapis.com/books/v1"

# Search fields that Google Books only honours as qualifiers inside ``q``
QUALIFIED_FIELDS = ("intitle", "inauthor", "inpublisher", "subject", "isbn")
PASSTHROUGH_FIELDS = ("startIndex", "maxResults", "orderBy", "printType", "filter", "langRestrict")


@dataclass
class CatalogSearchResult:
    items: List[Dict[str, Any]] = field(default_factory=list)
    total_items: int = 0


def build_query_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Translate search filters into Google Books query-string parameters.

    ``q`` and the qualified fields are folded into a single ``q`` value,
    e.g. ``{"q": "dune", "inauthor": "herbert"}`` -> ``q="dune inauthor:herbert"``.
    """
    terms = []
    if params.get("q"):
        terms.append(str(params["q"]).strip())
    for name in QUALIFIED_FIELDS:
        value = params.get(name)
        if value:
            terms.append(f"{name}:{value}")

    query: Dict[str, Any] = {}
    if terms:
        query["q"] = " ".join(terms)
    for name in PASSTHROUGH_FIELDS:
        value = params.get(name)
        if value is not None:
            query[name] = value
    return query


def _first_identifier(identifiers: List[Dict[str, str]], kind: str) -> Optional[str]:
    return next(
        (i.get("identifier") for i in identifiers if i.get("type") == kind),
        None
    )


def map_volume(volume: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a Google Books volume into the internal book shape.

    Availability fields carry the defaults used for books that have no
    local row yet: one copy, available.
    """
    info = volume.get("volumeInfo") or {}
    identifiers = info.get("industryIdentifiers") or []
    image_links = info.get("imageLinks") or {}

    return {
        "id": volume["id"],
        "title": info.get("title") or "",
        "authors": info.get("authors") or [],
        "description": info.get("description"),
        "published_date": info.get("publishedDate"),
        "publisher": info.get("publisher"),
        "page_count": info.get("pageCount"),
        "categories": info.get("categories") or [],
        "average_rating": info.get("averageRating"),
        "ratings_count": info.get("ratingsCount"),
        "thumbnail": image_links.get("thumbnail") or image_links.get("smallThumbnail"),
        "language": info.get("language") or "en",
        "isbn10": _first_identifier(identifiers, "ISBN_10"),
        "isbn13": _first_identifier(identifiers, "ISBN_13"),
        "preview_link": info.get("previewLink"),
        "info_link": info.get("infoLink"),
        "canonical_volume_link": info.get("canonicalVolumeLink"),
        "is_available": True,
        "total_copies": 1,
        "available_copies": 1,
    }


class GoogleBooksClient:
    """Thin client for the Google Books volumes API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        params = dict(params or {})
        if self.api_key:
            params["key"] = self.api_key
        url = f"{self.base_url}{endpoint}"
        try:
            return self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Google Books request to %s failed: %s", endpoint, e)
            raise CatalogUnavailable(f"Google Books API request failed: {e}") from e

    @staticmethod
    def _json(response: requests.Response) -> Dict[str, Any]:
        try:
            return response.json()
        except ValueError as e:
            raise CatalogUnavailable(
                f"Google Books API returned an invalid body: {e}",
                status=response.status_code
            ) from e

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if not 200 <= response.status_code < 300:
            logger.error("Google Books API error: %s %s", response.status_code, response.reason)
            raise CatalogUnavailable(
                f"Google Books API error: {response.status_code} {response.reason}",
                status=response.status_code
            )

    def search(self, params: Dict[str, Any]) -> CatalogSearchResult:
        """Search volumes.

        Args:
            params: Search filters using the HTTP contract's names (q, intitle,
                    inauthor, ..., startIndex, maxResults, orderBy, ...)

        Returns:
            CatalogSearchResult with the raw volumes and the catalog's total count

        Raises:
            CatalogUnavailable: On transport failure or a non-2xx response
        """
        response = self._get("/volumes", build_query_params(params))
        self._raise_for_status(response)
        payload = self._json(response)
        return CatalogSearchResult(
            items=payload.get("items") or [],
            total_items=payload.get("totalItems") or 0
        )

    def get_by_id(self, volume_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one volume, or None if the catalog does not know it."""
        response = self._get(f"/volumes/{volume_id}")
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return self._json(response)
