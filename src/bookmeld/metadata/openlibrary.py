# ABOUTME: Open Library metadata provider implementation.
# ABOUTME: Looks up openlibrary.org books by ISBN or title/author search, first match only.

import logging
from typing import Any

from bookmeld.metadata.http import HttpClient
from bookmeld.metadata.isbn import resolve_isbn
from bookmeld.metadata.openlibrary_parser import (
    bibkey,
    parse_book_details,
    parse_books_entry,
    parse_search_doc,
)
from bookmeld.metadata.types import BookQuery, SourceMetadata

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"
_SEARCH_LIMIT = "1"


class OpenLibraryProvider:
    """Metadata provider backed by the Open Library API.

    Supports ISBN-based lookup (most precise) and title/author search (broader).
    Both go through the books endpoint with jscmd=data, which carries cover
    links and page counts in one response.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "openlibrary"

    def lookup_by_isbn(self, query: BookQuery) -> SourceMetadata | None:
        """Look up the query's canonical ISBN via the books endpoint.

        Returns None without a request when the query has no usable ISBN.
        """
        isbn_data = resolve_isbn(query)
        isbn = isbn_data.preferred
        if not isbn:
            return None

        details = parse_books_entry(self._fetch_books(isbn), isbn)
        if details is None:
            logger.debug("No Open Library entry for %s", bibkey(isbn))
            return None
        return parse_book_details(details, query, isbn_data)

    def lookup_by_search(self, query: BookQuery) -> SourceMetadata | None:
        """Search by title/author, then fetch book details for the first hit's ISBN.

        The ISBN found by the search fills in whatever the query lacked.
        """
        if not query.title and not query.author:
            return None

        params: dict[str, str] = {}
        if query.title:
            params["title"] = query.title
        if query.author:
            params["author"] = query.author
        params["limit"] = _SEARCH_LIMIT

        hit = parse_search_doc(self._http.get(f"{_OL_BASE}/search.json", params=params))
        if hit is None:
            logger.debug("Open Library search found nothing for %s", params)
            return None

        isbn, cover_id = hit
        if not isbn:
            return None

        details = parse_books_entry(self._fetch_books(isbn), isbn)
        if details is None:
            return None
        isbn_data = resolve_isbn(query, fallback_isbn=isbn)
        return parse_book_details(details, query, isbn_data, cover_id=cover_id)

    def _fetch_books(self, isbn: str) -> dict[str, Any]:
        params = {"bibkeys": bibkey(isbn), "format": "json", "jscmd": "data"}
        return self._http.get(f"{_OL_BASE}/api/books", params=params)
