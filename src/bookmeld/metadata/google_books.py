# ABOUTME: Google Books metadata provider implementation.
# ABOUTME: Looks up volumes by ISBN or intitle/inauthor search and returns the first match.

import logging
from typing import Any

from bookmeld.metadata.google_books_parser import first_volume_info, parse_volume_info
from bookmeld.metadata.http import HttpClient
from bookmeld.metadata.isbn import resolve_isbn
from bookmeld.metadata.types import BookQuery, SourceMetadata

logger = logging.getLogger(__name__)

_GOOGLE_VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"
_MAX_RESULTS = "1"


def build_search_query(query: BookQuery) -> str:
    """Combine title and author into a Google Books query string."""
    parts: list[str] = []
    if query.title:
        parts.append(f"intitle:{query.title}")
    if query.author:
        parts.append(f"inauthor:{query.author}")
    return "+".join(parts)


class GoogleBooksProvider:
    """Metadata provider backed by the Google Books volumes API.

    An API key is optional; anonymous requests work at a lower quota.
    """

    def __init__(self, http_client: HttpClient, api_key: str | None = None) -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "google_books"

    def lookup_by_isbn(self, query: BookQuery) -> SourceMetadata | None:
        """Look up a volume by the query's canonical ISBN.

        Returns None without a request when the query has no usable ISBN.
        """
        isbn_data = resolve_isbn(query)
        isbn = isbn_data.preferred
        if not isbn:
            return None

        info = first_volume_info(self._fetch(f"isbn:{isbn}"))
        if info is None:
            logger.debug("No Google Books volume for isbn:%s", isbn)
            return None
        return parse_volume_info(info, query, isbn_data)

    def lookup_by_search(self, query: BookQuery) -> SourceMetadata | None:
        """Search volumes by title and/or author and shape the first hit."""
        if not query.title and not query.author:
            return None

        q = build_search_query(query)
        info = first_volume_info(self._fetch(q))
        if info is None:
            logger.debug("No Google Books volume for %s", q)
            return None
        return parse_volume_info(info, query, resolve_isbn(query))

    def _fetch(self, q: str) -> dict[str, Any]:
        params = {"q": q, "maxResults": _MAX_RESULTS}
        if self._api_key:
            params["key"] = self._api_key
        return self._http.get(_GOOGLE_VOLUMES_URL, params=params)
