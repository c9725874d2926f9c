# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Converts books-endpoint entries and search docs into SourceMetadata inputs.

from typing import Any

from bookmeld.metadata.cover import select_openlibrary_cover
from bookmeld.metadata.isbn import select_isbn13
from bookmeld.metadata.types import BookQuery, IsbnData, SourceMetadata


def bibkey(isbn: str) -> str:
    """The key the books endpoint uses for an ISBN, e.g. 'ISBN:9780441013593'."""
    return f"ISBN:{isbn}"


def parse_description(details: dict[str, Any]) -> str | None:
    """Extract the description from a books-endpoint entry.

    Handles the OL quirk where description can be either a plain string
    or a dict with {"type": ..., "value": "actual text"}.
    """
    desc = details.get("description")
    if not desc:
        return None
    if isinstance(desc, str):
        return desc
    if isinstance(desc, dict):
        return desc.get("value") or None
    return None


def parse_first_author(details: dict[str, Any]) -> str | None:
    """Return the first author name of a books-endpoint entry, if any."""
    authors = details.get("authors")
    if isinstance(authors, list) and authors and isinstance(authors[0], dict):
        return authors[0].get("name") or None
    return None


def parse_books_entry(data: dict[str, Any], isbn: str) -> dict[str, Any] | None:
    """Pull the entry for one ISBN out of a books-endpoint response."""
    details = data.get(bibkey(isbn))
    return details if isinstance(details, dict) and details else None


def parse_search_doc(data: dict[str, Any]) -> tuple[str | None, int | None] | None:
    """Parse the first doc of a search response into (isbn, cover id).

    Returns None when the search found nothing.
    """
    docs = data.get("docs")
    if not isinstance(docs, list) or not docs or not isinstance(docs[0], dict):
        return None
    first = docs[0]
    isbns = first.get("isbn")
    return select_isbn13(isbns if isinstance(isbns, list) else []), first.get("cover_i") or None


def parse_book_details(
    details: dict[str, Any],
    query: BookQuery,
    isbn_data: IsbnData,
    cover_id: int | None = None,
) -> SourceMetadata:
    """Shape a books-endpoint entry (jscmd=data) into SourceMetadata."""
    cover = select_openlibrary_cover(details.get("cover"), cover_id)

    return SourceMetadata(
        title=details.get("title") or query.title,
        author=parse_first_author(details) or query.author,
        description=parse_description(details),
        page_count=details.get("number_of_pages") or None,
        cover=cover.url,
        cover_rank=cover.rank,
        cover_set=cover.cover_set,
        isbn10=isbn_data.isbn10,
        isbn13=isbn_data.isbn13,
        isbn_notes=isbn_data.notes,
    )
