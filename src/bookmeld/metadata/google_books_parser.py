# ABOUTME: Parsing functions for Google Books volumes API JSON responses.
# ABOUTME: Converts the first volume of a search response into SourceMetadata.

from typing import Any

from bookmeld.metadata.cover import select_google_cover
from bookmeld.metadata.types import BookQuery, IsbnData, SourceMetadata


def first_volume_info(data: dict[str, Any]) -> dict[str, Any] | None:
    """Return the volumeInfo of the first item, or None if there are no items.

    An item without a usable volumeInfo block still counts as a match.
    """
    items = data.get("items")
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        return None
    info = items[0].get("volumeInfo")
    return info if isinstance(info, dict) else {}


def parse_first_author(info: dict[str, Any]) -> str | None:
    """Return the first author name of a volumeInfo block, if any."""
    authors = info.get("authors")
    if isinstance(authors, list) and authors and isinstance(authors[0], str):
        return authors[0] or None
    return None


def parse_volume_info(
    info: dict[str, Any], query: BookQuery, isbn_data: IsbnData
) -> SourceMetadata:
    """Shape a Google Books volumeInfo block into SourceMetadata.

    Title and author fall back to what the query supplied. ISBN fields come
    from the query's canonical ISBN data, not from the volume.
    """
    cover = select_google_cover(info.get("imageLinks"))

    return SourceMetadata(
        title=info.get("title") or query.title,
        author=parse_first_author(info) or query.author,
        description=info.get("description") or None,
        page_count=info.get("pageCount") or None,
        cover=cover.url,
        cover_rank=cover.rank,
        cover_set=cover.cover_set,
        isbn10=isbn_data.isbn10,
        isbn13=isbn_data.isbn13,
        isbn_notes=isbn_data.notes,
    )
