# ABOUTME: Loading of the JSON book-list file that drives a resolution run.
# ABOUTME: Turns each configured book into a BookQuery and picks up the Google Books API key.

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bookmeld.metadata.types import BookQuery

API_KEY_ENV_VAR = "BOOKMELD_GOOGLE_API_KEY"


class ConfigError(Exception):
    """Raised when the book-list file cannot be read or has the wrong shape."""


@dataclass
class BookList:
    """The books to resolve and the credentials to resolve them with."""

    api_key: str | None = None
    books: list[BookQuery] = field(default_factory=list)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_quotes(value: Any) -> tuple[str, ...]:
    """Coerce a configured quotes value into a tuple of non-empty strings."""
    if not isinstance(value, list):
        return ()
    return tuple(str(quote) for quote in value if quote is not None and str(quote))


def parse_book(entry: dict[str, Any]) -> BookQuery:
    """Build a BookQuery from one `currentBooks` entry."""
    return BookQuery(
        title=_optional_str(entry.get("title")),
        author=_optional_str(entry.get("author")),
        isbn10_raw=_optional_str(entry.get("isbn10")),
        isbn13_raw=_optional_str(entry.get("isbn13")),
        manual_cover_url=_optional_str(entry.get("cover")),
        description=_optional_str(entry.get("description")),
        quotes=normalize_quotes(entry.get("quotes")),
    )


def parse_book_list(data: Any) -> BookList:
    """Validate a decoded book-list document."""
    if not isinstance(data, dict):
        raise ConfigError("Book list must be a JSON object")

    books_raw = data.get("currentBooks", [])
    if not isinstance(books_raw, list):
        raise ConfigError("'currentBooks' must be a list")

    books = []
    for index, entry in enumerate(books_raw):
        if not isinstance(entry, dict):
            raise ConfigError(f"Book #{index + 1} must be a JSON object")
        books.append(parse_book(entry))

    return BookList(api_key=_optional_str(data.get("googleBooksApiKey")), books=books)


def load_book_list(path: Path) -> BookList:
    """Read and parse a book-list file.

    The BOOKMELD_GOOGLE_API_KEY environment variable, when set, takes
    precedence over the key stored in the file.

    Raises:
        ConfigError: If the file is missing, unreadable, or malformed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc

    book_list = parse_book_list(data)
    env_key = _optional_str(os.environ.get(API_KEY_ENV_VAR))
    if env_key:
        book_list.api_key = env_key
    return book_list
