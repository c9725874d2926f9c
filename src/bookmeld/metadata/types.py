# ABOUTME: Core data structures for book metadata resolution.
# ABOUTME: Queries, ISBN data, cover selections, per-source and aggregated metadata records.

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class BookQuery:
    """Partial, possibly inconsistent description of a book to resolve.

    Every field is optional. ISBN values are raw strings as typed by a human
    (hyphens, spaces, bad checksums and all); the resolver cleans them up.
    """

    title: str | None = None
    author: str | None = None
    isbn10_raw: str | None = None
    isbn13_raw: str | None = None
    manual_cover_url: str | None = None
    description: str | None = None
    quotes: tuple[str, ...] = ()

    @property
    def display_id(self) -> str:
        """Human-readable identifier used in failure messages."""
        return self.title or self.isbn13_raw or self.isbn10_raw or "Unknown book"


@dataclass(frozen=True)
class IsbnData:
    """Canonical ISBN pair for a query plus validation notes."""

    isbn10: str | None = None
    isbn13: str | None = None
    notes: tuple[str, ...] = ()

    @property
    def preferred(self) -> str | None:
        """The ISBN to key remote lookups on (ISBN-13 first)."""
        return self.isbn13 or self.isbn10


@dataclass(frozen=True)
class CoverVariant:
    """One cover image URL at a display-density descriptor, with a quality rank."""

    url: str
    descriptor: str
    rank: int

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "descriptor": self.descriptor, "rank": self.rank}


@dataclass(frozen=True)
class CoverSelection:
    """Ranked, descriptor-deduplicated cover set and its best entry."""

    url: str = ""
    rank: int = 0
    cover_set: tuple[CoverVariant, ...] = ()


@dataclass
class SourceMetadata:
    """Normalized result of one adapter call.

    None means the source said nothing about a field; an empty string means
    it explicitly reported a blank value. The merge step relies on telling
    the two apart.
    """

    title: str | None = None
    author: str | None = None
    description: str | None = None
    page_count: int | None = None
    cover: str = ""
    cover_rank: int | None = None
    cover_set: tuple[CoverVariant, ...] = ()
    isbn10: str | None = None
    isbn13: str | None = None
    isbn_notes: tuple[str, ...] = ()


@dataclass
class AggregatedMetadata(SourceMetadata):
    """The reconciled record handed to the renderer."""

    quotes: tuple[str, ...] = ()

    @classmethod
    def from_source(cls, source: SourceMetadata) -> "AggregatedMetadata":
        """Seed an accumulator from the first source result."""
        return cls(
            title=source.title,
            author=source.author,
            description=source.description,
            page_count=source.page_count,
            cover=source.cover,
            cover_rank=source.cover_rank,
            cover_set=source.cover_set,
            isbn10=source.isbn10,
            isbn13=source.isbn13,
            isbn_notes=source.isbn_notes,
        )

    @property
    def has_cover(self) -> bool:
        return bool(self.cover)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping using the renderer's camelCase field names."""
        return {
            "title": self.title,
            "author": self.author,
            "description": self.description,
            "pageCount": self.page_count,
            "cover": self.cover,
            "coverRank": self.cover_rank or 0,
            "coverSet": [variant.to_dict() for variant in self.cover_set],
            "isbn10": self.isbn10,
            "isbn13": self.isbn13,
            "isbnNotes": list(self.isbn_notes),
            "quotes": list(self.quotes),
        }


class LookupSource(str, Enum):
    """Which adapter call a lookup failure came from."""

    GOOGLE_ISBN = "googleIsbn"
    GOOGLE_SEARCH = "googleSearch"
    OPEN_LIBRARY_ISBN = "openLibraryIsbn"
    OPEN_LIBRARY_SEARCH = "openLibrarySearch"


@dataclass(frozen=True)
class LookupFailure:
    """A non-fatal failure of one adapter call, collected by the reconciler."""

    source: LookupSource
    message: str
    cause: BaseException

    def to_dict(self) -> dict[str, str]:
        return {
            "source": self.source.value,
            "message": self.message,
            "cause": str(self.cause),
        }


@dataclass
class Resolution:
    """Reconciled metadata for one query plus every failed source call."""

    metadata: AggregatedMetadata
    errors: list[LookupFailure] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "errors": [error.to_dict() for error in self.errors],
        }
