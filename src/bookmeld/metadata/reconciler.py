# ABOUTME: Source fallback cascade and cross-source merge for book metadata.
# ABOUTME: Queries Google Books then Open Library only while the merged record still lacks data.

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from bookmeld.metadata.cover import (
    MANUAL_COVER_DESCRIPTOR,
    MANUAL_COVER_RANK,
    normalize_cover_url,
    pick_best_cover_url,
)
from bookmeld.metadata.description import pick_richer, score_description
from bookmeld.metadata.google_books import GoogleBooksProvider
from bookmeld.metadata.http import BookmeldHttpClient, HttpClient, MetadataFetchError
from bookmeld.metadata.isbn import resolve_isbn
from bookmeld.metadata.openlibrary import OpenLibraryProvider
from bookmeld.metadata.provider import MetadataProvider
from bookmeld.metadata.types import (
    AggregatedMetadata,
    BookQuery,
    CoverVariant,
    LookupFailure,
    LookupSource,
    Resolution,
    SourceMetadata,
)

logger = logging.getLogger(__name__)

UNKNOWN_TITLE = "Unknown title"
UNKNOWN_AUTHOR = "Unknown author"

GatePredicate = Callable[[AggregatedMetadata | None], bool]
LookupCall = Callable[[BookQuery], SourceMetadata | None]


def needs_google_lookup(acc: AggregatedMetadata | None) -> bool:
    """Whether Google Books is worth asking.

    A cover plus a formatted (HTML) description is considered good enough;
    plain-text descriptions are retried in the hope of a richer one.
    """
    if acc is None:
        return True
    if not acc.has_cover or not acc.description:
        return True
    return score_description(acc.description) == 0


def needs_open_library_search(acc: AggregatedMetadata | None) -> bool:
    """Whether any field the renderer shows is still missing."""
    return (
        acc is None
        or not acc.title
        or not acc.author
        or not acc.has_cover
        or not acc.description
        or not acc.page_count
    )


def _first_present(existing: Any, new: Any) -> Any:
    """Keep a non-empty existing value; otherwise take new unless it is None."""
    if existing:
        return existing
    return new if new is not None else existing


def merge_metadata(
    acc: AggregatedMetadata | None, new: SourceMetadata | None
) -> AggregatedMetadata | None:
    """Fold one source result into the accumulator, returning a new record."""
    if new is None:
        return acc
    if acc is None:
        return AggregatedMetadata.from_source(new)

    acc_rank = acc.cover_rank or 0
    new_rank = new.cover_rank or 0

    return replace(
        acc,
        title=_first_present(acc.title, new.title),
        author=_first_present(acc.author, new.author),
        page_count=_first_present(acc.page_count, new.page_count),
        description=pick_richer(acc.description, new.description),
        cover=pick_best_cover_url(acc, new),
        cover_rank=max(acc_rank, new_rank),
        cover_set=new.cover_set if new_rank > acc_rank else acc.cover_set,
        isbn10=acc.isbn10 if acc.isbn10 is not None else new.isbn10,
        isbn13=acc.isbn13 if acc.isbn13 is not None else new.isbn13,
        isbn_notes=acc.isbn_notes if acc.isbn_notes else new.isbn_notes,
    )


def fallback_metadata(query: BookQuery) -> AggregatedMetadata:
    """Minimal record built from the query alone when every source came up empty."""
    isbn_data = resolve_isbn(query)
    return AggregatedMetadata(
        title=query.title or UNKNOWN_TITLE,
        author=query.author or UNKNOWN_AUTHOR,
        description=query.description or None,
        page_count=None,
        cover="",
        isbn10=isbn_data.isbn10,
        isbn13=isbn_data.isbn13,
        isbn_notes=isbn_data.notes,
    )


def finalize_metadata(acc: AggregatedMetadata, query: BookQuery) -> AggregatedMetadata:
    """Apply the manual cover override and attach the query's quotes."""
    manual_cover = normalize_cover_url(query.manual_cover_url)
    if manual_cover:
        acc = replace(
            acc,
            cover=manual_cover,
            cover_set=(
                CoverVariant(
                    url=manual_cover, descriptor=MANUAL_COVER_DESCRIPTOR, rank=MANUAL_COVER_RANK
                ),
            ),
            cover_rank=max(acc.cover_rank or 0, MANUAL_COVER_RANK),
        )
    return replace(acc, quotes=tuple(query.quotes))


@dataclass(frozen=True)
class LookupAttempt:
    """One adapter call inside a cascade stage."""

    source: LookupSource
    label: str
    call: LookupCall


@dataclass(frozen=True)
class CascadeStage:
    """A gated cascade step.

    Attempts run in order until one returns a record; a failing attempt is
    recorded and the next one is tried.
    """

    name: str
    gate: GatePredicate
    attempts: tuple[LookupAttempt, ...]


class MetadataReconciler:
    """Resolves a BookQuery by walking the source cascade.

    Stages run strictly in sequence so each gate sees the merged result of
    every stage before it. Transport failures never escape: they come back
    as LookupFailure entries next to the metadata.
    """

    def __init__(self, google: MetadataProvider, openlibrary: MetadataProvider) -> None:
        self._stages: tuple[CascadeStage, ...] = (
            CascadeStage(
                name="google",
                gate=needs_google_lookup,
                attempts=(
                    LookupAttempt(
                        LookupSource.GOOGLE_ISBN,
                        "Google Books ISBN lookup failed",
                        google.lookup_by_isbn,
                    ),
                    LookupAttempt(
                        LookupSource.GOOGLE_SEARCH,
                        "Google Books search failed",
                        google.lookup_by_search,
                    ),
                ),
            ),
            CascadeStage(
                name="openlibrary_isbn",
                gate=needs_open_library_search,
                attempts=(
                    LookupAttempt(
                        LookupSource.OPEN_LIBRARY_ISBN,
                        "Open Library ISBN lookup failed",
                        openlibrary.lookup_by_isbn,
                    ),
                ),
            ),
            CascadeStage(
                name="openlibrary_search",
                gate=needs_open_library_search,
                attempts=(
                    LookupAttempt(
                        LookupSource.OPEN_LIBRARY_SEARCH,
                        "Open Library search failed",
                        openlibrary.lookup_by_search,
                    ),
                ),
            ),
        )

    @property
    def stages(self) -> tuple[CascadeStage, ...]:
        return self._stages

    def resolve(self, query: BookQuery) -> Resolution:
        """Run the cascade for one query. Never raises for source failures."""
        errors: list[LookupFailure] = []
        acc: AggregatedMetadata | None = None

        for stage in self._stages:
            if not stage.gate(acc):
                logger.debug("Skipping %s stage for %r", stage.name, query.display_id)
                continue
            result = self._run_stage(stage, query, errors)
            acc = merge_metadata(acc, result)

        if acc is None:
            logger.info("No source had metadata for %r; using query fields", query.display_id)
            acc = fallback_metadata(query)

        return Resolution(metadata=finalize_metadata(acc, query), errors=errors)

    @staticmethod
    def _run_stage(
        stage: CascadeStage, query: BookQuery, errors: list[LookupFailure]
    ) -> SourceMetadata | None:
        for attempt in stage.attempts:
            try:
                result = attempt.call(query)
            except MetadataFetchError as exc:
                failure = LookupFailure(
                    source=attempt.source,
                    message=f'{attempt.label} for "{query.display_id}".',
                    cause=exc,
                )
                logger.warning("%s %s", failure.message, exc)
                errors.append(failure)
                continue
            if result is not None:
                logger.debug("%s returned metadata for %r", attempt.source.value, query.display_id)
                return result
        return None


def create_reconciler(http_client: HttpClient, api_key: str | None = None) -> MetadataReconciler:
    """Wire the default Google Books and Open Library providers."""
    return MetadataReconciler(
        google=GoogleBooksProvider(http_client, api_key=api_key),
        openlibrary=OpenLibraryProvider(http_client),
    )


def resolve(
    book: BookQuery, api_key: str | None = None, http_client: HttpClient | None = None
) -> Resolution:
    """Resolve one book against the default sources.

    Opens (and closes) its own HTTP client unless one is supplied.
    """
    if http_client is not None:
        return create_reconciler(http_client, api_key).resolve(book)
    with BookmeldHttpClient() as client:
        return create_reconciler(client, api_key).resolve(book)
