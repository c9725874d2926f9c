# ABOUTME: MetadataProvider protocol defining the contract for metadata sources.
# ABOUTME: Google Books and Open Library adapters both implement it for the reconciler cascade.

from typing import Protocol, runtime_checkable

from bookmeld.metadata.types import BookQuery, SourceMetadata


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for metadata lookup services.

    Implementations take only the first candidate a source returns. Both
    lookups return None when the source has nothing and let transport
    failures (MetadataFetchError) propagate to the caller.
    """

    @property
    def name(self) -> str: ...

    def lookup_by_isbn(self, query: BookQuery) -> SourceMetadata | None: ...

    def lookup_by_search(self, query: BookQuery) -> SourceMetadata | None: ...
