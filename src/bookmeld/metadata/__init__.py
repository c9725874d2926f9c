# ABOUTME: Metadata package for book lookup, ISBN handling, and cross-source reconciliation.
# ABOUTME: Exports the query/result types and the resolve entry point used by callers.

from bookmeld.metadata.provider import MetadataProvider
from bookmeld.metadata.reconciler import MetadataReconciler, merge_metadata, resolve
from bookmeld.metadata.types import (
    AggregatedMetadata,
    BookQuery,
    IsbnData,
    LookupFailure,
    LookupSource,
    Resolution,
    SourceMetadata,
)

__all__ = [
    "AggregatedMetadata",
    "BookQuery",
    "IsbnData",
    "LookupFailure",
    "LookupSource",
    "MetadataProvider",
    "MetadataReconciler",
    "Resolution",
    "SourceMetadata",
    "merge_metadata",
    "resolve",
]
