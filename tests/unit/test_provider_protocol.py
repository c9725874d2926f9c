# ABOUTME: Unit tests for MetadataProvider protocol.
# ABOUTME: Validates the protocol contract and that both real adapters satisfy it.

from bookmeld.metadata import BookQuery, SourceMetadata
from bookmeld.metadata.google_books import GoogleBooksProvider
from bookmeld.metadata.openlibrary import OpenLibraryProvider
from bookmeld.metadata.provider import MetadataProvider
from tests.fixtures.fake_http import FakeHttpClient


class FakeProvider:
    """Minimal implementation of MetadataProvider for testing."""

    @property
    def name(self) -> str:
        return "fake"

    def lookup_by_isbn(self, query: BookQuery) -> SourceMetadata | None:
        return SourceMetadata(title="Found by ISBN")

    def lookup_by_search(self, query: BookQuery) -> SourceMetadata | None:
        return None


class NotAProvider:
    """Missing required methods do not satisfy the protocol."""

    @property
    def name(self) -> str:
        return "broken"


class TestMetadataProvider:
    """Tests for MetadataProvider protocol."""

    def test_valid_implementation_is_instance(self) -> None:
        """A class with all required methods satisfies the protocol."""
        assert isinstance(FakeProvider(), MetadataProvider)

    def test_invalid_implementation_is_not_instance(self) -> None:
        """A class missing required methods does not satisfy the protocol."""
        assert not isinstance(NotAProvider(), MetadataProvider)

    def test_google_books_satisfies_protocol(self) -> None:
        assert isinstance(GoogleBooksProvider(FakeHttpClient()), MetadataProvider)

    def test_openlibrary_satisfies_protocol(self) -> None:
        assert isinstance(OpenLibraryProvider(FakeHttpClient()), MetadataProvider)

    def test_provider_names(self) -> None:
        assert GoogleBooksProvider(FakeHttpClient()).name == "google_books"
        assert OpenLibraryProvider(FakeHttpClient()).name == "openlibrary"
