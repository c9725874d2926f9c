# ABOUTME: Shared pytest fixtures for Bookmeld tests.
# ABOUTME: Provides sample book queries and on-disk book-list files.

import json
from pathlib import Path

import pytest

from bookmeld.metadata.types import BookQuery


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def dune_query() -> BookQuery:
    """A query with a valid hyphenated ISBN-10, title, author, and quotes."""
    return BookQuery(
        title="Dune",
        author="Frank Herbert",
        isbn10_raw="0-441-01359-7",
        quotes=("Fear is the mind-killer.",),
    )


@pytest.fixture
def title_only_query() -> BookQuery:
    """A query with only free-text fields and no ISBN."""
    return BookQuery(title="Dune", author="Herbert")


@pytest.fixture
def book_list_file(tmp_path: Path) -> Path:
    """Write a two-book list in the site configuration format."""
    data = {
        "clubName": "Tuesday Readers",
        "googleBooksApiKey": "file-key",
        "currentBooks": [
            {
                "title": "Dune",
                "author": "Frank Herbert",
                "isbn13": "978-0-441-01359-3",
                "quotes": ["Fear is the mind-killer.", "", None],
            },
            {
                "title": "The Name of the Rose",
                "isbn10": "0156001315",
                "cover": "http://example.com/rose.jpg",
            },
        ],
    }
    path = tmp_path / "books.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
