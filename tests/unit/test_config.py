# ABOUTME: Unit tests for book-list configuration loading.
# ABOUTME: Covers BookQuery mapping, quote cleanup, API key precedence, and malformed input.

import json
from pathlib import Path

import pytest

from bookmeld.config import (
    API_KEY_ENV_VAR,
    ConfigError,
    load_book_list,
    normalize_quotes,
    parse_book,
    parse_book_list,
)


class TestParseBook:
    """Tests for parse_book."""

    def test_maps_fields(self) -> None:
        query = parse_book(
            {
                "title": "Dune",
                "author": "Frank Herbert",
                "isbn10": "0-441-01359-7",
                "isbn13": "978-0-441-01359-3",
                "cover": "http://club.example/dune.jpg",
                "description": "Club pick for March.",
                "quotes": ["Fear is the mind-killer."],
            }
        )
        assert query.title == "Dune"
        assert query.author == "Frank Herbert"
        assert query.isbn10_raw == "0-441-01359-7"
        assert query.isbn13_raw == "978-0-441-01359-3"
        assert query.manual_cover_url == "http://club.example/dune.jpg"
        assert query.description == "Club pick for March."
        assert query.quotes == ("Fear is the mind-killer.",)

    def test_blank_strings_become_none(self) -> None:
        query = parse_book({"title": "  ", "cover": ""})
        assert query.title is None
        assert query.manual_cover_url is None

    def test_numeric_isbn_is_stringified(self) -> None:
        assert parse_book({"isbn13": 9780441013593}).isbn13_raw == "9780441013593"


class TestNormalizeQuotes:
    """Tests for normalize_quotes."""

    def test_drops_empty_and_none(self) -> None:
        assert normalize_quotes(["a", "", None, 42]) == ("a", "42")

    def test_non_list(self) -> None:
        assert normalize_quotes("just one") == ()
        assert normalize_quotes(None) == ()


class TestParseBookList:
    """Tests for parse_book_list."""

    def test_empty_document(self) -> None:
        book_list = parse_book_list({})
        assert book_list.books == []
        assert book_list.api_key is None

    def test_rejects_non_object(self) -> None:
        with pytest.raises(ConfigError, match="JSON object"):
            parse_book_list([])

    def test_rejects_non_list_books(self) -> None:
        with pytest.raises(ConfigError, match="currentBooks"):
            parse_book_list({"currentBooks": {"title": "Dune"}})

    def test_rejects_non_object_book(self) -> None:
        with pytest.raises(ConfigError, match="#2"):
            parse_book_list({"currentBooks": [{"title": "Dune"}, "Emma"]})


class TestLoadBookList:
    """Tests for load_book_list."""

    def test_loads_file(self, book_list_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)
        book_list = load_book_list(book_list_file)
        assert book_list.api_key == "file-key"
        assert [b.title for b in book_list.books] == ["Dune", "The Name of the Rose"]
        assert book_list.books[0].quotes == ("Fear is the mind-killer.",)

    def test_env_var_overrides_file_key(
        self, book_list_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(API_KEY_ENV_VAR, "env-key")
        assert load_book_list(book_list_file).api_key == "env-key"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_book_list(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "books.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_book_list(path)

    def test_wrong_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "books.json"
        path.write_text(json.dumps(["Dune"]), encoding="utf-8")
        with pytest.raises(ConfigError):
            load_book_list(path)
