# ABOUTME: End-to-end tests for the Bookmeld CLI.
# ABOUTME: Runs commands via Click's CliRunner with real providers over a fake HTTP client.

import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from bookmeld.cli import cli
from bookmeld.metadata.http import HttpClient, MetadataFetchError
from bookmeld.metadata.reconciler import MetadataReconciler, create_reconciler
from tests.fixtures.fake_http import FakeHttpClient
from tests.fixtures.google_books_responses import VOLUMES_RESPONSE_NO_PAGES
from tests.fixtures.openlibrary_responses import BOOKS_RESPONSE, SEARCH_RESPONSE


def _patched_factory(fake: FakeHttpClient):
    def factory(http_client: HttpClient, api_key: str | None) -> MetadataReconciler:
        return create_reconciler(fake, api_key=api_key)

    return factory


class TestCliVersion:
    """E2e tests for the root group."""

    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestCliIsbn:
    """E2e tests for `bookmeld isbn`."""

    def test_isbn10_derives_isbn13(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["isbn", "--isbn10", "0-441-01359-7"])
        assert result.exit_code == 0
        assert "0441013597" in result.output
        assert "9780441013593" in result.output

    def test_invalid_isbn_reports_note(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["isbn", "--isbn10", "0306406153"])
        assert result.exit_code == 0
        assert "Invalid ISBN-10" in result.output

    def test_979_has_no_isbn10(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["isbn", "--isbn13", "979-10-90636-07-1"])
        assert result.exit_code == 0
        assert "9791090636071" in result.output
        assert "none" in result.output

    def test_requires_an_isbn(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["isbn"])
        assert result.exit_code == 1


class TestCliResolve:
    """E2e tests for `bookmeld resolve`."""

    def test_google_then_openlibrary(self, tmp_path: Path) -> None:
        """Google fills cover and description; Open Library supplies the page count."""
        path = tmp_path / "books.json"
        path.write_text(
            json.dumps(
                {
                    "currentBooks": [
                        {
                            "title": "Dune",
                            "author": "Frank Herbert",
                            "isbn13": "9780441013593",
                            "quotes": ["Fear is the mind-killer."],
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )
        fake = FakeHttpClient(
            {"q=isbn:": VOLUMES_RESPONSE_NO_PAGES, "/api/books": BOOKS_RESPONSE}
        )

        with patch(
            "bookmeld.cli.commands.resolve_cmd._create_reconciler", _patched_factory(fake)
        ):
            runner = CliRunner()
            result = runner.invoke(cli, ["resolve", str(path), "--json"])

        assert result.exit_code == 0
        [item] = json.loads(result.stdout)
        meta = item["metadata"]
        assert meta["title"] == "Dune"
        assert meta["pageCount"] == 528
        assert meta["coverRank"] == 7
        assert meta["cover"].startswith("https://books.google.com/")
        assert meta["isbn10"] == "0441013597"
        assert meta["quotes"] == ["Fear is the mind-killer."]
        assert item["errors"] == []
        assert fake.urls == [
            "https://www.googleapis.com/books/v1/volumes",
            "https://openlibrary.org/api/books",
        ]

    def test_all_sources_down(self, tmp_path: Path) -> None:
        """Every lookup fails: the book is still listed with placeholders."""
        path = tmp_path / "books.json"
        path.write_text(
            json.dumps(
                {
                    "currentBooks": [
                        {
                            "title": "Dune",
                            "isbn10": "0441013597",
                            "cover": "http://club.example/dune.jpg",
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )
        down = MetadataFetchError("Request failed (503)")
        fake = FakeHttpClient({"googleapis": down, "openlibrary.org": down})

        with patch(
            "bookmeld.cli.commands.resolve_cmd._create_reconciler", _patched_factory(fake)
        ):
            runner = CliRunner()
            result = runner.invoke(cli, ["resolve", str(path), "--json"])

        assert result.exit_code == 0
        [item] = json.loads(result.stdout)
        assert [e["source"] for e in item["errors"]] == [
            "googleIsbn",
            "googleSearch",
            "openLibraryIsbn",
            "openLibrarySearch",
        ]
        assert item["metadata"]["title"] == "Dune"
        assert item["metadata"]["author"] == "Unknown author"
        assert item["metadata"]["cover"] == "https://club.example/dune.jpg"
        assert item["metadata"]["coverRank"] == 10

    def test_table_output(self, tmp_path: Path) -> None:
        path = tmp_path / "books.json"
        path.write_text(
            json.dumps({"currentBooks": [{"title": "Dune", "author": "Herbert"}]}),
            encoding="utf-8",
        )
        fake = FakeHttpClient({"/search.json": SEARCH_RESPONSE, "/api/books": BOOKS_RESPONSE})

        with patch(
            "bookmeld.cli.commands.resolve_cmd._create_reconciler", _patched_factory(fake)
        ):
            runner = CliRunner()
            result = runner.invoke(cli, ["resolve", str(path)])

        assert result.exit_code == 0
        assert "Frank Herbert" in result.output
        assert "528" in result.output
        assert "1 book(s) resolved, 0 lookup failure(s)" in result.output
