"""Tests for the bookstyle command line interface."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner
from rich.console import Console

from bookstyle import __version__
from bookstyle.cli import cli, main as cli_main

if TYPE_CHECKING:
    from pathlib import Path

    from bookstyle.core.models import Book


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    """Create a CLI runner with a console wide enough for unwrapped tables."""
    monkeypatch.setattr(cli_main, "console", Console(width=200))
    return CliRunner()


@pytest.fixture
def book_file(tmp_path: Path, sample_book: Book) -> Path:
    """Write the sample book to a JSON file."""
    path = tmp_path / "book.json"
    path.write_text(json.dumps(sample_book.to_dict()), encoding="utf-8")
    return path


class TestCatalogCommands:
    """Tests for listing themes and palettes."""

    def test_version(self, runner: CliRunner) -> None:
        """Test the version option."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_themes(self, runner: CliRunner) -> None:
        """Test listing themes."""
        result = runner.invoke(cli, ["themes"])
        assert result.exit_code == 0
        assert "candy" in result.output
        assert "12-50" in result.output

    def test_palettes(self, runner: CliRunner) -> None:
        """Test listing palettes."""
        result = runner.invoke(cli, ["palettes"])
        assert result.exit_code == 0
        assert "candy-palette" in result.output

    def test_broken_catalog(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test that an unreadable catalog is reported as a CLI error."""
        result = runner.invoke(cli, ["themes"], env={"BOOKSTYLE_THEMES_FILE": str(tmp_path / "nope.json")})
        assert result.exit_code != 0
        assert "nope.json" in result.output


class TestConvert:
    """Tests for scale conversion."""

    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            (["stroke", "1", "--theme", "candy"], "12"),
            (["stroke", "0", "--theme", "candy"], "0"),
            (["stroke", "12", "--theme", "candy", "--to-common"], "1"),
            (["font", "14"], "58"),
            (["radius", "100"], "300"),
        ],
    )
    def test_convert(self, runner: CliRunner, args: list[str], expected: str) -> None:
        """Test converting between the common and actual scales."""
        result = runner.invoke(cli, ["convert", *args])
        assert result.exit_code == 0
        assert result.output.strip() == expected


class TestResolve:
    """Tests for the resolve command."""

    def test_resolve_element(self, runner: CliRunner, book_file: Path) -> None:
        """Test showing the effective style of an element."""
        result = runner.invoke(cli, ["resolve", str(book_file), "text-border"])
        assert result.exit_code == 0
        assert "#ff0000" in result.output

    def test_unknown_element(self, runner: CliRunner, book_file: Path) -> None:
        """Test that an unknown element exits with an error."""
        result = runner.invoke(cli, ["resolve", str(book_file), "missing"])
        assert result.exit_code != 0
        assert "missing" in result.output


class TestCascade:
    """Tests for the cascade command."""

    def test_book_theme_patches(self, runner: CliRunner, book_file: Path) -> None:
        """Test printing the patches of a book theme change."""
        result = runner.invoke(cli, ["cascade", str(book_file), "candy"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["patches"][0] == {"kind": "setBookTheme", "themeId": "candy", "skipHistory": True}

    def test_apply_returns_book(self, runner: CliRunner, book_file: Path) -> None:
        """Test printing the book after the patches are applied."""
        result = runner.invoke(cli, ["cascade", str(book_file), "candy", "--apply"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["bookTheme"] == "candy"
        assert data["pages"][0]["background"]["pageTheme"] == "candy"

    def test_page_theme(self, runner: CliRunner, book_file: Path) -> None:
        """Test previewing a single page theme change."""
        result = runner.invoke(cli, ["cascade", str(book_file), "glow", "--page", "0"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["patches"][0]["kind"] == "setPageTheme"
        assert data["patches"][0]["pageIndex"] == 0
