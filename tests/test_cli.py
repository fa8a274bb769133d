"""Tests for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from mdwiki.cli import _setup_logging, app


runner = CliRunner()


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("mdwiki.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("mdwiki.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_docs_not_found(self, tmp_path: Path) -> None:
        """Fails when the wiki directory doesn't exist."""
        result = runner.invoke(app, ["search", "alpha", "--docs", str(tmp_path / "missing")])
        assert result.exit_code != 0

    def test_search_with_results(self, wiki_dir: Path) -> None:
        """Prints a table of matching pages."""
        result = runner.invoke(app, ["search", "alpha", "--docs", str(wiki_dir)])
        assert result.exit_code == 0
        assert "Alpha" in result.stdout
        assert "index" in result.stdout

    def test_search_korean(self, wiki_dir: Path) -> None:
        """Finds pages by initial consonants."""
        result = runner.invoke(app, ["search", "ㅂㅌ", "--docs", str(wiki_dir)])
        assert result.exit_code == 0
        assert "No matches found" not in result.stdout

    def test_search_no_results(self, wiki_dir: Path) -> None:
        """Shows message when nothing matches."""
        result = runner.invoke(app, ["search", "zzzz", "--docs", str(wiki_dir), "--no-fuzzy"])
        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_search_verbose(self, wiki_dir: Path) -> None:
        """Verbose flag is accepted."""
        result = runner.invoke(app, ["search", "alpha", "--docs", str(wiki_dir), "-v"])
        assert result.exit_code == 0


class TestSuggestCommand:
    """Tests for the suggest command."""

    def test_suggest_titles(self, wiki_dir: Path) -> None:
        """Prints matching titles."""
        result = runner.invoke(app, ["suggest", "베타", "--docs", str(wiki_dir)])
        assert result.exit_code == 0
        assert "베타 프로젝트" in result.stdout

    def test_suggest_short_query(self, wiki_dir: Path) -> None:
        """Shows message for queries that are too short."""
        result = runner.invoke(app, ["suggest", "a", "--docs", str(wiki_dir)])
        assert result.exit_code == 0
        assert "No suggestions." in result.stdout


class TestStatsCommand:
    """Tests for the stats command."""

    def test_stats(self, wiki_dir: Path) -> None:
        """Reports load counts and index sizes."""
        result = runner.invoke(app, ["stats", "--docs", str(wiki_dir)])
        assert result.exit_code == 0
        assert "Loaded: 2, skipped: 0, failed: 0" in result.stdout
        assert "title" in result.stdout
        assert "content" in result.stdout

    def test_stats_docs_not_found(self, tmp_path: Path) -> None:
        """Fails when the wiki directory doesn't exist."""
        result = runner.invoke(app, ["stats", "--docs", str(tmp_path / "missing")])
        assert result.exit_code != 0


class TestWebCommand:
    """Tests for the web command."""

    @patch("mdwiki.cli.configure_app")
    @patch("uvicorn.run")
    def test_web_starts_server(
        self, mock_run: MagicMock, mock_configure: MagicMock, wiki_dir: Path
    ) -> None:
        """Configures the app and starts uvicorn."""
        result = runner.invoke(
            app, ["web", "--docs", str(wiki_dir), "--host", "0.0.0.0", "--port", "9000"]
        )
        assert result.exit_code == 0
        mock_configure.assert_called_once()
        assert mock_configure.call_args[0][0].docs_dir == wiki_dir
        mock_run.assert_called_once()
        assert mock_run.call_args[1]["host"] == "0.0.0.0"
        assert mock_run.call_args[1]["port"] == 9000

    @patch("mdwiki.cli.configure_app")
    @patch("uvicorn.run")
    def test_web_missing_docs_warns(
        self, mock_run: MagicMock, mock_configure: MagicMock, tmp_path: Path
    ) -> None:
        """Warns but still starts when the wiki directory is missing."""
        result = runner.invoke(app, ["web", "--docs", str(tmp_path / "missing")])
        assert result.exit_code == 0
        assert "Warning" in result.stdout
        mock_run.assert_called_once()
