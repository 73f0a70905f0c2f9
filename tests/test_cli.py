"""Tests for the Typer CLI."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from unittest import mock

import pytest
from typer.testing import CliRunner

from ffmeta import __version__
from ffmeta.cli import app


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def metadata_file(tmp_path: Path, sample_metadata: str) -> Path:
    path = tmp_path / "book.ffmetadata"
    path.write_text(sample_metadata, encoding="utf-8")
    return path


@pytest.fixture
def log_file(tmp_path: Path, sample_stream_info: str) -> Path:
    path = tmp_path / "ffmpeg.log"
    path.write_text(sample_stream_info, encoding="utf-8")
    return path


class TestCliHelp:
    """Test CLI help output."""

    def test_main_help(self, runner: CliRunner) -> None:
        """Main help lists the show command."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "show" in result.output

    def test_version_option(self, runner: CliRunner) -> None:
        """--version prints the version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestShow:
    """Tests for the show command."""

    def test_tables(self, runner: CliRunner, metadata_file: Path, log_file: Path) -> None:
        """Table output includes tags and chapters."""
        result = runner.invoke(app, ["show", str(metadata_file), "--stream-info", str(log_file)])
        assert result.exit_code == 0
        assert "The Long Road" in result.output
        assert "Opening Credits" in result.output
        assert "00:40:00.200" in result.output

    def test_json(self, runner: CliRunner, metadata_file: Path, log_file: Path) -> None:
        """JSON output carries tag, chapters and stream info."""
        result = runner.invoke(app, ["show", str(metadata_file), "-s", str(log_file), "--json"])
        assert result.exit_code == 0
        report = json.loads(result.stdout)
        assert report["tag"]["title"] == "The Long Road"
        assert [c["title"] for c in report["chapters"]] == ["Opening Credits", "Chapter 1", "Chapter 2"]
        assert report["chapters"][0]["length_ms"] == 61500
        assert report["duration_ms"] == 2_400_200
        assert report["format"] == "mp4"
        assert report["codec"] == "aac"
        assert report["channels"] == 2

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Unreadable input exits with status 1."""
        result = runner.invoke(app, ["show", str(tmp_path / "missing.txt")])
        assert result.exit_code == 1

    def test_malformed_duration(self, runner: CliRunner, metadata_file: Path, tmp_path: Path) -> None:
        """A fatal parse error exits with status 1."""
        bad_log = tmp_path / "bad.log"
        bad_log.write_text("  Duration: 12:00, start: 0\n", encoding="utf-8")
        result = runner.invoke(app, ["show", str(metadata_file), "-s", str(bad_log)])
        assert result.exit_code == 1

    def test_no_chapters(self, runner: CliRunner, tmp_path: Path) -> None:
        """Documents without chapters say so."""
        path = tmp_path / "plain.txt"
        path.write_text(";FFMETADATA1\ntitle=Solo\n", encoding="utf-8")
        result = runner.invoke(app, ["show", str(path)])
        assert result.exit_code == 0
        assert "No chapters found" in result.output


class TestShowLogging:
    """Logging configuration of the show command."""

    def test_log_level_from_env(self, runner: CliRunner, metadata_file: Path) -> None:
        """LOG_LEVEL applies when --log-level is not given."""
        with mock.patch.dict(os.environ, {"LOG_LEVEL": "DEBUG"}):
            result = runner.invoke(app, ["show", str(metadata_file)])
        assert result.exit_code == 0
        assert logging.getLogger("ffmeta").level == logging.DEBUG

    def test_log_level_option_wins(self, runner: CliRunner, metadata_file: Path) -> None:
        """--log-level overrides LOG_LEVEL."""
        with mock.patch.dict(os.environ, {"LOG_LEVEL": "DEBUG"}):
            result = runner.invoke(app, ["show", str(metadata_file), "--log-level", "ERROR"])
        assert result.exit_code == 0
        assert logging.getLogger("ffmeta").level == logging.ERROR

    def test_json_keeps_console_quiet(self, runner: CliRunner, metadata_file: Path) -> None:
        """JSON output only lets warnings reach stderr."""
        result = runner.invoke(app, ["show", str(metadata_file), "--json", "--log-level", "DEBUG"])
        assert result.exit_code == 0
        assert logging.getLogger("ffmeta").handlers[0].level == logging.WARNING
        assert json.loads(result.stdout)["tag"]["title"] == "The Long Road"

    def test_invalid_env_log_level(self, runner: CliRunner, metadata_file: Path) -> None:
        """A bad LOG_LEVEL exits with status 1."""
        with mock.patch.dict(os.environ, {"LOG_LEVEL": "LOUD"}):
            result = runner.invoke(app, ["show", str(metadata_file)])
        assert result.exit_code == 1
