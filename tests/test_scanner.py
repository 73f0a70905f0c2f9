"""Tests for the codepoint scanner."""

from __future__ import annotations

from ffmeta.scanner import Scanner


class TestScanLine:
    """Tests for line-wise scanning."""

    def test_scans_lines_in_order(self) -> None:
        """Each call yields the next line without its terminator."""
        scanner = Scanner("one\ntwo\nthree")
        lines = []
        while scanner.scan_line():
            lines.append(scanner.result)
        assert lines == ["one", "two", "three"]

    def test_trailing_newline_does_not_add_line(self) -> None:
        """A final terminator does not produce an extra empty line."""
        scanner = Scanner("one\n")
        assert scanner.scan_line()
        assert scanner.result == "one"
        assert not scanner.scan_line()

    def test_blank_lines_are_lines(self) -> None:
        """Empty lines between terminators are still produced."""
        scanner = Scanner("a\n\nb")
        results = []
        while scanner.scan_line():
            results.append(scanner.result)
        assert results == ["a", "", "b"]

    def test_crlf_and_cr_terminators(self) -> None:
        """CRLF and lone CR both end a line."""
        scanner = Scanner("a\r\nb\rc")
        results = []
        while scanner.scan_line():
            results.append(scanner.result)
        assert results == ["a", "b", "c"]

    def test_empty_input(self) -> None:
        """Nothing to scan in an empty buffer."""
        scanner = Scanner("")
        assert not scanner.scan_line()
        assert scanner.result == ""

    def test_trimmed_result(self) -> None:
        """Trimmed result strips surrounding whitespace only."""
        scanner = Scanner("   title = x  \n")
        scanner.scan_line()
        assert scanner.result == "   title = x  "
        assert scanner.trimmed_result == "title = x"

    def test_initialize_resets_cursor(self) -> None:
        """Re-initializing starts over on the new buffer."""
        scanner = Scanner("first\nsecond")
        scanner.scan_line()
        scanner.initialize("other")
        assert scanner.scan_line()
        assert scanner.result == "other"

    def test_multibyte_text_kept_intact(self) -> None:
        """Non-ASCII codepoints survive line scanning."""
        scanner = Scanner("title=Schöne Grüße 🎧\nnext")
        scanner.scan_line()
        assert scanner.result == "title=Schöne Grüße 🎧"


class TestScanForward:
    """Tests for delimiter scanning."""

    def test_stops_before_delimiter(self) -> None:
        """Result holds text up to the delimiter; cursor rests on it."""
        scanner = Scanner("key=value")
        assert scanner.scan_forward("=")
        assert scanner.result == "key"
        scanner.scan_to_end()
        assert scanner.result == "=value"

    def test_missing_delimiter_returns_false(self) -> None:
        """A missing delimiter is reported, not raised."""
        scanner = Scanner("no delimiter here")
        assert not scanner.scan_forward("=")
        scanner.scan_to_end()
        assert scanner.result == "no delimiter here"

    def test_first_occurrence_wins(self) -> None:
        """Only the first delimiter counts."""
        scanner = Scanner("a=b=c")
        scanner.scan_forward("=")
        scanner.advance(1)
        scanner.scan_to_end()
        assert scanner.result == "b=c"

    def test_multichar_delimiter(self) -> None:
        """Delimiters may be longer than one codepoint."""
        scanner = Scanner("Stream #0:0: Audio: mp3")
        assert scanner.scan_forward("Audio: ")
        assert scanner.result == "Stream #0:0: "

    def test_codepoint_positions(self) -> None:
        """Positions count codepoints, not bytes."""
        scanner = Scanner("ü🎧=x")
        assert scanner.scan_forward("=")
        assert scanner.result == "ü🎧"
        scanner.advance(1)
        scanner.scan_to_end()
        assert scanner.result == "x"


class TestScanToEnd:
    """Tests for scanning the remainder."""

    def test_scan_to_end(self) -> None:
        """Remainder from the cursor becomes the result."""
        scanner = Scanner("1/44100")
        scanner.scan_forward("/")
        scanner.advance(1)
        assert scanner.scan_to_end()
        assert scanner.result == "44100"
        assert not scanner.scan_line()

    def test_scan_to_end_when_exhausted(self) -> None:
        """Nothing left yields False and an empty result."""
        scanner = Scanner("x")
        scanner.scan_to_end()
        assert not scanner.scan_to_end()
        assert scanner.result == ""
