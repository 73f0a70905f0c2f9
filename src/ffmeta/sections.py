"""
Section parsers for ffmetadata export documents.

An export looks like::

    ;FFMETADATA1
    title=My Book
    description=First line\\
    second line
    [CHAPTER]
    TIMEBASE=1/1000
    START=0
    END=5000
    title=Intro

Nothing before the ``;FFMETADATA1`` header is read. Global ``key=value``
properties follow until the first ``[CHAPTER]`` line; from there on every
``[CHAPTER]`` line closes one chapter block and opens the next.

Key functions:
    - MetadataSectionParser.parse(): Scan a whole document
    - ChapterSectionParser.parse(): Consume chapter blocks from a positioned scanner
    - split_property(): Split one ``key=value`` line
    - build_chapter(): Turn a chapter property block into a Chapter
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from enum import Enum, auto

from ffmeta.duration import Duration
from ffmeta.models import Chapter, MetadataDocument
from ffmeta.scanner import LINE_FEED, Scanner

logger = logging.getLogger(__name__)

METADATA_MARKER = ";ffmetadata1"
CHAPTER_MARKER = "[chapter]"
COMMENT_PREFIX = ";"
CONTINUATION_SUFFIX = "\\"

REQUIRED_CHAPTER_KEYS = ("start", "end", "timebase")

_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


class ParseMode(Enum):
    """Where the metadata scan currently is."""

    SKIPPING = auto()  # Before the header
    METADATA = auto()  # Global properties
    CHAPTERS = auto()  # Chapter blocks until end of input


def next_mode(mode: ParseMode, marker: str) -> ParseMode:
    """
    Transition on a lower-cased, trimmed line.

    The header enters (or re-enters) metadata mode from anywhere before the
    chapters; the chapter marker only counts once the header has been seen.
    Chapter mode is terminal.
    """
    if mode is ParseMode.CHAPTERS:
        return mode
    if marker == METADATA_MARKER:
        return ParseMode.METADATA
    if mode is ParseMode.METADATA and marker == CHAPTER_MARKER:
        return ParseMode.CHAPTERS
    return mode


def split_property(line: str) -> tuple[str, str] | None:
    """
    Split a line on its first ``=``.

    Returns:
        (lower-cased trimmed key, trimmed value), or None when the line has
        no ``=`` or the key is empty.
    """
    scanner = Scanner(line)
    if not scanner.scan_forward("="):
        return None
    key = scanner.trimmed_result.lower()
    if not key:
        return None

    scanner.advance(len("="))
    scanner.scan_to_end()
    return key, scanner.trimmed_result


def coerce_int(value: str) -> int:
    """Leading-integer conversion: "12abc" -> 12, "abc" -> 0."""
    match = _LEADING_INT_PATTERN.match(value)
    return int(match.group(1)) if match else 0


def parse_tick_unit(timebase: str) -> float | None:
    """
    Milliseconds per tick for a ``<numerator>/<denominator>`` timebase.

    Only the denominator is used, divided by 1000. Returns None when the value
    has no ``/``.
    """
    scanner = Scanner(timebase)
    if not scanner.scan_forward("/"):
        return None
    scanner.advance(len("/"))
    scanner.scan_to_end()
    return coerce_int(scanner.trimmed_result) / 1000


def build_chapter(properties: Mapping[str, str]) -> Chapter | None:
    """
    Build a chapter from one block's properties.

    Blocks lacking start, end or timebase (or with a timebase that has no
    ``/``) are dropped. Numbers that do not parse become zero.
    """
    missing = [key for key in REQUIRED_CHAPTER_KEYS if key not in properties]
    if missing:
        logger.debug("Dropping chapter block without %s", ", ".join(missing))
        return None

    tick_unit = parse_tick_unit(properties["timebase"])
    if tick_unit is None:
        logger.debug("Dropping chapter block with timebase %r", properties["timebase"])
        return None

    start = Duration.from_ticks(coerce_int(properties["start"]), tick_unit)
    end = Duration.from_ticks(coerce_int(properties["end"]), tick_unit)
    return Chapter(start=start, length=end - start, title=properties.get("title", ""))


class ChapterSectionParser:
    """Consumes ``[CHAPTER]`` blocks from a scanner already past the first marker."""

    def __init__(self, scanner: Scanner) -> None:
        self._scanner = scanner

    def parse(self) -> list[Chapter]:
        chapters: list[Chapter] = []
        block: dict[str, str] = {}

        while self._scanner.scan_line():
            line = self._scanner.trimmed_result
            if line.lower() == CHAPTER_MARKER:
                self._finalize(block, chapters)
                block = {}
                continue

            prop = split_property(line)
            if prop is None:
                continue
            key, value = prop
            block[key] = value

        if block:
            self._finalize(block, chapters)

        return chapters

    @staticmethod
    def _finalize(block: Mapping[str, str], chapters: list[Chapter]) -> None:
        chapter = build_chapter(block)
        if chapter is not None:
            chapters.append(chapter)


class MetadataSectionParser:
    """Scans a whole export document into properties and chapters."""

    def __init__(self, scanner: Scanner | None = None) -> None:
        self._scanner = scanner or Scanner()

    def parse(self, text: str) -> MetadataDocument:
        """
        Parse an ffmetadata export.

        Args:
            text: Export document text

        Returns:
            MetadataDocument; empty when the header is missing.
        """
        document = MetadataDocument()
        scanner = self._scanner
        scanner.initialize(text)

        mode = ParseMode.SKIPPING
        while scanner.scan_line():
            line = scanner.trimmed_result
            mode = next_mode(mode, line.lower())

            if mode is ParseMode.CHAPTERS:
                document.chapters = ChapterSectionParser(scanner).parse()
                break

            if mode is ParseMode.SKIPPING or line.lower() == METADATA_MARKER:
                continue

            # An escaped newline extends comments too
            line = self._join_continuation(line)
            if line.startswith(COMMENT_PREFIX):
                continue

            prop = split_property(line)
            if prop is None:
                continue
            key, value = prop
            document.properties[key] = value

        return document

    def _join_continuation(self, line: str) -> str:
        """Join lines while the accumulated line ends with a backslash."""
        while line.endswith(CONTINUATION_SUFFIX):
            line = line[: -len(CONTINUATION_SUFFIX)]
            if not self._scanner.scan_line():
                break
            line = line + LINE_FEED + self._scanner.trimmed_result
        return line
