"""
Stream info extraction from the tool's diagnostic log output.

The log is free-form. Three line shapes matter::

    Duration: 00:10:00.00, start: 0.000000, bitrate: 128 kb/s
    Stream #0:0(und): Audio: aac (LC) (mp4a / 0x6134706D), 44100 Hz, stereo, fltp, 127 kb/s (default)
    frame=    1 fps=0.0 q=-0.0 Lsize=N/A time=00:09:58.50 bitrate=N/A speed= 360x

The declared ``Duration:`` is only a fallback: once any duration is known,
progress lines overwrite it, and further ``Duration:`` lines are ignored.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from enum import Enum, auto
from typing import TypeVar

from ffmeta.duration import Duration
from ffmeta.exceptions import DurationFormatError, StreamInfoError
from ffmeta.models import AudioCodec, AudioFormat, Channels, StreamInfo
from ffmeta.scanner import Scanner

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Ordered lookup tables: first needle found in the haystack wins
CODEC_TABLE: tuple[tuple[str, AudioCodec], ...] = (
    ("aac", AudioCodec.AAC),
    ("mp3", AudioCodec.MP3),
    ("alac", AudioCodec.ALAC),
)
FORMAT_TABLE: tuple[tuple[str, AudioFormat], ...] = (
    ("mp4a", AudioFormat.MP4),
    ("mp3", AudioFormat.MP3),
)
CHANNEL_TABLE: tuple[tuple[str, Channels], ...] = (
    ("mono", Channels.MONO),
    ("stereo", Channels.STEREO),
)

AUDIO_SEPARATOR = "Audio: "
FIELD_SEPARATOR = ", "

PROGRESS_TIME_PATTERN = re.compile(r"time=(\S+)", re.IGNORECASE)
DECLARED_DURATION_PATTERN = re.compile(r"^\s*Duration:\s+([0-9:.]+)")


class LineKind(Enum):
    """Shape of a diagnostic line."""

    AUDIO_STREAM = auto()
    PROGRESS = auto()
    DECLARED_DURATION = auto()


def classify(table: Sequence[tuple[str, T]], haystack: str) -> T | None:
    """Return the value of the first needle found (case-insensitive) in haystack."""
    lowered = haystack.lower()
    for needle, value in table:
        if needle.lower() in lowered:
            return value
    return None


def classify_line(line: str, has_duration: bool) -> LineKind | None:
    """Classify a log line; the first matching rule wins."""
    lowered = line.lower()
    if "stream #" in lowered and "audio: " in lowered:
        return LineKind.AUDIO_STREAM
    if "frame=" in lowered and "time=" in lowered and has_duration:
        return LineKind.PROGRESS
    if DECLARED_DURATION_PATTERN.match(line):
        return LineKind.DECLARED_DURATION
    return None


class StreamInfoParser:
    """Fills a StreamInfo from diagnostic log text."""

    def __init__(self, scanner: Scanner | None = None) -> None:
        self._scanner = scanner or Scanner()

    def parse(self, text: str, info: StreamInfo | None = None) -> StreamInfo:
        """
        Scan log text line by line.

        Args:
            text: Diagnostic log output
            info: Existing stream info to update in place; a fresh one if None

        Returns:
            The updated StreamInfo.

        Raises:
            StreamInfoError: If a progress or Duration: line carries a
                malformed time token
        """
        if info is None:
            info = StreamInfo()

        scanner = self._scanner
        scanner.initialize(text)
        line_number = 0

        while scanner.scan_line():
            line_number += 1
            line = scanner.result
            kind = classify_line(line, info.duration is not None)

            if kind is LineKind.AUDIO_STREAM:
                self._apply_audio_stream(line, info)
            elif kind is LineKind.PROGRESS:
                info.duration = self._progress_duration(line, line_number) or info.duration
            elif kind is LineKind.DECLARED_DURATION and info.duration is None:
                info.duration = self._declared_duration(line, line_number)

        return info

    @staticmethod
    def _apply_audio_stream(line: str, info: StreamInfo) -> None:
        parts = line.split(AUDIO_SEPARATOR)
        if len(parts) != 2:
            logger.debug("Skipping stream line with %d audio parts: %s", len(parts) - 1, line)
            return

        fields = parts[1].split(FIELD_SEPARATOR)
        info.codec = classify(CODEC_TABLE, fields[0]) or info.codec
        info.format = classify(FORMAT_TABLE, fields[0]) or info.format
        if len(fields) >= 3:
            info.channels = classify(CHANNEL_TABLE, fields[2]) or info.channels

    @staticmethod
    def _progress_duration(line: str, line_number: int) -> Duration | None:
        last_part = line[line.lower().rfind("time=") :]
        match = PROGRESS_TIME_PATTERN.search(last_part)
        if not match:
            return None
        return _parse_token(match.group(1), line, line_number, source="progress")

    @staticmethod
    def _declared_duration(line: str, line_number: int) -> Duration | None:
        match = DECLARED_DURATION_PATTERN.match(line)
        if not match:
            return None
        return _parse_token(match.group(1), line, line_number, source="declared")


def _parse_token(token: str, line: str, line_number: int, *, source: str) -> Duration:
    try:
        duration = Duration.from_format(token)
    except DurationFormatError as e:
        raise StreamInfoError(
            f"Malformed {source} duration {token!r} on line {line_number}",
            source=source,
            line=line,
            line_number=line_number,
        ) from e
    logger.debug("Duration %s from %s line %d", duration, source, line_number)
    return duration
