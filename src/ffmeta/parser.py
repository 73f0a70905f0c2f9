"""
Facade over the metadata, chapter and stream info parsers.

Usage:
    parser = FfmetadataParser()
    parser.parse(metadata_text, stream_info_text)
    tag = parser.to_tag()
    for chapter in parser.chapters:
        print(chapter.start, chapter.title)

One instance is not safe to share between threads; use one parser per
concurrent parse() call.
"""

from __future__ import annotations

import logging
from dataclasses import replace

import pydantic

from ffmeta.duration import Duration
from ffmeta.env_settings import get_env_settings
from ffmeta.exceptions import ConfigurationError
from ffmeta.models import AudioCodec, AudioFormat, Channels, Chapter, StreamInfo, Tag
from ffmeta.scanner import Scanner
from ffmeta.sections import MetadataSectionParser
from ffmeta.stream_info import StreamInfoParser
from ffmeta.tag import project_tag

logger = logging.getLogger(__name__)


def _carry_stream_info_setting() -> bool:
    try:
        return get_env_settings().parser.carry_stream_info
    except pydantic.ValidationError as e:
        raise ConfigurationError(
            f"Invalid parser settings: {e}", field="FFMETA_CARRY_STREAM_INFO"
        ) from e


class FfmetadataParser:
    """Extracts tags, chapters and stream info from the tool's text output."""

    def __init__(
        self,
        scanner: Scanner | None = None,
        *,
        carry_stream_info: bool | None = None,
    ) -> None:
        """
        Args:
            scanner: Scanner shared by all section parsers
            carry_stream_info: Keep stream info from earlier parse() calls.
                None reads FFMETA_CARRY_STREAM_INFO.
        """
        self._scanner = scanner or Scanner()
        self._carry_stream_info = (
            _carry_stream_info_setting() if carry_stream_info is None else carry_stream_info
        )
        self._properties: dict[str, str] = {}
        self._chapters: list[Chapter] = []
        self._stream_info = StreamInfo()

    def parse(self, metadata: str, stream_info: str = "") -> None:
        """
        Parse a metadata export and, optionally, diagnostic log text.

        Properties and chapters from earlier calls are discarded. Stream info
        is discarded too unless carry-over is enabled.

        Args:
            metadata: ffmetadata export document
            stream_info: Diagnostic log output; skipped when empty

        Raises:
            StreamInfoError: If the log carries a malformed duration token
        """
        self._reset()

        document = MetadataSectionParser(self._scanner).parse(metadata)
        self._properties = document.properties
        self._chapters = document.chapters

        if stream_info != "":
            StreamInfoParser(self._scanner).parse(stream_info, self._stream_info)

        logger.debug(
            "Parsed %d properties, %d chapters, duration=%s, format=%s",
            len(self._properties),
            len(self._chapters),
            self._stream_info.duration,
            self.format,
        )

    def _reset(self) -> None:
        self._properties = {}
        self._chapters = []
        if not self._carry_stream_info:
            self._stream_info.reset()

    @property
    def chapters(self) -> list[Chapter]:
        return list(self._chapters)

    @property
    def properties(self) -> dict[str, str]:
        return dict(self._properties)

    @property
    def stream_info(self) -> StreamInfo:
        return replace(self._stream_info)

    @property
    def duration(self) -> Duration | None:
        return self._stream_info.duration

    @property
    def format(self) -> str | None:
        """Detected container format ("mp4", "mp3") or None."""
        audio_format: AudioFormat | None = self._stream_info.format
        return audio_format.value if audio_format else None

    @property
    def codec(self) -> AudioCodec | None:
        return self._stream_info.codec

    @property
    def channels(self) -> Channels | None:
        return self._stream_info.channels

    def get_property(self, name: str) -> str | None:
        return self._properties.get(name)

    def to_tag(self) -> Tag:
        return project_tag(self._properties)
