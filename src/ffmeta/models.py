"""Data models for ffmeta."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum, IntEnum
from typing import Any

from ffmeta.duration import Duration


class AudioFormat(str, Enum):
    """Container format guessed from the audio stream descriptor."""

    MP4 = "mp4"
    MP3 = "mp3"


class AudioCodec(str, Enum):
    """Audio codec named in the stream descriptor."""

    AAC = "aac"
    MP3 = "mp3"
    ALAC = "alac"


class Channels(IntEnum):
    """Channel layout named in the stream descriptor."""

    MONO = 1
    STEREO = 2


@dataclass(frozen=True)
class Chapter:
    """A single chapter from a ``[CHAPTER]`` block.

    Attributes:
        start: Offset from the beginning of the book
        length: ``end - start``; negative when the source has end < start
        title: Chapter title, empty when the block has none
    """

    start: Duration
    length: Duration
    title: str = ""

    @property
    def end(self) -> Duration:
        return self.start + self.length

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_ms": self.start.milliseconds,
            "length_ms": self.length.milliseconds,
            "title": self.title,
        }


@dataclass(frozen=True)
class Tag:
    """Audiobook tags projected from the global metadata properties.

    Every field is None when the export has no matching property.
    """

    album: str | None = None
    sort_album: str | None = None
    sort_title: str | None = None
    sort_artist: str | None = None
    writer: str | None = None
    genre: str | None = None
    copyright: str | None = None
    encoded_by: str | None = None
    title: str | None = None
    language: str | None = None
    artist: str | None = None
    album_artist: str | None = None
    performer: str | None = None
    disk: str | None = None
    publisher: str | None = None
    track: str | None = None
    encoder: str | None = None
    lyrics: str | None = None
    year: str | None = None
    description: str | None = None
    long_description: str | None = None

    def to_dict(self, *, skip_empty: bool = False) -> dict[str, str | None]:
        data = asdict(self)
        if skip_empty:
            return {key: value for key, value in data.items() if value}
        return data


@dataclass
class StreamInfo:
    """Technical details recovered from diagnostic log text.

    Mutable: the stream info parser fills it in line by line.
    """

    duration: Duration | None = None
    format: AudioFormat | None = None
    codec: AudioCodec | None = None
    channels: Channels | None = None

    def reset(self) -> None:
        self.duration = None
        self.format = None
        self.codec = None
        self.channels = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "duration_ms": self.duration.milliseconds if self.duration else None,
            "format": self.format.value if self.format else None,
            "codec": self.codec.value if self.codec else None,
            "channels": int(self.channels) if self.channels else None,
        }


@dataclass
class MetadataDocument:
    """Result of scanning one metadata export."""

    properties: dict[str, str] = field(default_factory=dict)
    chapters: list[Chapter] = field(default_factory=list)
