"""ffmeta - Audiobook tags and chapters from ffmetadata exports and ffmpeg logs."""

from ffmeta.duration import Duration
from ffmeta.exceptions import (
    ConfigurationError,
    DurationFormatError,
    FfmetaError,
    ParseError,
    StreamInfoError,
)
from ffmeta.models import AudioCodec, AudioFormat, Channels, Chapter, StreamInfo, Tag
from ffmeta.parser import FfmetadataParser

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Parser
    "FfmetadataParser",
    # Models
    "AudioCodec",
    "AudioFormat",
    "Channels",
    "Chapter",
    "Duration",
    "StreamInfo",
    "Tag",
    # Exceptions
    "FfmetaError",
    "ConfigurationError",
    "ParseError",
    "DurationFormatError",
    "StreamInfoError",
]
