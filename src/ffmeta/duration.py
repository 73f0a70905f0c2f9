"""
Duration value type used for chapter offsets and overall playback length.

Durations are kept in milliseconds. They are built either from an integer
tick count scaled by a unit (milliseconds per tick), or from the tool's default
time representation ``HH:MM:SS.fraction``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ffmeta.exceptions import DurationFormatError

MILLISECOND = 1.0
SECOND = 1000.0
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

# 00:09:58.50, 1:02:03, 100:00:00.123456
TIME_FORMAT_PATTERN = re.compile(
    r"^(?P<hours>\d+):(?P<minutes>\d{1,2}):(?P<seconds>\d{1,2})(?:\.(?P<fraction>\d+))?$"
)


@dataclass(frozen=True, order=True)
class Duration:
    """Immutable span of time.

    Attributes:
        milliseconds: Length in milliseconds; may be fractional when built
            from ticks with a non-integral unit, and may be negative.
    """

    milliseconds: float = 0.0

    @classmethod
    def from_ticks(cls, amount: int, unit: float = MILLISECOND) -> Duration:
        """Build from ``amount`` ticks of ``unit`` milliseconds each."""
        return cls(amount * unit)

    @classmethod
    def from_format(cls, token: str) -> Duration:
        """
        Parse a ``HH:MM:SS.fraction`` token.

        The fraction is a decimal part of a second and is rounded to whole
        milliseconds.

        Args:
            token: Time token, e.g. "00:09:58.50"

        Returns:
            Duration with millisecond resolution.

        Raises:
            DurationFormatError: If the token is not in the expected form
        """
        match = TIME_FORMAT_PATTERN.match(token.strip())
        if not match:
            raise DurationFormatError(f"Invalid time format: {token!r}", token=token)

        minutes = int(match.group("minutes"))
        seconds = int(match.group("seconds"))
        if minutes >= 60 or seconds >= 60:
            raise DurationFormatError(f"Invalid time format: {token!r}", token=token)

        fraction = match.group("fraction")
        millis = round(float(f"0.{fraction}") * SECOND) if fraction else 0

        total = int(match.group("hours")) * HOUR + minutes * MINUTE + seconds * SECOND + millis
        return cls(total)

    @property
    def seconds(self) -> float:
        return self.milliseconds / SECOND

    def __add__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.milliseconds + other.milliseconds)

    def __sub__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.milliseconds - other.milliseconds)

    def format(self) -> str:
        """Format as ``HH:MM:SS.mmm`` (negative spans get a leading ``-``)."""
        total = round(abs(self.milliseconds))
        sign = "-" if self.milliseconds < 0 and total else ""
        hours, rest = divmod(total, int(HOUR))
        minutes, rest = divmod(rest, int(MINUTE))
        seconds, millis = divmod(rest, int(SECOND))
        return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"

    def __str__(self) -> str:
        return self.format()
