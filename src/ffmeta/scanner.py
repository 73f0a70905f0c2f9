"""
Codepoint cursor over a text buffer.

Python strings index by codepoint, so multi-byte titles and descriptions are
never split mid-character. All scans report success as a bool; a missing line
or delimiter is never an error.

Example:
    >>> scanner = Scanner("title=Book\\nartist=Someone")
    >>> scanner.scan_line()
    True
    >>> scanner.result
    'title=Book'
"""

from __future__ import annotations

LINE_FEED = "\n"
CARRIAGE_RETURN = "\r"


class Scanner:
    """Line- and delimiter-wise cursor.

    ``result`` always holds the span covered by the most recent scan.
    """

    def __init__(self, text: str = "") -> None:
        self._text = ""
        self._position = 0
        self._result = ""
        self.initialize(text)

    def initialize(self, text: str) -> None:
        """Replace the buffer and move the cursor to the start."""
        self._text = text
        self._position = 0
        self._result = ""

    @property
    def result(self) -> str:
        """Span covered by the last scan, unmodified."""
        return self._result

    @property
    def trimmed_result(self) -> str:
        """Span covered by the last scan, surrounding whitespace removed."""
        return self._result.strip()

    def _at_end(self) -> bool:
        return self._position >= len(self._text)

    def scan_line(self) -> bool:
        """
        Scan up to the next line terminator and consume it.

        Recognizes ``\\n``, ``\\r\\n`` and a lone ``\\r``. The terminator is not
        part of ``result``.

        Returns:
            False once the cursor is at the end of the buffer.
        """
        if self._at_end():
            self._result = ""
            return False

        text = self._text
        start = self._position
        end = start
        length = len(text)
        while end < length and text[end] not in (LINE_FEED, CARRIAGE_RETURN):
            end += 1

        self._result = text[start:end]

        if end < length and text[end] == CARRIAGE_RETURN:
            end += 1
            if end < length and text[end] == LINE_FEED:
                end += 1
        elif end < length:
            end += 1

        self._position = end
        return True

    def scan_forward(self, delimiter: str) -> bool:
        """
        Scan up to the first occurrence of ``delimiter``.

        On success the cursor rests just before the delimiter and ``result``
        holds the text between the old position and the delimiter. On failure
        neither the cursor nor ``result`` change.
        """
        if not delimiter:
            return False

        index = self._text.find(delimiter, self._position)
        if index == -1:
            return False

        self._result = self._text[self._position : index]
        self._position = index
        return True

    def advance(self, count: int = 1) -> None:
        """Step the cursor over ``count`` codepoints (e.g. a found delimiter)."""
        self._position = min(len(self._text), self._position + max(count, 0))

    def scan_to_end(self) -> bool:
        """Scan the remainder of the buffer.

        Returns:
            True if anything was left to scan.
        """
        self._result = self._text[self._position :]
        self._position = len(self._text)
        return self._result != ""
