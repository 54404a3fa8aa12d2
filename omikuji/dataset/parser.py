from __future__ import annotations

"""Dependency-free CSV parser for the fortune dataset.

Rules:
- CRLF / CR are normalized to LF before scanning
- single pass over the text with an "inside quotes" flag
- ``""`` inside a quoted field is one literal quote (checked before the toggle)
- ``,`` outside quotes ends the cell; LF outside quotes ends the cell and the row
- an unterminated quote at end of text raises MalformedInputError
- a trailing row without a final newline is still emitted; empty text -> no rows

No schema knowledge here; see dataset.mapper for header handling.
"""

__all__ = [
    "MalformedInputError",
    "normalize_newlines",
    "parse_delimited",
    "QUOTE",
    "DELIMITER",
    "LINE_FEED",
]

QUOTE = '"'
DELIMITER = ","
LINE_FEED = "\n"


class MalformedInputError(ValueError):
    """Raised when a quoted field is still open at end of text."""

    def __init__(self, message: str, line: int = -1) -> None:
        super().__init__(message)
        self.line = line  # 開き引用符のある行 (1-based)、不明時 -1


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", LINE_FEED).replace("\r", LINE_FEED)


def parse_delimited(text: str) -> list[list[str]]:
    """Parse CSV text into rows of raw (untrimmed) cell strings.

    >>> parse_delimited('a,,b\\n')
    [['a', '', 'b']]
    >>> parse_delimited('"x, y",z')
    [['x, y', 'z']]
    """
    source = normalize_newlines(text)
    rows: list[list[str]] = []
    row: list[str] = []
    cell: list[str] = []
    quoted = False
    line = 1
    quote_line = -1

    i = 0
    length = len(source)
    while i < length:
        char = source[i]

        # エスケープ判定はトグルより先
        if quoted and char == QUOTE and i + 1 < length and source[i + 1] == QUOTE:
            cell.append(QUOTE)
            i += 2
            continue

        if char == QUOTE:
            quoted = not quoted
            if quoted:
                quote_line = line
            i += 1
            continue

        if char == DELIMITER and not quoted:
            row.append("".join(cell))
            cell = []
            i += 1
            continue

        if char == LINE_FEED:
            line += 1
            if not quoted:
                row.append("".join(cell))
                rows.append(row)
                row = []
                cell = []
                i += 1
                continue

        cell.append(char)
        i += 1

    if quoted:
        raise MalformedInputError(
            f"unterminated quoted field opened on line {quote_line}", line=quote_line
        )

    if cell or row:
        row.append("".join(cell))
        rows.append(row)

    return rows
