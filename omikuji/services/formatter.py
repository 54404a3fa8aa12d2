from __future__ import annotations

import math
import re

"""Category value formatting for the vertical card columns.

Output uses LF as the line break marker; the view renders each segment as its
own vertical line.
"""

__all__ = [
    "LINE_BREAK",
    "format_category",
    "split_lines",
]

LINE_BREAK = "\n"
TWO_LINE_MIN_LENGTH = 3  # これ未満 (2文字以下) は分割しない

_IDEOGRAPHIC_COMMA = re.compile(r"\s*、\s*")
_WHITESPACE = re.compile(r"\s+")


def format_category(value: str, force_two_lines: bool = False) -> str:
    """Turn a raw category value into display lines.

    - ``、`` (with surrounding whitespace) becomes a line break unless the value
      is already multi-line
    - with ``force_two_lines`` a single-line value is compacted (whitespace
      removed) and split at ceil(len / 2); 2 characters or fewer stay as-is

    >>> format_category("吉、凶")
    '吉\\n凶'
    >>> format_category("お守り", force_two_lines=True)
    'お守\\nり'
    """
    if not value:
        return ""

    base = value if LINE_BREAK in value else _IDEOGRAPHIC_COMMA.sub(LINE_BREAK, value)
    trimmed = base.strip()

    if not force_two_lines or LINE_BREAK in trimmed:
        return trimmed

    compact = _WHITESPACE.sub("", trimmed)
    if len(compact) < TWO_LINE_MIN_LENGTH:
        return compact

    midpoint = math.ceil(len(compact) / 2)
    return f"{compact[:midpoint]}{LINE_BREAK}{compact[midpoint:]}"


def split_lines(formatted: str) -> list[str]:
    if not formatted:
        return []
    return formatted.split(LINE_BREAK)
