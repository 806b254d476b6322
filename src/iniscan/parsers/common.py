from __future__ import annotations

from typing import Optional

from iniscan.parsers.errors import AllocationError

# C-locale isspace(): no unicode whitespace, no \x85 / \xa0 from latin-1 bytes.
WHITESPACE = " \t\n\r\x0b\x0c"
LINE_ENDINGS = "\r\n"
COMMENT_MARKERS = ("#", ";")

# Input is raw single-byte text; latin-1 maps every byte to one code point.
SOURCE_ENCODING = "latin-1"


def strip_region(text: str, length: Optional[int] = None) -> str:
    """
    Return a trimmed copy of text[:length].

    Examples:
      strip_region("  foo  =  bar ", 7)  -> "foo"
      strip_region(" \\t\\r\\n")            -> ""
    """
    if length is None or length > len(text):
        length = len(text)
    elif length < 0:
        length = 0

    try:
        return text[:length].strip(WHITESPACE)
    except MemoryError as e:
        raise AllocationError("out of memory while trimming a line") from e


def is_blank(line: str) -> bool:
    return not line.strip(WHITESPACE)


def is_skippable(line: str) -> bool:
    """Comment lines, bare line endings and whitespace-only lines."""
    if not line:
        return True
    first = line[0]
    if first in COMMENT_MARKERS or first in LINE_ENDINGS:
        return True
    return is_blank(line)
