"""
Suggestion Text Utilities - Line lookup and word-boundary helpers.

Line breaks follow the editor convention: "\\r\\n", "\\r" and "\\n" each end a
line and are not part of the line's text.
"""

import re
from typing import Iterator, Optional, Tuple

from .models import Line

_LINE_BREAK_RE = re.compile(r"\r\n?|\n")

# Same boundary class the phrase matcher uses: whitespace, period and every
# other non-word character all count.
_BOUNDARY_RE = re.compile(r"\W")


def iter_lines(text: str) -> Iterator[Line]:
    """
    Yield every line of text with its absolute offsets.

    An empty text still has one (empty) line, as does the position after a
    trailing line break.
    """
    number = 1
    start = 0
    for brk in _LINE_BREAK_RE.finditer(text):
        yield Line(number, start, brk.start(), text[start:brk.start()])
        number += 1
        start = brk.end()
    yield Line(number, start, len(text), text[start:])


def line_at(text: str, offset: int) -> Line:
    """
    Return the line containing offset.

    An offset sitting on a line break belongs to the line the break ends.

    Raises:
        ValueError: If offset is outside [0, len(text)]
    """
    if offset < 0 or offset > len(text):
        raise ValueError(f"Offset {offset} outside document of length {len(text)}")

    for line in iter_lines(text):
        if offset <= line.to_offset:
            return line
    # iter_lines always ends with a line reaching len(text)
    raise AssertionError("unreachable")


def line_count(text: str) -> int:
    """Number of lines in text, counting an empty text as zero lines."""
    if not text:
        return 0
    return len(_LINE_BREAK_RE.findall(text)) + 1


def is_boundary_char(char: Optional[str]) -> bool:
    """
    Check whether char separates words.

    Missing characters (before the start or after the end) do not count here;
    callers bound their scans explicitly.
    """
    return bool(char) and _BOUNDARY_RE.match(char) is not None


def expand_to_word_boundaries(
    text: str, start: int, end: int, line: Optional[Line] = None
) -> Tuple[int, int]:
    """
    Grow [start, end) outward to the nearest word boundaries within one line.

    Scans left from start and right from end, stopping at the first boundary
    character or at the line's start/end.

    Args:
        text: Full document text
        start: Selection start offset
        end: Selection end offset
        line: Line containing start (looked up when omitted)

    Returns:
        Tuple of (expanded_start, expanded_end)

    Example:
        expand_to_word_boundaries("the quick brown fox", 4, 8)
        # (4, 9) -> "quick"
    """
    if line is None:
        line = line_at(text, start)

    new_start = start
    while new_start > line.from_offset and not is_boundary_char(text[new_start - 1]):
        new_start -= 1

    new_end = end
    while new_end < line.to_offset and not is_boundary_char(text[new_end]):
        new_end += 1

    return new_start, new_end
