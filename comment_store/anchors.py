"""Anchor helpers.

An anchor records where a comment was attached (start and end line and
column, 1-based, end column exclusive) together with the text that
range held at the time.  Once the file is edited the coordinates may
no longer point at that text, so :func:`locate_anchor` searches for it:

1. the original coordinates, if they still hold the snapshot text;
2. the next occurrence at or after the original start, wrapping around
   to the top of the document, as long as it starts on or after the
   original start line;
3. the occurrence whose start line is nearest the original one;
4. the original coordinates again, with a warning.

Text matching is literal and case-insensitive.  Documents are plain
strings; lines are separated by ``\\n``.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from comment_store.app.schemas.comment import Anchor, Comment


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextRange:
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    @classmethod
    def from_anchor(cls, anchor: Anchor) -> "TextRange":
        return cls(anchor.start_line_number, anchor.start_column, anchor.end_line_number, anchor.end_column)

    def contains(self, line: int, col: int) -> bool:
        """Whether the position lies inside the range, edges included."""
        if line < self.start_line or line > self.end_line:
            return False
        if line == self.start_line and col < self.start_col:
            return False
        if line == self.end_line and col > self.end_col:
            return False
        return True


RangeLike = Union[TextRange, Anchor]


def _offset(text: str, line: int, col: int) -> int:
    """Convert a 1-based position to a string offset, clamped to the document."""
    lines = text.split("\n")
    line = min(max(line, 1), len(lines))
    col = min(max(col, 1), len(lines[line - 1]) + 1)
    return sum(len(ln) + 1 for ln in lines[: line - 1]) + col - 1


def _position(text: str, offset: int) -> tuple:
    line = text.count("\n", 0, offset) + 1
    col = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, col


def _range_at(text: str, start: int, end: int) -> TextRange:
    return TextRange(*_position(text, start), *_position(text, end))


def _as_range(r: RangeLike) -> TextRange:
    return TextRange.from_anchor(r) if isinstance(r, Anchor) else r


def value_in_range(text: str, r: RangeLike) -> str:
    """Return the part of ``text`` covered by ``r``."""
    r = _as_range(r)
    start = _offset(text, r.start_line, r.start_col)
    end = _offset(text, r.end_line, r.end_col)
    return text[start:end]


def make_anchor(text: str, start_line: int, start_col: int, end_line: int, end_col: int) -> Anchor:
    """Build an anchor for a range of ``text``, snapshotting its content."""
    r = TextRange(start_line, start_col, end_line, end_col)
    return Anchor(
        start_line_number=start_line,
        start_column=start_col,
        end_line_number=end_line,
        end_column=end_col,
        text=value_in_range(text, r),
    )


def _matches(text: str, needle: str, start: int = 0) -> Iterator[re.Match]:
    return re.compile(re.escape(needle), re.IGNORECASE).finditer(text, start)


def _find_next(text: str, needle: str, start: int) -> Optional[re.Match]:
    match = next(_matches(text, needle, start), None)
    if match is None:
        match = next(_matches(text, needle), None)
    return match


def locate_anchor(text: str, anchor: Anchor) -> TextRange:
    """Return the range of ``text`` the anchor refers to now."""
    original = TextRange.from_anchor(anchor)
    if not anchor.text or value_in_range(text, original) == anchor.text:
        return original

    start = _offset(text, original.start_line, original.start_col)
    match = _find_next(text, anchor.text, start)
    if match is not None:
        found = _range_at(text, match.start(), match.end())
        if found.start_line >= original.start_line:
            return found

    nearest = None
    for m in _matches(text, anchor.text):
        candidate = _range_at(text, m.start(), m.end())
        if nearest is None or abs(candidate.start_line - original.start_line) < abs(
            nearest.start_line - original.start_line
        ):
            nearest = candidate
    if nearest is not None:
        return nearest

    logger.warning(
        "Could not locate comment anchor text reliably. Falling back to original coordinates "
        "for comment originally at %s:%s.",
        original.start_line,
        original.start_col,
    )
    return original


def apply_suggestion(text: str, comment: Comment) -> str:
    """Replace the comment's anchored range with its suggestion.

    Raises ``ValueError`` if the comment has no suggestion.
    """
    if comment.suggestion is None:
        raise ValueError(f"Comment {comment.id} has no suggestion")
    r = locate_anchor(text, comment.anchor)
    start = _offset(text, r.start_line, r.start_col)
    end = _offset(text, r.end_line, r.end_col)
    return text[:start] + comment.suggestion + text[end:]
