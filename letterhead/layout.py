"""Page layout for letterhead documents.

Splits a document into logical lines and packs them greedily onto pages of
fixed capacity. A line that does not fit in the room left on a page is cut
at a word boundary (or hard-cut when no usable space exists) and continues
on the following page. Layout is a pure function of the document text and
the layout parameters; pages are recomputed from scratch on every call.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Optional, Tuple

from .constants import LayoutConstants


@dataclass(frozen=True)
class LayoutParams:
    """Page geometry used by the packer.

    Attributes:
        chars_per_line: Average characters that fit one visual line.
        max_lines_per_page: Visual lines that fit the body of one page.
        word_break_threshold: A space is only used as a cut point when it
            sits at or after this fraction of the character budget.
    """
    chars_per_line: int = LayoutConstants.CHARS_PER_LINE
    max_lines_per_page: int = LayoutConstants.MAX_LINES_PER_PAGE
    word_break_threshold: float = LayoutConstants.WORD_BREAK_THRESHOLD

    def __post_init__(self):
        if self.chars_per_line < 1:
            raise ValueError(f"chars_per_line must be positive, got {self.chars_per_line}")
        if self.max_lines_per_page < 1:
            raise ValueError(f"max_lines_per_page must be positive, got {self.max_lines_per_page}")
        if not 0.0 <= self.word_break_threshold <= 1.0:
            raise ValueError(
                f"word_break_threshold must be between 0 and 1, got {self.word_break_threshold}"
            )

    @property
    def page_chars(self) -> int:
        """Characters that fill an empty page."""
        return self.chars_per_line * self.max_lines_per_page


class Fragment(NamedTuple):
    """A contiguous piece of one logical line placed on a page.

    ``separator`` is the text consumed between this fragment and the next
    piece of the same line: ``" "`` after a word-boundary cut, ``""`` after a
    hard cut, and ``None`` when the fragment ends its logical line.
    """
    text: str
    line_index: int
    separator: Optional[str] = None

    @property
    def continues(self) -> bool:
        return self.separator is not None


@dataclass
class Page:
    """One printed sheet worth of fragments, in source order."""
    number: int
    pieces: List[Fragment] = field(default_factory=list)

    @property
    def fragments(self) -> List[str]:
        return [piece.text for piece in self.pieces]

    def __len__(self) -> int:
        return len(self.pieces)


def line_cost(line: str, chars_per_line: int = LayoutConstants.CHARS_PER_LINE) -> int:
    """Return the number of visual lines a logical line occupies.

    An empty line still takes one row.
    """
    return max(1, math.ceil(len(line) / chars_per_line))


def page_cost(page: Page, chars_per_line: int = LayoutConstants.CHARS_PER_LINE) -> int:
    """Return the total visual lines used by a page."""
    return sum(line_cost(text, chars_per_line) for text in page.fragments)


def find_break(text: str, budget: int,
               threshold: float = LayoutConstants.WORD_BREAK_THRESHOLD) -> Tuple[int, str]:
    """Find where to cut ``text`` so the prefix fits in ``budget`` characters.

    Searches backward from ``budget`` for a space. The space is used when it
    is not too early (index >= threshold * budget); otherwise the cut is a
    hard cut exactly at ``budget``.

    Args:
        text: Text longer than ``budget``.
        budget: Number of characters available.
        threshold: Fraction of the budget below which a space is rejected.

    Returns:
        Tuple of (cut_index, separator) where separator is the text consumed
        at the cut: ``" "`` for a word boundary, ``""`` for a hard cut.
    """
    space = text.rfind(" ", 0, budget + 1)
    if space > 0 and space >= budget * threshold:
        return space, " "
    return budget, ""


def paginate(lines: Iterable[str], params: Optional[LayoutParams] = None) -> List[Page]:
    """Pack logical lines onto pages.

    Args:
        lines: Logical lines in source order.
        params: Page geometry; defaults to ``LayoutParams()``.

    Returns:
        Pages in print order. Always at least one page.
    """
    params = params or LayoutParams()
    capacity = params.max_lines_per_page
    width = params.chars_per_line

    pages: List[Page] = []
    current: List[Fragment] = []
    used = 0

    def close_page() -> None:
        nonlocal current, used
        pages.append(Page(number=len(pages) + 1, pieces=current))
        current = []
        used = 0

    for index, line in enumerate(lines):
        remainder = line
        while True:
            cost = line_cost(remainder, width)
            if used + cost <= capacity:
                current.append(Fragment(remainder, index))
                used += cost
                break

            room = capacity - used
            if room > 0 and len(remainder) > width:
                cut, separator = find_break(remainder, room * width, params.word_break_threshold)
                current.append(Fragment(remainder[:cut], index, separator))
                close_page()
                remainder = remainder[cut + len(separator):]
            else:
                # Page is full; the next pass starts on a fresh page
                close_page()

    if current or not pages:
        close_page()

    return pages


def layout(document: str, params: Optional[LayoutParams] = None) -> List[Page]:
    """Lay out raw document text into pages.

    Args:
        document: Newline-delimited document text.
        params: Page geometry; defaults to ``LayoutParams()``.

    Returns:
        Pages in print order. An empty document yields one empty page.
    """
    if not document:
        return paginate([], params)
    return paginate(document.split("\n"), params)


def reassemble(pages: Iterable[Page]) -> List[str]:
    """Rebuild the logical lines that produced ``pages``."""
    lines: List[str] = []
    pending: Optional[str] = None
    for page in pages:
        for piece in page.pieces:
            if pending is None:
                pending = piece.text
            else:
                pending += piece.text
            if piece.continues:
                pending += piece.separator
            else:
                lines.append(pending)
                pending = None
    if pending is not None:
        lines.append(pending)
    return lines
