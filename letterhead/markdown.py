"""Lightweight markdown pass turning page fragments into render blocks.

Only the handful of constructs used in letters are recognised: ``#`` to
``###`` headings, numbered items, ``- `` bullets, ``**bold**`` spans and
blank spacer lines. Each fragment becomes exactly one block; the blocks are
not aware of page boundaries.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .layout import Page


class BlockType(Enum):
    HEADING = "heading"
    ORDERED_ITEM = "ordered_item"
    BULLET_ITEM = "bullet_item"
    PARAGRAPH = "paragraph"
    SPACER = "spacer"


@dataclass(frozen=True)
class Span:
    text: str
    bold: bool = False


@dataclass(frozen=True)
class Block:
    """A block-level render instruction for one fragment.

    Attributes:
        kind: What the fragment renders as.
        spans: Inline text runs; empty for spacers.
        level: Heading level (1-3), 0 for other blocks.
    """
    kind: BlockType
    spans: Tuple[Span, ...] = ()
    level: int = 0

    @property
    def text(self) -> str:
        """Plain text of the block without inline markers."""
        return "".join(span.text for span in self.spans)

    @property
    def has_bold(self) -> bool:
        return any(span.bold for span in self.spans)


_HEADING_RE = re.compile(r"^(#{1,3}) ")
_ORDERED_RE = re.compile(r"^\d+\.")
# Non-greedy so that two bold runs on one line stay separate
_BOLD_RE = re.compile(r"(\*\*.*?\*\*)")


def parse_spans(text: str) -> Tuple[Span, ...]:
    """Split text into plain and ``**bold**`` spans."""
    spans: List[Span] = []
    for part in _BOLD_RE.split(text):
        if not part:
            continue
        if len(part) >= 4 and part.startswith("**") and part.endswith("**"):
            spans.append(Span(part[2:-2], bold=True))
        else:
            spans.append(Span(part))
    return tuple(spans)


def parse_line(fragment: str) -> Block:
    """Classify a single fragment.

    Headings are matched on the raw fragment; list and spacer checks look
    at the fragment with surrounding whitespace removed. Ordered items keep
    the fragment as written, indentation included.
    """
    m = _HEADING_RE.match(fragment)
    if m:
        level = len(m.group(1))
        return Block(BlockType.HEADING, (Span(fragment[m.end():]),), level)

    stripped = fragment.strip()
    if _ORDERED_RE.match(stripped):
        return Block(BlockType.ORDERED_ITEM, parse_spans(fragment))
    if stripped.startswith("- "):
        return Block(BlockType.BULLET_ITEM, parse_spans(stripped[2:]))
    if not stripped:
        return Block(BlockType.SPACER)
    return Block(BlockType.PARAGRAPH, parse_spans(fragment))


def render_page(page: Page) -> List[Block]:
    """Return one block per fragment of ``page``, in order."""
    return [parse_line(fragment) for fragment in page.fragments]
