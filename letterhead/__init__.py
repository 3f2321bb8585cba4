"""Letterhead - paginate markdown letters onto company letterhead."""

from .layout import Fragment, LayoutParams, Page, layout, line_cost, paginate, reassemble
from .markdown import Block, BlockType, Span, render_page

__all__ = [
    'Fragment',
    'LayoutParams',
    'Page',
    'layout',
    'line_cost',
    'paginate',
    'reassemble',
    'Block',
    'BlockType',
    'Span',
    'render_page',
]
