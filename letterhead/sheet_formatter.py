"""Plain-text letterhead sheets for terminal preview and text printing.

Each laid-out page becomes a fixed-width sheet: the letterhead header, the
page body rendered from markdown blocks, blank padding up to the body
height, and the footer with the page number.
"""

import textwrap
from typing import List, Optional

from .company_config import CompanyConfig, DEFAULT_COMPANY
from .constants import LayoutConstants
from .layout import LayoutParams, Page
from .markdown import Block, BlockType, render_page


class SheetFormatter:
    """Formats pages into fixed-width text sheets with header and footer."""

    RULE_CHAR = "="
    FOOTER_RULE_CHAR = "-"
    BULLET = "* "

    def __init__(self, pages: List[Page], company: CompanyConfig = DEFAULT_COMPANY,
                 params: Optional[LayoutParams] = None,
                 sheet_width: int = LayoutConstants.SHEET_WIDTH):
        """Initialize formatter with laid-out pages.

        Args:
            pages: Pages produced by the layout engine.
            company: Letterhead details for header and footer.
            params: Layout used to produce the pages; sets body width and height.
            sheet_width: Total sheet width in characters.
        """
        self.pages = pages
        self.company = company
        self.params = params or LayoutParams()
        self.sheet_width = max(sheet_width, self.params.chars_per_line)
        self.left_margin = (self.sheet_width - self.params.chars_per_line) // 2
        self.sheets: List[List[str]] = []

    def format_sheets(self) -> List[List[str]]:
        """Format every page into a sheet.

        Returns:
            List of sheets, each a list of lines exactly ``sheet_width`` wide.
        """
        header = self._header_lines()
        self.sheets = []
        for page in self.pages:
            sheet = list(header)
            sheet.extend(self._body_lines(page))
            sheet.extend(self._footer_lines(page.number))
            self.sheets.append([line[:self.sheet_width].ljust(self.sheet_width) for line in sheet])
        return self.sheets

    def _header_lines(self) -> List[str]:
        width = self.sheet_width
        right_width = width // 2 + 5
        left = [self.company.brand.upper(), " ".join(self.company.tagline.upper())]
        right: List[str] = []
        for entry in self.company.header_lines():
            right.extend(textwrap.wrap(entry, right_width) or [""])

        lines = []
        for i in range(max(len(left), len(right))):
            l_text = left[i] if i < len(left) else ""
            r_text = right[i] if i < len(right) else ""
            lines.append(l_text + r_text.rjust(width - len(l_text)))
        lines.append("")
        lines.append(self.company.registration_line().center(width).rstrip())
        lines.append(self.RULE_CHAR * width)
        lines.append("")
        return lines

    def _body_lines(self, page: Page) -> List[str]:
        width = self.params.chars_per_line
        margin = " " * self.left_margin
        lines: List[str] = []
        for block in render_page(page):
            text = self._block_text(block)
            if not text:
                lines.append("")
                continue
            indent = " " * (len(text) - len(text.lstrip()))
            wrapped = textwrap.wrap(text, width, subsequent_indent=indent,
                                    drop_whitespace=True) or [""]
            lines.extend(margin + line for line in wrapped)

        # Pad to the fixed body height so footers line up across sheets
        while len(lines) < self.params.max_lines_per_page:
            lines.append("")
        return lines

    def _block_text(self, block: Block) -> str:
        if block.kind == BlockType.SPACER:
            return ""
        if block.kind == BlockType.HEADING:
            return block.text.upper() if block.level == 1 else block.text
        if block.kind == BlockType.ORDERED_ITEM:
            return "  " + block.text
        if block.kind == BlockType.BULLET_ITEM:
            return "  " + self.BULLET + block.text
        return block.text

    def _footer_lines(self, page_number: int) -> List[str]:
        width = self.sheet_width
        links = "    ".join(label.upper() for label, _ in self.company.links)
        left = self.company.copyright_line()
        center = self.company.website
        right = f"Page {page_number}"

        # Three columns: left-aligned, centred, right-aligned
        third = width // 3
        bottom = left.ljust(third) + center.center(width - 2 * third) + right.rjust(third)
        if len(bottom) > width:
            bottom = left + "  " + center + "  " + right
        return [
            "",
            self.FOOTER_RULE_CHAR * width,
            links.center(width).rstrip(),
            bottom,
        ]

    def get_sheet_count(self) -> int:
        """Return the total number of sheets."""
        return len(self.sheets)

    def get_sheet(self, index: int) -> List[str]:
        """Get a specific sheet (0-indexed).

        Returns:
            List of lines for the sheet, or empty list if it doesn't exist.
        """
        if 0 <= index < len(self.sheets):
            return self.sheets[index]
        return []

    def format_for_print(self) -> str:
        """Format all sheets as a single string with form feeds between them."""
        if not self.sheets:
            self.format_sheets()
        output = []
        for i, sheet in enumerate(self.sheets):
            output.extend(sheet)
            if i < len(self.sheets) - 1:
                output.append("\f")
        return "\n".join(output)
