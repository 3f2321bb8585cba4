"""Generate letterhead PDFs directly in Python.

Each laid-out page is drawn on an A4 sheet with the company header and
registration strip at the top, the page's markdown blocks in the body, and
the footer with links, copyright, website and page number. Only the
built-in PDF fonts are used, so nothing needs to be embedded.
"""

import io
import logging
import re
from typing import List, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from .company_config import CompanyConfig, DEFAULT_COMPANY
from .constants import LayoutConstants
from .layout import Page
from .markdown import Block, BlockType, Span, render_page

logger = logging.getLogger(__name__)


class PDFGenerator:
    """Generate PDF files for letterhead pages."""

    # Fonts
    SANS = "Helvetica"
    SANS_BOLD = "Helvetica-Bold"
    SERIF = "Times-Roman"
    SERIF_BOLD = "Times-Bold"

    BODY_SIZE = 11
    BODY_LEADING = 16
    HEADING_SIZES = {1: 18, 2: 15, 3: 13}
    SPACER_HEIGHT = 10
    LIST_INDENT = 14

    WATERMARK_SIZE = 340  # Square box the logo is fitted into, centred on the sheet
    WATERMARK_OPACITY = 0.04

    def __init__(self, company: CompanyConfig = DEFAULT_COMPANY):
        """Initialize PDF generator.

        Args:
            company: Letterhead details drawn on every page.
        """
        self.company = company
        self.page_width, self.page_height = A4
        self.margin_x = 48  # Roughly 17mm, matching the letterhead's side padding
        self.brand_color = colors.HexColor(LayoutConstants.BRAND_COLOR)
        self.muted_color = colors.HexColor("#6B7280")
        self.text_color = colors.HexColor("#1F2937")

        # Vertical bands, in points from the bottom of the page
        self.header_top = self.page_height - 40
        self.body_top = self.page_height - 175
        self.body_bottom = 120
        self.footer_rule_y = 100

        # Track unprintable characters for warning
        self.unprintable_chars = set()
        self.has_unprintable = False
        self.clipped_pages: List[int] = []
        self._watermark: Optional[ImageReader] = None

    @property
    def body_width(self) -> float:
        return self.page_width - 2 * self.margin_x

    def generate_pdf(self, pages: List[Page]) -> bytes:
        """Generate a PDF from laid-out pages.

        Args:
            pages: Pages produced by the layout engine.

        Returns:
            Complete PDF document as bytes.
        """
        # Reset tracking for this generation
        self.unprintable_chars = set()
        self.has_unprintable = False
        self.clipped_pages = []
        self._watermark = self._load_watermark()

        pdf_buffer = io.BytesIO()
        c = canvas.Canvas(pdf_buffer, pagesize=A4)
        c.setTitle(f"{self.company.name} letter")
        c.setAuthor(self.company.name)

        for page in pages:
            self._draw_watermark(c)
            self._draw_header(c)
            self._draw_body(c, page)
            self._draw_footer(c, page.number)
            c.showPage()

        c.save()
        logger.debug("Generated PDF with %d page(s)", len(pages))
        pdf_buffer.seek(0)
        return pdf_buffer.read()

    def _load_watermark(self) -> Optional[ImageReader]:
        if not self.company.watermark:
            return None
        try:
            image = ImageReader(self.company.watermark)
            image.getSize()
        except (OSError, ValueError) as e:
            logger.warning("Could not load watermark %s: %s", self.company.watermark, e)
            return None
        return image

    def _draw_watermark(self, c: canvas.Canvas) -> None:
        """Draw the logo faintly in the middle of the sheet, under everything else."""
        if self._watermark is None:
            return
        size = self.WATERMARK_SIZE
        c.saveState()
        c.setFillAlpha(self.WATERMARK_OPACITY)
        c.drawImage(self._watermark, (self.page_width - size) / 2, (self.page_height - size) / 2,
                    width=size, height=size, mask='auto',
                    preserveAspectRatio=True, anchor='c')
        c.restoreState()

    def _draw_header(self, c: canvas.Canvas) -> None:
        company = self.company
        left = self.margin_x
        right = self.page_width - self.margin_x

        # Brand block on the left
        c.setFillColor(self.brand_color)
        c.setFont(self.SANS_BOLD, 30)
        c.drawString(left, self.header_top - 30, self._make_pdf_safe(company.brand))
        c.setFillColor(self.muted_color)
        c.setFont(self.SANS_BOLD, 7)
        c.drawString(left + 2, self.header_top - 45,
                     self._make_pdf_safe(" ".join(company.tagline.upper())))

        # Company block on the right
        y = self.header_top - 10
        c.setFillColor(colors.black)
        c.setFont(self.SANS_BOLD, 10)
        c.drawRightString(right, y, self._make_pdf_safe(company.name))
        c.setFillColor(self.muted_color)
        c.setFont(self.SANS, 8)
        for entry in company.header_lines()[1:]:
            for line in simpleSplit(self._make_pdf_safe(entry), self.SANS, 8, 280):
                y -= 11
                c.drawRightString(right, y, line)

        # Registration strip
        strip_top = min(y, self.header_top - 50) - 14
        c.setFillColor(colors.HexColor("#F9FAFB"))
        c.setStrokeColor(colors.HexColor("#F3F4F6"))
        c.rect(left, strip_top - 18, right - left, 18, stroke=1, fill=1)
        c.setFillColor(self.muted_color)
        c.setFont(self.SANS_BOLD, 6.5)
        text_y = strip_top - 12
        parts = [p for p in (
            f"CIN: {company.cin}" if company.cin else "",
            f"GSTIN: {company.gstin}" if company.gstin else "",
            f"MSME: {company.msme}" if company.msme else "",
        ) if p]
        if parts:
            c.drawString(left + 8, text_y, self._make_pdf_safe(parts[0]))
        if len(parts) == 3:
            c.drawCentredString(self.page_width / 2, text_y, self._make_pdf_safe(parts[1]))
        if len(parts) >= 2:
            c.drawRightString(right - 8, text_y, self._make_pdf_safe(parts[-1]))

    def _draw_body(self, c: canvas.Canvas, page: Page) -> None:
        y = self.body_top
        for block in render_page(page):
            y = self._draw_block(c, block, y)
            if y is None:
                self.clipped_pages.append(page.number)
                logger.warning("Text on page %d runs into the footer and was clipped", page.number)
                return

    def _draw_block(self, c: canvas.Canvas, block: Block, y: float) -> Optional[float]:
        """Draw one block starting at ``y``; return the next baseline or None if clipped."""
        left = self.margin_x
        if block.kind == BlockType.SPACER:
            return y - self.SPACER_HEIGHT

        if block.kind == BlockType.HEADING:
            size = self.HEADING_SIZES.get(block.level, self.BODY_SIZE)
            color = self.brand_color if block.level == 1 else self.text_color
            y -= size * 0.5  # extra space above headings
            c.setFillColor(color)
            c.setFont(self.SANS_BOLD, size)
            for line in simpleSplit(self._make_pdf_safe(block.text), self.SANS_BOLD, size,
                                    self.body_width):
                if y < self.body_bottom:
                    return None
                c.drawString(left, y, line)
                y -= size * 1.4
            if block.level == 2:
                c.setStrokeColor(colors.HexColor("#E5E7EB"))
                c.line(left, y + size * 0.9, left + self.body_width, y + size * 0.9)
            return y

        c.setFillColor(self.text_color)
        if block.kind == BlockType.BULLET_ITEM:
            if y < self.body_bottom:
                return None
            c.setFont(self.SERIF, self.BODY_SIZE)
            c.drawString(left + 4, y, "•")
            return self._draw_spans(c, block.spans, left + self.LIST_INDENT, y)
        if block.kind == BlockType.ORDERED_ITEM:
            c.setStrokeColor(colors.HexColor("#E5E7EB"))
            c.setLineWidth(2)
            c.line(left + 6, y + self.BODY_SIZE - 2, left + 6, y - 4)
            c.setLineWidth(1)
            return self._draw_spans(c, block.spans, left + self.LIST_INDENT, y)
        return self._draw_spans(c, block.spans, left, y)

    def _draw_spans(self, c: canvas.Canvas, spans: Tuple[Span, ...], x0: float,
                    y: float) -> Optional[float]:
        """Word-wrap inline spans between ``x0`` and the right margin."""
        max_x = self.margin_x + self.body_width
        x = x0
        pending_space = 0.0
        at_line_start = True
        if y < self.body_bottom:
            return None

        for span in spans:
            font = self.SERIF_BOLD if span.bold else self.SERIF
            for token in re.split(r"(\s+)", self._make_pdf_safe(span.text)):
                if not token:
                    continue
                if token.isspace():
                    if not at_line_start:
                        pending_space = c.stringWidth(" ", font, self.BODY_SIZE)
                    continue
                width = c.stringWidth(token, font, self.BODY_SIZE)
                if not at_line_start and x + pending_space + width > max_x:
                    y -= self.BODY_LEADING
                    if y < self.body_bottom:
                        return None
                    x = x0
                    pending_space = 0.0
                x += pending_space
                c.setFont(font, self.BODY_SIZE)
                c.drawString(x, y, token)
                x += width
                pending_space = 0.0
                at_line_start = False

        return y - self.BODY_LEADING

    def _draw_footer(self, c: canvas.Canvas, page_number: int) -> None:
        company = self.company
        left = self.margin_x
        right = self.page_width - self.margin_x
        center = self.page_width / 2

        c.setStrokeColor(self.brand_color)
        c.setLineWidth(2)
        c.line(left, self.footer_rule_y, right, self.footer_rule_y)
        c.setLineWidth(1)

        # Social links, spaced evenly around the centre
        labels = [label.upper() for label, _ in company.links]
        if labels:
            c.setFont(self.SANS_BOLD, 8)
            c.setFillColor(self.muted_color)
            gap = 30
            widths = [c.stringWidth(label, self.SANS_BOLD, 8) for label in labels]
            x = center - (sum(widths) + gap * (len(labels) - 1)) / 2
            for (label, url), width in zip(company.links, widths):
                c.drawString(x, self.footer_rule_y - 24, label.upper())
                c.linkURL(url, (x, self.footer_rule_y - 27, x + width, self.footer_rule_y - 16))
                x += width + gap

        bottom_y = self.footer_rule_y - 52
        c.setFont(self.SANS, 7)
        c.drawString(left, bottom_y, self._make_pdf_safe(company.copyright_line()))
        c.setFillColor(colors.HexColor("#4B5563"))
        c.setFont(self.SANS_BOLD, 8)
        c.drawCentredString(center, bottom_y, self._make_pdf_safe(company.website))
        c.setFillColor(self.muted_color)
        c.setFont(self.SANS, 7)
        c.drawRightString(right, bottom_y, f"Page {page_number}")

    def _make_pdf_safe(self, text: str) -> str:
        """Replace characters the built-in fonts cannot show.

        The built-in Helvetica and Times fonts use Windows-1252 encoding.
        Characters outside it are replaced with '?' and tracked for the
        warning message.
        """
        result = []
        for char in text:
            try:
                char.encode('cp1252')
                result.append(char)
            except UnicodeEncodeError:
                self.unprintable_chars.add(char)
                self.has_unprintable = True
                result.append('?')
        return ''.join(result)

    def get_unprintable_warning(self) -> Optional[str]:
        """Get warning message about unprintable characters.

        Returns:
            Warning message if unprintable chars were found, None otherwise.
        """
        if not self.has_unprintable:
            return None

        char_list = sorted(self.unprintable_chars)
        formatted_chars = []
        for char in char_list[:10]:  # Limit to first 10 for readability
            if ord(char) < 32 or ord(char) == 127:
                formatted_chars.append(f"U+{ord(char):04X}")
            else:
                formatted_chars.append(f"'{char}' (U+{ord(char):04X})")

        if len(char_list) > 10:
            formatted_chars.append(f"... and {len(char_list) - 10} more")

        return (f"Warning: {len(self.unprintable_chars)} unique unprintable character(s) "
                f"were replaced with '?' in the PDF output: {', '.join(formatted_chars)}")
