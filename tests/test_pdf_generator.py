"""Tests for letterhead PDF generation."""

import logging
import re

from PIL import Image

from letterhead.company_config import company_from_dict
from letterhead.layout import LayoutParams, layout
from letterhead.pdf_generator import PDFGenerator
from letterhead.templates import default_document


def count_pages(pdf_content):
    return len(re.findall(rb"/Type /Page[^s]", pdf_content))


def test_basic_pdf_generation():
    """Test basic PDF generation from the default letter."""
    generator = PDFGenerator()
    pages = layout(default_document())

    pdf_content = generator.generate_pdf(pages)

    assert pdf_content.startswith(b'%PDF')
    assert b'/Type /Page' in pdf_content
    assert b'/Font' in pdf_content
    # A4 media box
    assert b'595.2756' in pdf_content
    assert count_pages(pdf_content) == len(pages) == 1
    assert generator.get_unprintable_warning() is None
    assert generator.clipped_pages == []


def test_one_pdf_page_per_layout_page():
    lines = ["Line " + str(i) for i in range(60)]
    pages = layout("\n".join(lines))

    pdf_content = PDFGenerator().generate_pdf(pages)

    assert count_pages(pdf_content) == 3


def test_pdf_with_markdown_blocks():
    """Test headings, lists, bold spans and spacers together."""
    text = "\n".join([
        "# Heading One",
        "## Heading Two",
        "### Heading Three",
        "",
        "1. First item",
        "- **Bold** bullet",
        "Plain text with **bold** and (parentheses) and [brackets]",
        " ".join(["wrapping"] * 40),
    ])
    generator = PDFGenerator()

    pdf_content = generator.generate_pdf(layout(text))

    assert pdf_content.startswith(b'%PDF')
    assert generator.clipped_pages == []


def test_pdf_with_latin1():
    """Test that cp1252 characters need no replacement."""
    generator = PDFGenerator()
    generator.generate_pdf(layout("Café résumé naïve – “quoted”"))

    assert generator.get_unprintable_warning() is None


def test_unprintable_characters_reported():
    """Test that characters outside cp1252 are replaced and reported."""
    generator = PDFGenerator()

    pdf_content = generator.generate_pdf(layout("Snowman ☃ and arrow →"))

    assert pdf_content.startswith(b'%PDF')
    warning = generator.get_unprintable_warning()
    assert warning is not None
    assert "2 unique unprintable" in warning
    assert "U+2603" in warning
    assert "U+2192" in warning

    # Tracking resets between runs
    generator.generate_pdf(layout("plain"))
    assert generator.get_unprintable_warning() is None


def test_overfull_page_is_clipped(caplog):
    """Test that body text running into the footer is clipped and logged."""
    params = LayoutParams(chars_per_line=75, max_lines_per_page=200)
    pages = layout("\n".join("Line " + str(i) for i in range(100)), params)
    generator = PDFGenerator()

    with caplog.at_level(logging.WARNING, logger="letterhead.pdf_generator"):
        pdf_content = generator.generate_pdf(pages)

    assert pdf_content.startswith(b'%PDF')
    assert generator.clipped_pages == [1]
    assert "clipped" in caplog.text


def make_logo(path):
    Image.new("RGB", (40, 20), (212, 80, 58)).save(path)
    return path


def test_watermark_drawn_on_every_page(tmp_path):
    logo = make_logo(tmp_path / "logo.png")
    generator = PDFGenerator(company_from_dict({"watermark": str(logo)}))
    pages = layout("\n".join("Line " + str(i) for i in range(30)))

    pdf_content = generator.generate_pdf(pages)

    assert count_pages(pdf_content) == 2
    # One image object shared by both pages, painted through a translucent state
    assert pdf_content.count(b"/Subtype /Image") == 1
    assert b"/ExtGState" in pdf_content


def test_no_watermark_by_default():
    pdf_content = PDFGenerator().generate_pdf(layout("Hello"))
    assert b"/Subtype /Image" not in pdf_content


def test_unreadable_watermark_is_skipped(tmp_path, caplog):
    generator = PDFGenerator(company_from_dict({"watermark": str(tmp_path / "missing.png")}))

    with caplog.at_level(logging.WARNING, logger="letterhead.pdf_generator"):
        pdf_content = generator.generate_pdf(layout("Hello"))

    assert pdf_content.startswith(b"%PDF")
    assert b"/Subtype /Image" not in pdf_content
    assert "Could not load watermark" in caplog.text
