"""Tests for the plain-text letterhead sheet formatter."""

from letterhead.company_config import DEFAULT_COMPANY, CompanyConfig
from letterhead.layout import LayoutParams, layout
from letterhead.sheet_formatter import SheetFormatter


def body_text(sheet):
    return [line.strip() for line in sheet]


def test_single_sheet_document():
    """Test formatting a document that fits on a single sheet."""
    formatter = SheetFormatter(layout("Hello\nWorld"))
    sheets = formatter.format_sheets()

    assert len(sheets) == 1
    assert all(len(line) == 85 for line in sheets[0])

    text = body_text(sheets[0])
    assert "Hello" in text
    assert "World" in text
    assert text.index("Hello") + 1 == text.index("World")


def test_header_and_footer():
    """Test that the letterhead appears on every sheet."""
    lines = ["Line " + str(i) for i in range(28)]
    formatter = SheetFormatter(layout("\n".join(lines)))
    sheets = formatter.format_sheets()

    assert len(sheets) == 2
    for number, sheet in enumerate(sheets, 1):
        assert sheet[0].startswith("TALENTRONAUT")
        assert DEFAULT_COMPANY.name in sheet[0]
        assert any("CIN: U85499MH2024PTC421338" in line for line in sheet)
        assert f"Page {number}" in sheet[-1]
        assert DEFAULT_COMPANY.website in sheet[-1]
        assert "LINKEDIN" in sheet[-2]

    # Fixed body height keeps sheets the same size
    assert len(sheets[0]) == len(sheets[1])
    assert "Line 27" in body_text(sheets[1])
    assert "Line 27" not in body_text(sheets[0])


def test_markdown_markers_removed():
    """Test headings, bullets and bold spans in the body."""
    text = "# Project Proposal\n\n**Date:** today\n- first\n1. numbered\n### Scope"
    sheet = SheetFormatter(layout(text)).format_sheets()[0]
    body = body_text(sheet)

    assert "PROJECT PROPOSAL" in body
    assert "Date: today" in body
    assert "* first" in body
    assert "1. numbered" in body
    assert "Scope" in body
    assert not any("**" in line for line in sheet)


def test_long_fragment_wraps_within_body_width():
    """Test that a long paragraph wraps at the layout width."""
    paragraph = " ".join(["word"] * 40)
    params = LayoutParams(chars_per_line=40, max_lines_per_page=10)
    formatter = SheetFormatter(layout(paragraph, params), params=params, sheet_width=60)
    sheet = formatter.format_sheets()[0]

    body = [line for line in sheet if line.strip().startswith("word")]
    assert len(body) >= 5
    for line in body:
        assert len(line.rstrip()) <= formatter.left_margin + 40


def test_format_for_print():
    """Test form feeds between sheets and none after the last."""
    lines = ["Line " + str(i) for i in range(60)]
    formatter = SheetFormatter(layout("\n".join(lines)))

    output = formatter.format_for_print()

    assert formatter.get_sheet_count() == 3
    assert output.count("\f") == 2
    assert not output.endswith("\f")


def test_get_sheet():
    """Test retrieving individual sheets."""
    formatter = SheetFormatter(layout("Only line"))
    formatter.format_sheets()

    assert "Only line" in body_text(formatter.get_sheet(0))
    assert formatter.get_sheet(1) == []
    assert formatter.get_sheet(-1) == []


def test_empty_document_has_one_sheet():
    formatter = SheetFormatter(layout(""))
    assert len(formatter.format_sheets()) == 1


def test_custom_company():
    company = CompanyConfig(
        brand="Acme", tagline="Labs", name="Acme Labs Ltd", address="1 Road",
        contact="hello@acme.test", cin="", gstin="GST1", msme="", website="acme.test",
    )
    sheet = SheetFormatter(layout("Hi"), company).format_sheets()[0]

    assert sheet[0].startswith("ACME")
    assert any(line.strip() == "GSTIN: GST1" for line in sheet)
    assert not any("CIN:" in line and "GSTIN" not in line for line in sheet)
    assert "acme.test" in sheet[-1]
