"""Textual editor for letterhead documents.

Edit mode shows the whole letter as one continuous text area. Preview mode
lays out the current text and shows the resulting letterhead sheets; the
layout engine only runs when entering preview or exporting.
"""

import os
from pathlib import Path
from typing import List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Static, TextArea

from .company_config import CompanyConfig, DEFAULT_COMPANY
from .layout import LayoutParams, Page, layout
from .print_output import PrintOutput
from .sheet_formatter import SheetFormatter
from .templates import default_document


class LetterheadApp(App):
    """Edit a letter and preview it on letterhead sheets."""

    CSS = """
    TextArea {
        background: $surface;
        border: none;
        scrollbar-size: 1 1;
    }
    #preview-scroll {
        background: $panel;
    }
    #preview {
        width: auto;
        padding: 1 2;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("f2", "toggle_preview", "Preview", priority=True),
        Binding("f3", "export_pdf", "Export PDF", priority=True),
    ]

    PAGE_SEPARATOR = "\n"

    def __init__(self, filename: Optional[str] = None, params: Optional[LayoutParams] = None,
                 company: CompanyConfig = DEFAULT_COMPANY):
        super().__init__()
        self.filename = filename
        self.params = params or LayoutParams()
        self.company = company
        self.previewing = False
        self.pages: List[Page] = []
        self.text_area: Optional[TextArea] = None
        self.preview: Optional[Static] = None

    def compose(self) -> ComposeResult:
        yield Header()
        self.text_area = TextArea(id="editor")
        self.text_area.show_line_numbers = False
        yield self.text_area
        with VerticalScroll(id="preview-scroll"):
            self.preview = Static("", id="preview", markup=False)
            yield self.preview
        yield Footer()

    def on_mount(self) -> None:
        content = default_document()
        if self.filename and Path(self.filename).exists():
            try:
                with open(self.filename, 'r', encoding='utf-8') as f:
                    content = f.read()
            except (OSError, UnicodeDecodeError) as e:
                self.notify(f"Error loading file: {e}", severity="error")
        self.text_area.load_text(content)
        self.sub_title = f"Editing: {self.filename}" if self.filename else "Editing: new letter"
        self.query_one("#preview-scroll").display = False
        self.text_area.focus()

    @property
    def document_text(self) -> str:
        return self.text_area.text if self.text_area is not None else ""

    def paginate(self) -> List[Page]:
        """Lay out the current text."""
        self.pages = layout(self.document_text, self.params)
        return self.pages

    def preview_text(self) -> str:
        formatter = SheetFormatter(self.pages, self.company, self.params)
        formatter.format_sheets()
        return self.PAGE_SEPARATOR.join(
            "\n".join(sheet) + "\n" for sheet in formatter.sheets
        )

    def action_toggle_preview(self) -> None:
        """Switch between edit mode and the paginated preview."""
        self.previewing = not self.previewing
        scroll = self.query_one("#preview-scroll")
        if self.previewing:
            self.paginate()
            self.preview.update(self.preview_text())
            self.sub_title = f"Preview: {len(self.pages)} page(s)"
            self.text_area.display = False
            scroll.display = True
            scroll.focus()
        else:
            scroll.display = False
            self.text_area.display = True
            self.sub_title = f"Editing: {self.filename}" if self.filename else "Editing: new letter"
            self.text_area.focus()

    def action_save(self) -> None:
        """Save the document text."""
        if not self.filename:
            self.notify("No filename set", severity="warning")
            return
        try:
            with open(self.filename, 'w', encoding='utf-8') as f:
                f.write(self.document_text)
            self.notify(f"Saved to {self.filename}")
        except OSError as e:
            self.notify(f"Error saving: {e}", severity="error")

    def pdf_path(self) -> str:
        if self.filename:
            return os.path.splitext(self.filename)[0] + ".pdf"
        return "letter.pdf"

    def action_export_pdf(self) -> None:
        """Write the current text to a PDF beside the document."""
        output = PrintOutput(self.company)
        filename = self.pdf_path()
        ok, message = output.save_to_file(self.paginate(), filename)
        if not ok:
            self.notify(message, severity="error")
            return
        self.notify(f"Exported {len(self.pages)} page(s) to {filename}")
        if output.warning:
            self.notify(output.warning, severity="warning")
