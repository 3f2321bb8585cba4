"""Letterhead CLI entry point.

Allows running via `python -m letterhead` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .company_config import DEFAULT_COMPANY, CompanyConfigError, load_company_config
from .constants import LayoutConstants
from .layout import LayoutParams, layout, page_cost
from .print_output import PrintOutput
from .settings_persistence import SETTING_RANGES, get_persistence, layout_params_from_settings
from .sheet_formatter import SheetFormatter
from .templates import default_document
from .version import get_version_string

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="letterhead",
        description="Paginate a markdown letter onto company letterhead.",
    )
    parser.add_argument("file", nargs="?", help="Document to lay out ('-' for stdin)")
    parser.add_argument("--pdf", metavar="OUT", help="Write the letter to a PDF file")
    parser.add_argument("--print", dest="printer", metavar="PRINTER",
                        help="Send the letter to a CUPS printer")
    parser.add_argument("--duplex", action="store_true", default=None,
                        help="Print double-sided")
    parser.add_argument("--text", action="store_true",
                        help="Print plain-text sheets to stdout")
    parser.add_argument("--chars-per-line", type=int, metavar="N")
    parser.add_argument("--lines-per-page", type=int, metavar="N")
    parser.add_argument("--company", metavar="JSON",
                        help="Letterhead details overriding the defaults")
    parser.add_argument("--edit", action="store_true", help="Open the editor")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("-V", "--version", action="store_true")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _error(message: str) -> int:
    print(f"letterhead: {message}", file=sys.stderr)
    return 1


def _read_document(path: Optional[str]) -> str:
    if path is None:
        return default_document()
    if path == "-":
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _summary(pages, params: LayoutParams) -> str:
    lines = []
    for page in pages:
        lines.append(f"Page {page.number}: {len(page)} fragment(s), "
                     f"{page_cost(page, params.chars_per_line)}/{params.max_lines_per_page} lines")
    lines.append(f"{len(pages)} page(s)")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.version:
        print(get_version_string())
        return 0

    document_path = args.file if args.file not in (None, "-") else None
    persistence = get_persistence()
    settings = persistence.load_settings(document_path)

    overrides = {}
    if args.chars_per_line is not None:
        overrides['chars_per_line'] = args.chars_per_line
    if args.lines_per_page is not None:
        overrides['max_lines_per_page'] = args.lines_per_page
    if args.company:
        # Stored absolute; later runs may start elsewhere
        overrides['company_file'] = os.path.abspath(args.company)
    if args.duplex is not None:
        overrides['duplex_printing'] = args.duplex

    # Reject values the settings store would drop on the next run
    for key, value in overrides.items():
        if not persistence.validate_setting(key, value):
            low, high = SETTING_RANGES[key]
            return _error(f"{key} must be between {low} and {high}, got {value}")
    settings.update(overrides)

    try:
        params = layout_params_from_settings(settings)
    except ValueError as e:
        return _error(str(e))

    company = DEFAULT_COMPANY
    if settings.get('company_file'):
        try:
            company = load_company_config(settings['company_file'])
        except CompanyConfigError as e:
            return _error(str(e))

    wants_output = args.text or args.pdf or args.printer
    if args.edit or (args.file is None and not wants_output and sys.stdin.isatty()):
        # Lazy import to avoid loading the UI for batch use
        from .textual_app import LetterheadApp
        LetterheadApp(filename=args.file, params=params, company=company).run()
        return 0

    try:
        text = _read_document(args.file)
    except (OSError, UnicodeDecodeError) as e:
        return _error(f"could not read {args.file}: {e}")

    pages = layout(text, params)
    logger.debug("Laid out %d page(s)", len(pages))

    if overrides and document_path is not None:
        persistence.save_settings(document_path, overrides)

    status = 0
    if args.text:
        print(SheetFormatter(pages, company, params).format_for_print())

    if args.pdf or args.printer:
        output = PrintOutput(company)
        if args.pdf:
            ok, message = output.save_to_file(pages, args.pdf)
            if not ok:
                status = _error(message)
            elif document_path is not None:
                persistence.save_settings(document_path,
                                          {'pdf_filename': os.path.abspath(args.pdf)})
        if args.printer:
            duplex = bool(settings.get('duplex_printing', LayoutConstants.DEFAULT_DUPLEX_MODE))
            ok, message = output.print_to_printer(pages, args.printer, double_sided=duplex)
            if not ok:
                status = _error(message)
            elif document_path is not None:
                persistence.save_settings(document_path, {'printer_name': args.printer})
        if output.warning:
            print(output.warning, file=sys.stderr)

    if not wants_output:
        print(_summary(pages, params))

    return status


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
