"""Deliver laid-out letterhead pages as a PDF file or a CUPS print job."""

import logging
import os
import shutil
import subprocess
import tempfile
from typing import List, Optional, Tuple

from .company_config import CompanyConfig, DEFAULT_COMPANY
from .layout import Page
from .pdf_generator import PDFGenerator

logger = logging.getLogger(__name__)

LPR_TIMEOUT = 10  # seconds


def lpr_command(printer: str, pdf_path: str, title: str = "",
                double_sided: bool = False) -> List[str]:
    """Build the ``lpr`` invocation for one letter."""
    cmd = ['lpr', '-P', printer]
    if title:
        cmd.extend(['-T', title])
    if double_sided:
        cmd.extend(['-o', 'sides=two-sided-long-edge'])
    cmd.append(pdf_path)
    return cmd


class PrintOutput:
    """Renders pages with the company letterhead and sends them somewhere."""

    def __init__(self, company: CompanyConfig = DEFAULT_COMPANY):
        self.company = company
        self.lpr_available = shutil.which("lpr") is not None
        self.pdf_generator = PDFGenerator(company)

    @property
    def warning(self) -> Optional[str]:
        """Warning from the last rendered PDF, if any."""
        return self.pdf_generator.get_unprintable_warning()

    def print_to_printer(self, pages: List[Page], printer: str,
                         double_sided: bool = False) -> Tuple[bool, str]:
        """Submit the letter to a CUPS printer.

        The PDF is written to a private temporary directory that is removed
        once ``lpr`` returns.

        Returns:
            Tuple of (success, error_message).
        """
        if not self.lpr_available:
            return False, "Printing is not available (lpr command not found)"
        if not printer:
            return False, "No printer specified"

        pdf_content = self.pdf_generator.generate_pdf(pages)
        try:
            with tempfile.TemporaryDirectory(prefix="letterhead-") as workdir:
                pdf_path = os.path.join(workdir, "letter.pdf")
                with open(pdf_path, 'wb') as f:
                    f.write(pdf_content)

                cmd = lpr_command(printer, pdf_path, title=f"{self.company.brand} letter",
                                  double_sided=double_sided)
                logger.info("Sending %d page(s) to printer %s", len(pages), printer)
                result = subprocess.run(cmd, capture_output=True, text=True,
                                        timeout=LPR_TIMEOUT)
        except subprocess.TimeoutExpired:
            return False, "Print command timed out"
        except (OSError, subprocess.SubprocessError) as e:
            return False, f"Print error: {e}"

        if result.returncode != 0:
            detail = result.stderr.strip() if result.stderr else "Print command failed"
            return False, f"Print failed: {detail}"
        return True, ""

    def save_to_file(self, pages: List[Page], filename: str) -> Tuple[bool, str]:
        """Write the letter to ``filename``, adding ``.pdf`` when missing.

        Returns:
            Tuple of (success, error_message).
        """
        if not filename.endswith('.pdf'):
            filename += '.pdf'

        directory = os.path.dirname(filename) or '.'
        if not os.path.isdir(directory):
            return False, f"Directory does not exist: {directory}"

        pdf_content = self.pdf_generator.generate_pdf(pages)
        try:
            with open(filename, 'wb') as f:
                f.write(pdf_content)
        except OSError as e:
            return False, f"Save error: {e}"

        logger.info("Saved %d page(s) to %s", len(pages), filename)
        return True, ""
