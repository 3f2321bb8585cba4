"""Tests for print output functionality."""

import os
import subprocess
from unittest.mock import Mock, patch

from letterhead.layout import layout
from letterhead.print_output import PrintOutput, lpr_command


def create_test_pages():
    """Create a two page layout."""
    return layout("\n".join("Line " + str(i) for i in range(30)))


def test_check_command_availability():
    """Test checking for the lpr command."""
    with patch("shutil.which", return_value="/usr/bin/lpr"):
        assert PrintOutput().lpr_available is True

    with patch("shutil.which", return_value=None):
        assert PrintOutput().lpr_available is False


def test_print_to_printer_success():
    """Test successful printing to a printer."""
    with patch("shutil.which", return_value="/usr/bin/lpr"):
        output = PrintOutput()

    mock_result = Mock()
    mock_result.returncode = 0
    mock_result.stderr = ""

    with patch("subprocess.run", return_value=mock_result) as mock_run:
        success, error = output.print_to_printer(create_test_pages(), "TestPrinter",
                                                 double_sided=True)

    assert success is True
    assert error == ""
    assert mock_run.call_count == 1

    lpr_args = mock_run.call_args[0][0]
    assert lpr_args[:3] == ["lpr", "-P", "TestPrinter"]
    assert "-o" in lpr_args
    assert "sides=two-sided-long-edge" in lpr_args

    # The temporary PDF is removed after submission
    pdf_path = lpr_args[-1]
    assert pdf_path.endswith(".pdf")
    assert not os.path.exists(pdf_path)


def test_print_single_sided():
    with patch("shutil.which", return_value="/usr/bin/lpr"):
        output = PrintOutput()

    mock_result = Mock(returncode=0, stderr="")
    with patch("subprocess.run", return_value=mock_result) as mock_run:
        output.print_to_printer(create_test_pages(), "TestPrinter")

    assert "-o" not in mock_run.call_args[0][0]


def test_print_to_printer_no_lpr():
    """Test printing when lpr is not available."""
    with patch("shutil.which", return_value=None):
        output = PrintOutput()

    success, error = output.print_to_printer(create_test_pages(), "TestPrinter")

    assert success is False
    assert "lpr command not found" in error


def test_print_to_printer_no_printer():
    """Test printing with no printer specified."""
    with patch("shutil.which", return_value="/usr/bin/lpr"):
        output = PrintOutput()

    success, error = output.print_to_printer(create_test_pages(), "")

    assert success is False
    assert "No printer specified" in error


def test_print_failure_reports_stderr():
    with patch("shutil.which", return_value="/usr/bin/lpr"):
        output = PrintOutput()

    mock_result = Mock(returncode=1, stderr="lpr: The printer or class does not exist.\n")
    with patch("subprocess.run", return_value=mock_result):
        success, error = output.print_to_printer(create_test_pages(), "Missing")

    assert success is False
    assert error == "Print failed: lpr: The printer or class does not exist."


def test_print_timeout():
    with patch("shutil.which", return_value="/usr/bin/lpr"):
        output = PrintOutput()

    with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("lpr", 10)) as mock_run:
        success, error = output.print_to_printer(create_test_pages(), "Slow")

    assert success is False
    assert error == "Print command timed out"
    assert not os.path.exists(mock_run.call_args[0][0][-1])


def test_save_to_file(tmp_path):
    """Test PDF saving adds the extension and writes a PDF."""
    output = PrintOutput()
    target = tmp_path / "letter"

    success, error = output.save_to_file(create_test_pages(), str(target))

    assert success is True
    assert error == ""
    saved = tmp_path / "letter.pdf"
    assert saved.exists()
    assert saved.read_bytes().startswith(b"%PDF")


def test_save_to_missing_directory(tmp_path):
    output = PrintOutput()

    success, error = output.save_to_file(create_test_pages(),
                                        str(tmp_path / "missing" / "letter.pdf"))

    assert success is False
    assert error == f"Directory does not exist: {tmp_path / 'missing'}"


def test_save_over_directory(tmp_path):
    output = PrintOutput()
    (tmp_path / "letter.pdf").mkdir()

    success, error = output.save_to_file(create_test_pages(), str(tmp_path / "letter.pdf"))

    assert success is False
    assert error.startswith("Save error:")


def test_lpr_command():
    assert lpr_command("Office", "/tmp/a.pdf") == ["lpr", "-P", "Office", "/tmp/a.pdf"]
    assert lpr_command("Office", "/tmp/a.pdf", title="Acme letter", double_sided=True) == [
        "lpr", "-P", "Office", "-T", "Acme letter",
        "-o", "sides=two-sided-long-edge", "/tmp/a.pdf",
    ]


def test_print_job_titled_with_brand():
    with patch("shutil.which", return_value="/usr/bin/lpr"):
        output = PrintOutput()

    with patch("subprocess.run", return_value=Mock(returncode=0, stderr="")) as mock_run:
        output.print_to_printer(create_test_pages(), "Office")

    lpr_args = mock_run.call_args[0][0]
    assert lpr_args[lpr_args.index("-T") + 1] == "Talentronaut letter"
