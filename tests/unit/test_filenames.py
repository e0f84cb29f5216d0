"""Unit tests for filename sanitization."""

import pytest
import pytest_check as check

from pdfchat.parsing.filenames import (
    FALLBACK_NAME,
    MAX_NAME_LENGTH,
    display_filename,
    sanitize_filename,
)

SAMPLE_NAMES = [
    "Report (Final)!.pdf",
    "report.PDF",
    "quarterly  report\t2024.pdf",
    "  leading and trailing  .pdf",
    "日本語のファイル.pdf",
    "a.pdf.pdf",
    "---.pdf",
    ".pdf",
    "",
    "   ",
    "[draft] notes (v2).pdf",
    "name.with.dots.pdf",
    "trailing-newline.pdf\n",
    "x" * 300 + ".pdf",
    "é" * 400,
]


class TestSanitizeFilename:
    """Tests for the sanitization steps."""

    def test_fixed_example(self) -> None:
        """Invalid characters become a hyphen; only whitespace is trimmed."""
        check.equal(sanitize_filename("Report (Final)!.pdf"), "Report-(Final)-")

    def test_strips_pdf_extension_case_insensitive(self) -> None:
        check.equal(sanitize_filename("report.PDF"), "report")
        check.equal(sanitize_filename("Report.Pdf"), "Report")

    def test_strips_only_final_extension(self) -> None:
        """Only one trailing .pdf is removed; inner dots become hyphens."""
        check.equal(sanitize_filename("a.pdf.pdf"), "a-pdf")

    def test_extension_must_be_at_the_very_end(self) -> None:
        """A trailing newline keeps the extension from being stripped."""
        check.equal(sanitize_filename("trailing-newline.pdf\n"), "trailing-newline-pdf-")

    def test_whitespace_becomes_single_hyphen(self) -> None:
        check.equal(sanitize_filename("quarterly  report\t2024.pdf"), "quarterly-report-2024")

    def test_keeps_brackets_and_parentheses(self) -> None:
        check.equal(sanitize_filename("[draft] notes (v2).pdf"), "[draft]-notes-(v2)")

    def test_collapses_hyphen_runs(self) -> None:
        check.equal(sanitize_filename("a -- b.pdf"), "a-b")
        check.equal(sanitize_filename("---.pdf"), "-")

    def test_non_ascii_replaced(self) -> None:
        check.equal(sanitize_filename("日本語のファイル.pdf"), "-")

    def test_empty_becomes_fallback(self) -> None:
        check.equal(sanitize_filename(""), FALLBACK_NAME)
        check.equal(sanitize_filename(".pdf"), FALLBACK_NAME)

    def test_truncates_to_max_length(self) -> None:
        result = sanitize_filename("x" * 300 + ".pdf")

        check.equal(len(result), MAX_NAME_LENGTH)
        check.equal(result, "x" * MAX_NAME_LENGTH)

    def test_display_name_adds_extension(self) -> None:
        check.equal(display_filename("Report-(Final)-"), "Report-(Final)-.pdf")


class TestSanitizeProperties:
    """Invariants that must hold for every input."""

    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_idempotent(self, name: str) -> None:
        once = sanitize_filename(name)

        assert sanitize_filename(once) == once

    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_never_empty_or_too_long(self, name: str) -> None:
        result = sanitize_filename(name)

        check.greater(len(result), 0)
        check.less_equal(len(result), MAX_NAME_LENGTH)
