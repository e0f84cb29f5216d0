"""PDF attachment validation using pypdf.

Checks the picker metadata (type, size) before anything is read and
inspects the bytes once they are, so only readable PDFs reach the model.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

# Constants
MAX_ATTACHMENT_SIZE = 4 * 1024 * 1024  # 4MB
PDF_MAGIC_BYTES = b"%PDF"
PDF_CONTENT_TYPE = "application/pdf"
_GENERIC_CONTENT_TYPES = {"", "application/octet-stream"}


class PDFInfo(BaseModel):
    """Facts about a PDF that has been read.

    Attributes:
        pages: Total number of pages in the document.
        size: Size of the document in bytes.
    """

    pages: int = Field(ge=1)
    size: int = Field(ge=1)


class PDFValidationError(Exception):
    """Raised when PDF bytes cannot be used as an attachment."""


class AttachmentRejectedError(PDFValidationError):
    """Raised when a selected file is not an acceptable attachment.

    The message is meant to be shown to the user as-is.
    """


def validate_attachment(filename: str, content_type: str | None, size: int) -> None:
    """Validate a selected file before it is read.

    Args:
        filename: Name reported by the file picker.
        content_type: MIME type reported by the file picker.
        size: File size in bytes.

    Raises:
        AttachmentRejectedError: If the file is not a PDF or is too large.
    """
    content_type = (content_type or "").lower()
    is_pdf = content_type == PDF_CONTENT_TYPE or (
        content_type in _GENERIC_CONTENT_TYPES and filename.lower().endswith(".pdf")
    )
    if not is_pdf:
        raise AttachmentRejectedError("Please select a valid PDF file.")

    if size > MAX_ATTACHMENT_SIZE:
        raise AttachmentRejectedError(
            "File size exceeds 4MB limit. Please upload a smaller PDF."
        )


def inspect_pdf(file_content: bytes) -> PDFInfo:
    """Check that bytes hold a readable PDF and count its pages.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        PDFInfo with page count and size.

    Raises:
        PDFValidationError: If the file is empty, too large, not a PDF, or corrupt.
    """
    if not file_content:
        raise PDFValidationError("Empty file provided")

    if len(file_content) > MAX_ATTACHMENT_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise PDFValidationError(
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed (4MB)"
        )

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFValidationError("Invalid PDF: file does not start with PDF header")

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFValidationError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFValidationError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFValidationError("PDF contains no pages")

    logger.debug(f"Inspected PDF: {pages} pages, {len(file_content)} bytes")
    return PDFInfo(pages=pages, size=len(file_content))
