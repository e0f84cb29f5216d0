"""Attachment utilities for documents sent to the model.

Responsibilities:
    - Filename sanitization for the inference API's naming rules
    - PDF type and size checks before a file is read
    - PDF header and page count checks with pypdf after it is read
"""

from pdfchat.parsing.filenames import display_filename, sanitize_filename
from pdfchat.parsing.pdf_parser import (
    MAX_ATTACHMENT_SIZE,
    AttachmentRejectedError,
    PDFInfo,
    PDFValidationError,
    inspect_pdf,
    validate_attachment,
)

__all__ = [
    "MAX_ATTACHMENT_SIZE",
    "AttachmentRejectedError",
    "PDFInfo",
    "PDFValidationError",
    "display_filename",
    "inspect_pdf",
    "sanitize_filename",
    "validate_attachment",
]
