"""Filename sanitization for documents sent to the inference API.

Bedrock only accepts document names made of alphanumerics, single spaces,
hyphens, parentheses and square brackets. The same transformation is applied
to fresh uploads and to stored names when history is re-serialized, so it
must be idempotent.
"""

import re

MAX_NAME_LENGTH = 256
FALLBACK_NAME = "document"

_PDF_SUFFIX = re.compile(r"\.pdf\Z", re.IGNORECASE)
_INVALID_CHARS = re.compile(r"[^A-Za-z0-9\s\-()\[\]]")
_WHITESPACE_RUN = re.compile(r"\s+")
_WHITESPACE = re.compile(r"\s")
_HYPHEN_RUN = re.compile(r"-+")


def sanitize_filename(filename: str) -> str:
    """Turn an arbitrary filename into a name the inference API accepts.

    Args:
        filename: Original filename, with or without a ``.pdf`` extension.

    Returns:
        A non-empty name of at most 256 characters.
    """
    name = _PDF_SUFFIX.sub("", filename)
    name = _INVALID_CHARS.sub("-", name)
    name = _WHITESPACE_RUN.sub(" ", name)
    name = _WHITESPACE.sub("-", name)
    name = _HYPHEN_RUN.sub("-", name)
    name = name.strip()

    if not name:
        name = FALLBACK_NAME

    return name[:MAX_NAME_LENGTH]


def display_filename(sanitized: str) -> str:
    return f"{sanitized}.pdf"
