"""CV text extraction service.

Only PDFs with an embedded text layer are supported; scanned CVs that
would need OCR are rejected with a ValueError.
"""

from __future__ import annotations

import io
import logging

from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

logger = logging.getLogger(__name__)

MAX_PAGES = 20
MAX_TEXT_LENGTH = 100_000


def extract_text_from_pdf(content: bytes) -> str:
    """Extract text from CV PDF bytes.

    Raises ValueError if the PDF is unreadable, too long, or has no text.
    """
    try:
        reader = PdfReader(io.BytesIO(content))
        page_count = len(reader.pages)
    except PdfReadError as exc:
        raise ValueError(f"Unreadable PDF: {exc}") from exc

    if page_count > MAX_PAGES:
        raise ValueError(f"PDF has {page_count} pages, maximum is {MAX_PAGES}")

    pages = [page.extract_text() or "" for page in reader.pages]
    full_text = "\n\n".join(pages).strip()

    if not full_text:
        raise ValueError("Could not extract any text from PDF (scanned documents are not supported)")

    if len(full_text) > MAX_TEXT_LENGTH:
        logger.warning("Truncating extracted text from %d to %d chars", len(full_text), MAX_TEXT_LENGTH)
        full_text = full_text[:MAX_TEXT_LENGTH]

    logger.info("Extracted %d characters from %d page CV", len(full_text), page_count)
    return full_text
