"""
PDF Text Extraction
===================

Pulls the embedded text layer out of the first pages of a PDF so native
(digitally generated) documents can be classified from text alone.

A PDF whose text layer is missing or too short to be meaningful, such as a
scanned document, yields ``None``. That is an expected outcome rather than an
error: the pipeline answers it by sending the PDF itself to the model.

The minimum length is a heuristic. Fifty characters is enough to tell a real
text layer apart from stray page numbers or OCR debris left on a scan.
"""

from __future__ import annotations

from io import BytesIO

import structlog
from pypdf import PdfReader

from .errors import ExtractionFailure

log = structlog.get_logger(__name__)

TEXT_MIN_LENGTH = 50
TEXT_MAX_LENGTH = 3000
MAX_PAGES = 2


def _read_pages(pdf_bytes: bytes, max_pages: int, max_length: int) -> list[str]:
    """Return the text of up to ``max_pages`` pages, stopping once enough text is read."""
    try:
        reader = PdfReader(BytesIO(pdf_bytes))
        page_count = min(len(reader.pages), max_pages)
        pages: list[str] = []
        collected = 0
        for index in range(page_count):
            page_text = reader.pages[index].extract_text() or ""
            pages.append(page_text)
            collected += len(page_text) + 1
            if collected >= max_length:
                break
        return pages
    except Exception as e:
        # pypdf raises a wide range of types for damaged or encrypted input
        raise ExtractionFailure(f"{type(e).__name__}: {e}") from e


def extract_text(
    pdf_bytes: bytes,
    *,
    min_length: int = TEXT_MIN_LENGTH,
    max_length: int = TEXT_MAX_LENGTH,
    max_pages: int = MAX_PAGES,
) -> str | None:
    """
    Extract classification text from a PDF.

    Args:
        pdf_bytes: Raw PDF file content.
        min_length: Shortest text accepted as a usable text layer.
        max_length: Upper bound on returned characters.
        max_pages: Number of leading pages to read.

    Returns:
        The trimmed text of the first pages (pages joined by a newline) capped
        at ``max_length`` characters, or ``None`` if the PDF cannot be parsed
        or carries less than ``min_length`` characters of text.
    """
    try:
        pages = _read_pages(pdf_bytes, max_pages, max_length)
    except ExtractionFailure as e:
        log.info("PDF text extraction failed; using visual path", error=e.message)
        return None

    text = "\n".join(pages).strip()
    if len(text) < min_length:
        log.debug(
            "PDF text layer too short",
            text_length=len(text),
            min_length=min_length,
        )
        return None
    return text[:max_length]
