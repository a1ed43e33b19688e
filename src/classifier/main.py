"""
Document Classifier Command Line
================================

Classifies local PDF, PNG and JPEG files and writes one JSON line per file
to stdout:

    {"file": "bill.pdf", "success": true, "result": {...}}
    {"file": "notes.txt", "success": false, "error": "Unsupported file type: ..."}

Logs go to stderr. The exit status is 0 when every file was classified,
1 when at least one failed, and 2 on configuration errors.
"""

from __future__ import annotations

import argparse
import json
import sys
from io import BytesIO
from pathlib import Path
from typing import IO

import structlog
from PIL import Image, UnidentifiedImageError

from common.config import Settings
from common.llm import create_client
from common.logging_config import configure_logging

from .errors import ClassificationError, UnsupportedInput
from .invoker import ModelInvoker
from .models import PDF_MIME_TYPE
from .pipeline import DocumentClassifier

PDF_MAGIC = b"%PDF-"
PDF_HEADER_WINDOW = 1024


def detect_mime_type(content: bytes) -> str | None:
    """
    Identify the MIME type from the file content rather than its name.

    Returns ``None`` for anything that is neither a PDF nor an image Pillow
    can identify.

    Raises:
        UnsupportedInput: The image header declares more pixels than Pillow
            is willing to open.
    """
    # Readers accept junk ahead of the header within the first kilobyte
    if PDF_MAGIC in content[:PDF_HEADER_WINDOW]:
        return PDF_MIME_TYPE
    try:
        with Image.open(BytesIO(content)) as image:
            image_format = image.format
    except Image.DecompressionBombError as e:
        raise UnsupportedInput(f"Image dimensions are too large: {e}") from e
    except (UnidentifiedImageError, OSError):
        return None
    return Image.MIME.get(image_format or "")


def classify_file(classifier: DocumentClassifier, path: Path) -> dict:
    """Classify one file and return the JSON-ready response payload."""
    log = structlog.get_logger(__name__)
    try:
        content = path.read_bytes()
    except OSError as e:
        log.error("Could not read file", file=str(path), error=str(e))
        return {"file": str(path), "success": False, "error": f"Could not read file: {e}"}

    try:
        mime_type = detect_mime_type(content)
        if mime_type is None:
            raise UnsupportedInput("Unsupported file type. Accepted: PDF, PNG, JPG")
        result = classifier.classify(content, mime_type)
    except ClassificationError as e:
        log.error("Classification failed", file=str(path), kind=e.kind, error=e.message)
        return {"file": str(path), "success": False, "error": e.message}

    return {"file": str(path), "success": True, "result": result.as_dict()}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doc-classifier",
        description="Classify PDF, PNG and JPEG documents with an LLM.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="Documents to classify")
    return parser


def main(argv: list[str] | None = None, stdout: IO[str] | None = None) -> int:
    """Entry point for the ``doc-classifier`` command."""
    args = build_parser().parse_args(argv)
    stdout = stdout or sys.stdout
    log = structlog.get_logger(__name__)

    try:
        settings = Settings()
        configure_logging(settings)
    except ValueError as e:
        log.error("Configuration error", error=str(e))
        return 2

    log.info(
        "Starting document classifier",
        llm_provider=settings.LLM_PROVIDER,
        model=settings.CLASSIFY_MODEL,
        timeout_ms=settings.REQUEST_TIMEOUT_MS,
        file_count=len(args.files),
    )

    client = create_client(settings)
    classifier = DocumentClassifier(ModelInvoker(settings, client), settings)

    exit_code = 0
    for path in args.files:
        payload = classify_file(classifier, path)
        if not payload["success"]:
            exit_code = 1
        stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
        stdout.flush()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
