"""
Classification Pipeline
=======================

This module defines `DocumentClassifier`, which orchestrates the
classification of a single uploaded document. It brings together text
extraction, prompt construction, model invocation and response parsing.

The path taken depends on the input:

- PNG/JPEG images go straight to the model as image attachments.
- PDFs with a usable text layer are classified from the extracted text.
- PDFs without one (typically scans) are sent to the model as a native PDF
  attachment.

A reply that fails validation is requested once more with the same request.
Transport failures and timeouts are never retried. The classifier keeps no
per-request state, so one instance can serve concurrent callers.
"""

from __future__ import annotations

import time
from typing import Callable

import structlog

from common.config import Settings

from .errors import MalformedResponse, UnsupportedInput
from .extractor import extract_text
from .invoker import ModelInvoker
from .models import (
    IMAGE_MIME_TYPES,
    PDF_MIME_TYPE,
    SUPPORTED_MIME_TYPES,
    Attachment,
    ClassificationResult,
    Modality,
    ModelRequest,
    RawClassification,
)
from .parsing import parse_classification_response
from .prompts import build_text_prompt, build_vision_prompt

log = structlog.get_logger(__name__)

TextExtractor = Callable[[bytes], str | None]


class DocumentClassifier:
    """
    Classifies documents by routing them through the right model modality.
    """

    def __init__(
        self,
        invoker: ModelInvoker,
        settings: Settings,
        text_extractor: TextExtractor | None = None,
    ):
        """
        Args:
            invoker: Sends requests to the model. Tests substitute a fake.
            settings: Application settings (size limit, extraction bounds).
            text_extractor: Optional override for PDF text extraction.
        """
        self.invoker = invoker
        self.settings = settings
        self.text_extractor = text_extractor or self._extract_pdf_text

    def classify(self, content: bytes, mime_type: str) -> ClassificationResult:
        """
        Classify one document.

        Raises:
            UnsupportedInput: Unknown MIME type, empty or oversized content.
            MalformedResponse: Two consecutive replies failed validation.
            InvocationError: The model call failed or timed out.
        """
        start = time.monotonic()
        self._check_input(content, mime_type)

        request = self._build_request(content, mime_type)
        raw = self._classify_with_retry(request)

        processing_time_ms = max(0, int((time.monotonic() - start) * 1000))
        result = ClassificationResult(
            label=raw.label,
            confidence=raw.confidence,
            reasoning=raw.reasoning,
            extraction_method=request.modality.extraction_method,
            processing_time_ms=processing_time_ms,
        )
        log.info(
            "Classified document",
            label=result.label,
            confidence=result.confidence,
            method=result.extraction_method,
            processing_time_ms=result.processing_time_ms,
            mime_type=mime_type,
            size=len(content),
        )
        return result

    def _check_input(self, content: bytes, mime_type: str) -> None:
        if mime_type not in SUPPORTED_MIME_TYPES:
            raise UnsupportedInput(
                f"Unsupported file type: {mime_type}. Accepted: PDF, PNG, JPG"
            )
        if not content:
            raise UnsupportedInput("File is empty")
        if len(content) > self.settings.MAX_FILE_SIZE_BYTES:
            limit_mib = self.settings.MAX_FILE_SIZE_BYTES / (1024 * 1024)
            raise UnsupportedInput(
                f"File too large. Maximum size is {limit_mib:g}MB"
            )

    def _build_request(self, content: bytes, mime_type: str) -> ModelRequest:
        """Pick the modality for this document and assemble the request."""
        if mime_type in IMAGE_MIME_TYPES:
            return ModelRequest(
                modality=Modality.IMAGE,
                prompt=build_vision_prompt(),
                attachments=(Attachment.from_bytes(content, mime_type),),
            )

        text = self.text_extractor(content)
        if text:
            return ModelRequest(modality=Modality.TEXT, prompt=build_text_prompt(text))

        log.info("No usable text layer; sending PDF to the model", size=len(content))
        return ModelRequest(
            modality=Modality.PDF,
            prompt=build_vision_prompt(),
            attachments=(Attachment.from_bytes(content, PDF_MIME_TYPE),),
        )

    def _classify_with_retry(self, request: ModelRequest) -> RawClassification:
        try:
            return parse_classification_response(self.invoker.invoke(request))
        except MalformedResponse as e:
            log.warning(
                "Classification response invalid; retrying once",
                modality=request.modality.value,
                error=e.message,
            )
        return parse_classification_response(self.invoker.invoke(request))

    def _extract_pdf_text(self, content: bytes) -> str | None:
        return extract_text(
            content,
            min_length=self.settings.TEXT_MIN_LENGTH,
            max_length=self.settings.TEXT_MAX_LENGTH,
            max_pages=self.settings.TEXT_MAX_PAGES,
        )
