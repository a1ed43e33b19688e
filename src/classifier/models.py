"""
Value types passed between the classification pipeline stages.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

PDF_MIME_TYPE = "application/pdf"
IMAGE_MIME_TYPES = frozenset({"image/png", "image/jpeg"})
SUPPORTED_MIME_TYPES = frozenset({PDF_MIME_TYPE}) | IMAGE_MIME_TYPES

ExtractionMethod = Literal["text", "vision"]


class Modality(str, Enum):
    """Channel carrying the document content to the model."""

    TEXT = "text"
    IMAGE = "image"
    PDF = "pdf"

    @property
    def extraction_method(self) -> ExtractionMethod:
        return "text" if self is Modality.TEXT else "vision"


@dataclass(frozen=True)
class Attachment:
    """A base64-encoded binary payload tagged with its media type."""

    media_type: str
    data: str

    @classmethod
    def from_bytes(cls, content: bytes, media_type: str) -> Attachment:
        return cls(media_type=media_type, data=base64.b64encode(content).decode())

    @property
    def data_url(self) -> str:
        return f"data:{self.media_type};base64,{self.data}"


@dataclass(frozen=True)
class ModelRequest:
    """Everything needed to issue one model invocation."""

    modality: Modality
    prompt: str
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RawClassification:
    label: str
    confidence: float
    reasoning: str


@dataclass(frozen=True)
class ClassificationResult:
    label: str
    confidence: float
    reasoning: str
    extraction_method: ExtractionMethod
    processing_time_ms: int

    def as_dict(self) -> dict:
        """Serialize using the wire keys expected by API callers."""
        return {
            "label": self.label,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "extractionMethod": self.extraction_method,
            "processingTimeMs": self.processing_time_ms,
        }
