"""
Document classification package.

This package contains:

- PDF text extraction
- the classification prompts
- the model invoker (text, image and native PDF requests)
- response parsing and validation
- the pipeline that routes a document through the right path
- the command-line entry point
"""

from .errors import (
    ClassificationError,
    InvocationError,
    InvocationTimeout,
    MalformedResponse,
    UnsupportedInput,
)
from .extractor import extract_text
from .invoker import ModelInvoker
from .models import ClassificationResult, RawClassification
from .parsing import parse_classification_response
from .pipeline import DocumentClassifier

__all__ = [
    "ClassificationError",
    "ClassificationResult",
    "DocumentClassifier",
    "InvocationError",
    "InvocationTimeout",
    "MalformedResponse",
    "ModelInvoker",
    "RawClassification",
    "UnsupportedInput",
    "extract_text",
    "parse_classification_response",
]
