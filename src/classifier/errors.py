"""
Classification error kinds.

Every failure the pipeline can surface derives from `ClassificationError` and
carries a stable ``kind`` string, so callers can report it without inspecting
exception types. Only `MalformedResponse` is retried by the pipeline.
"""


class ClassificationError(Exception):
    """Base class for all classification failures."""

    kind = "ClassificationError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedInput(ClassificationError):
    """The MIME type, size or content is outside what the pipeline accepts."""

    kind = "UnsupportedInput"


class ExtractionFailure(ClassificationError):
    """Text extraction failed. Raised and handled inside the extractor only."""

    kind = "ExtractionFailure"


class InvocationError(ClassificationError):
    """The model call failed at the transport level."""

    kind = "InvocationError"


class InvocationTimeout(InvocationError):
    """The model call did not finish within the configured timeout."""

    kind = "InvocationTimeout"


class MalformedResponse(ClassificationError):
    """The model reply could not be parsed into label/confidence/reasoning."""

    kind = "MalformedResponse"
