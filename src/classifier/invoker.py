"""
Model Invocation
================

Sends a single classification request to an OpenAI-compatible chat
completion endpoint and returns the model's raw text reply.

The three modalities (extracted text, image, native PDF) differ only in how
the user message is assembled; `build_messages` handles that and everything
else (timeout, error translation, reply extraction) is shared. Nothing is
retried here: the pipeline owns the retry policy so timeout budgets never
compound.
"""

from __future__ import annotations

import openai
import structlog

from common.config import Settings
from common.llm import OpenAIChatMixin

from .errors import InvocationError, InvocationTimeout
from .models import Modality, ModelRequest

log = structlog.get_logger(__name__)


def _attachment_parts(request: ModelRequest) -> list[dict]:
    if request.modality is Modality.IMAGE:
        return [
            {"type": "image_url", "image_url": {"url": attachment.data_url}}
            for attachment in request.attachments
        ]
    if request.modality is Modality.PDF:
        return [
            {
                "type": "file",
                "file": {
                    "filename": f"document-{index}.pdf",
                    "file_data": attachment.data_url,
                },
            }
            for index, attachment in enumerate(request.attachments, start=1)
        ]
    raise ValueError(f"Modality {request.modality.value!r} carries no attachments")


def build_messages(request: ModelRequest) -> list[dict]:
    """
    Build the chat messages for one request.

    Text requests are a single user message holding the prompt. Visual
    requests put every attachment first, followed by the prompt text, in one
    combined user message.
    """
    if request.modality is Modality.TEXT:
        return [{"role": "user", "content": request.prompt}]

    if not request.attachments:
        raise ValueError(f"{request.modality.value} request has no attachments")
    content = _attachment_parts(request)
    content.append({"type": "text", "text": request.prompt})
    return [{"role": "user", "content": content}]


def _first_text(response) -> str:
    """Return the text of the first choice, or "" if the reply carries none."""
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    content = choices[0].message.content
    return content if isinstance(content, str) else ""


class ModelInvoker(OpenAIChatMixin):
    """
    Issues classification requests against the configured model.

    The client is created once per process (see `common.llm.create_client`)
    and shared; the invoker itself holds no per-request state.
    """

    def __init__(self, settings: Settings, client: openai.OpenAI):
        self.settings = settings
        self.client = client

    def invoke(self, request: ModelRequest) -> str:
        """
        Send ``request`` and return the raw text reply.

        Raises:
            InvocationTimeout: The call exceeded ``REQUEST_TIMEOUT_MS``.
            InvocationError: Any other transport or API failure.
        """
        params = {
            "model": self.settings.CLASSIFY_MODEL,
            "messages": build_messages(request),
            "max_tokens": self.settings.CLASSIFY_MAX_TOKENS,
        }
        try:
            response = self._create_completion(**params)
        except openai.APITimeoutError as e:
            log.warning(
                "Model call timed out",
                model=self.settings.CLASSIFY_MODEL,
                modality=request.modality.value,
                timeout_ms=self.settings.REQUEST_TIMEOUT_MS,
            )
            raise InvocationTimeout(
                f"Model call timed out after {self.settings.REQUEST_TIMEOUT_MS} ms"
            ) from e
        except openai.APIError as e:
            log.warning(
                "Model call failed",
                model=self.settings.CLASSIFY_MODEL,
                modality=request.modality.value,
                error=str(e),
            )
            raise InvocationError(f"Model call failed: {e}") from e

        return _first_text(response)
