"""
Shared LLM helpers.

This module centralizes construction of the OpenAI-compatible client and the
chat completion call, so every classification modality goes through the same
timeout handling and error translation.
"""

import openai

from .config import Settings


def create_client(settings: Settings) -> openai.OpenAI:
    """
    Build the process-wide OpenAI-compatible client.

    The client is created once at startup and injected wherever it is needed.
    SDK-level retries are disabled: a timed-out call is reported as a failure
    and the caller decides whether anything is worth repeating.
    """
    if settings.LLM_PROVIDER == "ollama":
        return openai.OpenAI(
            base_url=settings.OLLAMA_BASE_URL,
            api_key="dummy",
            timeout=settings.request_timeout_seconds,
            max_retries=0,
        )
    return openai.OpenAI(
        api_key=settings.OPENAI_API_KEY,
        timeout=settings.request_timeout_seconds,
        max_retries=0,
    )


class OpenAIChatMixin:
    """
    Mixin providing the OpenAI-compatible chat completion call.

    The mixin expects ``self.client`` to be an ``openai.OpenAI`` (or a test
    double with the same ``chat.completions.create`` surface) and
    ``self.settings`` to expose ``request_timeout_seconds``.
    """

    def _create_completion(self, **kwargs):
        """Call the chat completion API with the configured hard timeout."""
        kwargs.setdefault("timeout", self.settings.request_timeout_seconds)
        return self.client.chat.completions.create(**kwargs)
