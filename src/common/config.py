"""
Configuration module for the document classifier.

This module centralizes the loading and validation of all configuration
parameters from environment variables. It provides a single `Settings`
class that acts as a container for all configurable values, ensuring
that they are defined in one place and can be easily imported and used
throughout the application.
"""

import os
from typing import Literal


class Settings:
    """
    A container for all configuration settings, loaded from environment variables.

    This class centralizes configuration, providing default values for optional
    settings and raising errors for missing required settings.
    """

    # --- LLM Provider Configuration ---
    LLM_PROVIDER: Literal["openai", "ollama"]
    OLLAMA_BASE_URL: str | None
    OPENAI_API_KEY: str | None

    # --- Model Selection ---
    CLASSIFY_MODEL: str
    CLASSIFY_MAX_TOKENS: int
    REQUEST_TIMEOUT_MS: int

    # --- Text Extraction ---
    TEXT_MIN_LENGTH: int
    TEXT_MAX_LENGTH: int
    TEXT_MAX_PAGES: int

    # --- Input Limits ---
    MAX_FILE_SIZE_BYTES: int

    # --- Logging ---
    LOG_FORMAT: Literal["console", "json"]
    LOG_LEVEL: str

    def __init__(self):
        """
        Loads settings from environment variables and performs validation.
        """
        # --- LLM Provider Configuration ---
        self.LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai")
        if self.LLM_PROVIDER not in ("openai", "ollama"):
            raise ValueError("LLM_PROVIDER must be 'openai' or 'ollama'")

        if self.LLM_PROVIDER == "ollama":
            self.OLLAMA_BASE_URL = os.getenv(
                "OLLAMA_BASE_URL", "http://localhost:11434/v1/"
            )
            self.OPENAI_API_KEY = None  # Not used for Ollama
            default_model = "gemma3:12b"
        else:  # openai
            self.OLLAMA_BASE_URL = None
            self.OPENAI_API_KEY = self._get_required_env("OPENAI_API_KEY")
            default_model = "gpt-4o-mini"

        # --- Model Selection ---
        self.CLASSIFY_MODEL = os.getenv("CLASSIFY_MODEL", default_model)
        self.CLASSIFY_MAX_TOKENS = self._get_positive_int("CLASSIFY_MAX_TOKENS", 128)
        self.REQUEST_TIMEOUT_MS = self._get_positive_int("REQUEST_TIMEOUT_MS", 6000)

        # --- Text Extraction ---
        self.TEXT_MIN_LENGTH = self._get_positive_int("TEXT_MIN_LENGTH", 50)
        self.TEXT_MAX_LENGTH = self._get_positive_int("TEXT_MAX_LENGTH", 3000)
        self.TEXT_MAX_PAGES = self._get_positive_int("TEXT_MAX_PAGES", 2)
        if self.TEXT_MIN_LENGTH > self.TEXT_MAX_LENGTH:
            raise ValueError("TEXT_MIN_LENGTH must not exceed TEXT_MAX_LENGTH")

        # --- Input Limits ---
        self.MAX_FILE_SIZE_BYTES = self._get_positive_int(
            "MAX_FILE_SIZE_BYTES", int(4.5 * 1024 * 1024)
        )

        # --- Logging ---
        self.LOG_FORMAT = os.getenv("LOG_FORMAT", "console").lower()
        if self.LOG_FORMAT not in ("console", "json"):
            raise ValueError("LOG_FORMAT must be 'console' or 'json'")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def request_timeout_seconds(self) -> float:
        """Per-call model timeout in seconds, as the OpenAI SDK expects it."""
        return self.REQUEST_TIMEOUT_MS / 1000

    def _get_required_env(self, var_name: str) -> str:
        """
        Gets a required environment variable, raising an error if it's not set.
        """
        value = os.getenv(var_name)
        if value is None:
            raise ValueError(f"Required environment variable '{var_name}' is not set.")
        return value

    def _get_positive_int(self, var_name: str, default: int) -> int:
        raw = os.getenv(var_name)
        if raw is None or raw.strip() == "":
            return default
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"{var_name} must be an integer, got {raw!r}") from None
        if value < 1:
            raise ValueError(f"{var_name} must be >= 1")
        return value
