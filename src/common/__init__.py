"""
Common building blocks shared by the classification pipeline.

This package contains reusable, domain-agnostic code:

- configuration loading (environment variables)
- logging configuration
- OpenAI-compatible client construction and the shared chat completion call
"""
