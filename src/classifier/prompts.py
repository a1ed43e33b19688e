"""
Classification prompts.

Both prompts share the same rules and response format so every reply can be
validated by the same parser regardless of how the document reached the model.
"""

_RULES = """
## Rules:
- Determine the most specific document type you can (e.g. "Electric Bill", "W-2 Tax Form", "Auto Insurance Policy", "Bank Statement")
- Provide a short label (2-4 words)
- Confidence should reflect how certain you are (0.0 = uncertain, 1.0 = certain)
- Keep reasoning to 1 sentence
""".strip()

_RESPONSE_FORMAT = """
Respond with ONLY valid JSON, no markdown fences:
{"label": "Document Type", "confidence": 0.95, "reasoning": "Brief explanation"}
""".strip()


def build_text_prompt(content: str) -> str:
    """Prompt for classifying a document from its extracted text."""
    return (
        "You are a document classifier. Analyze the document content below. "
        "Identify the document type based on keywords, structure, and context.\n\n"
        f"{_RULES}\n\n"
        "## Document Content:\n"
        f"{content}\n\n"
        f"{_RESPONSE_FORMAT}"
    )


def build_vision_prompt() -> str:
    """Prompt sent alongside an image or PDF payload."""
    return (
        "You are a document classifier. Look at the document image(s) and "
        "identify the document type based on visual layout, logos, text, and "
        "structure.\n\n"
        f"{_RULES}\n\n"
        f"{_RESPONSE_FORMAT}"
    )
