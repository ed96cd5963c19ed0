"""Gemini adapter for JSON text generation.
"""

from typing import Optional, Tuple
import logging

from google import genai

from app.config import settings

logger = logging.getLogger("nutriplan.gemini")

_client: Optional[genai.Client] = None


# ------------------ Connection ------------------
def connect(api_key: Optional[str] = None):
    """Create the client; without a key the adapter stays disconnected."""
    global _client
    api_key = api_key or settings.gemini_api_key
    if not api_key:
        _client = None
        logger.info("No Gemini API key configured; AI endpoints will use fallbacks")
        return
    try:
        _client = genai.Client(api_key=api_key)
        logger.info("Gemini client initialised (model: %s)", settings.gemini_model)
    except Exception as exc:
        _client = None
        logger.warning("Could not initialize Gemini client: %s", exc)


def close():
    global _client
    _client = None


def get_client() -> Optional[genai.Client]:
    return _client


def is_available() -> bool:
    return _client is not None


# ------------------ Generation ------------------
def generate_json(prompt: str) -> Tuple[str, Optional[int]]:
    """Ask the model for a JSON document.

    Returns:
        (raw response text, total token count when reported)

    Raises:
        RuntimeError: when no client is connected or the response has no text
    """
    if _client is None:
        raise RuntimeError("Gemini client not configured")

    response = _client.models.generate_content(
        model=settings.gemini_model,
        contents=prompt,
        config={"response_mime_type": "application/json"},
    )
    text = response.text
    if not text:
        raise RuntimeError("Gemini returned an empty response")

    usage = getattr(response, "usage_metadata", None)
    tokens = getattr(usage, "total_token_count", None) if usage else None
    return text, tokens
