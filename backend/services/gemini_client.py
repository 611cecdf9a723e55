"""Google Gemini API wrapper with rate-limit retries and a fallback model."""

import asyncio
import logging
import re

from google import genai
from google.genai import types

from config import settings

logger = logging.getLogger(__name__)

_client: genai.Client | None = None

_RATE_LIMIT_MARKERS = ("429", "rate limit", "resource exhausted", "resource_exhausted",
                       "too many requests", "please try again in")
_RETRY_AFTER_RE = re.compile(r"try again in (\d+(?:\.\d+)?)s", re.IGNORECASE)


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def is_rate_limit_error(error: BaseException) -> bool:
    if getattr(error, "code", None) == 429:
        return True
    message = str(error).lower()
    return any(marker in message for marker in _RATE_LIMIT_MARKERS)


def retry_delay(error: BaseException, delay: float) -> float:
    """Seconds to wait before the next attempt, honouring a server hint."""
    match = _RETRY_AFTER_RE.search(str(error))
    if match:
        delay = float(match.group(1)) + 1.0
    return min(delay, settings.max_retry_delay_s)


async def _generate(client: genai.Client, model: str, prompt: str) -> str:
    response = await client.aio.models.generate_content(
        model=model,
        contents=prompt,
        config=types.GenerateContentConfig(
            temperature=0.2,
            max_output_tokens=2048,
            response_mime_type="application/json",
        ),
    )
    return (response.text or "").strip()


async def _generate_with_retry(client: genai.Client, model: str, prompt: str) -> str:
    """Retry rate-limited calls with exponential backoff; other errors propagate."""
    delay = settings.initial_retry_delay_s
    attempt = 0
    while True:
        try:
            return await _generate(client, model, prompt)
        except Exception as e:
            attempt += 1
            if not is_rate_limit_error(e) or attempt > settings.max_retries:
                raise
            wait = retry_delay(e, delay)
            logger.warning("Gemini rate limited (attempt %d/%d), retrying in %.1fs",
                           attempt, settings.max_retries, wait)
            await asyncio.sleep(wait)
            delay = min(delay * 2, settings.max_retry_delay_s)


async def generate_text(prompt: str) -> str | None:
    """Send a prompt to Gemini and return the raw response text.

    Returns None when Gemini is disabled or every attempt failed. When the
    primary model stays rate limited, one attempt is made on the fallback model.
    """
    client = get_client()
    if client is None:
        return None

    try:
        return await _generate_with_retry(client, settings.gemini_model, prompt)
    except Exception as e:
        if not is_rate_limit_error(e) or not settings.gemini_fallback_model:
            logger.error("Gemini API error: %s", e)
            return None
        logger.warning("Primary model %s exhausted, trying %s",
                       settings.gemini_model, settings.gemini_fallback_model)

    try:
        return await _generate(client, settings.gemini_fallback_model, prompt)
    except Exception as e:
        logger.error("Gemini fallback model error: %s", e)
        return None
