from unittest.mock import AsyncMock, patch

import pytest

from config import settings
from services import gemini_client


class RateLimited(Exception):
    code = 429


class TestRateLimitDetection:
    def test_status_code(self):
        assert gemini_client.is_rate_limit_error(RateLimited("quota"))

    @pytest.mark.parametrize("message", [
        "429 Too Many Requests",
        "Rate limit reached for model",
        "RESOURCE_EXHAUSTED: quota exceeded",
    ])
    def test_messages(self, message):
        assert gemini_client.is_rate_limit_error(Exception(message))

    def test_other_errors(self):
        assert not gemini_client.is_rate_limit_error(Exception("invalid API key"))

    def test_retry_delay_uses_server_hint(self):
        with patch.object(settings, "max_retry_delay_s", 30.0):
            delay = gemini_client.retry_delay(Exception("Please try again in 3.5s"), 2.0)
        assert delay == 4.5

    def test_retry_delay_capped(self):
        with patch.object(settings, "max_retry_delay_s", 10.0):
            assert gemini_client.retry_delay(Exception("try again in 60s"), 2.0) == 10.0
            assert gemini_client.retry_delay(Exception("429"), 2.0) == 2.0


@pytest.mark.asyncio
async def test_no_api_key_returns_none():
    with patch.object(settings, "gemini_api_key", ""):
        assert await gemini_client.generate_text("prompt") is None


@pytest.mark.asyncio
async def test_retries_after_rate_limit():
    generate = AsyncMock(side_effect=[RateLimited("429"), '{"languages": []}'])
    with patch.object(gemini_client, "get_client", return_value=object()), \
         patch.object(gemini_client, "_generate", generate), \
         patch("services.gemini_client.asyncio.sleep", new=AsyncMock()) as sleep:
        result = await gemini_client.generate_text("prompt")
    assert result == '{"languages": []}'
    assert generate.await_count == 2
    sleep.assert_awaited_once()


@pytest.mark.asyncio
async def test_falls_back_to_smaller_model():
    generate = AsyncMock(side_effect=[RateLimited("429"), RateLimited("429"), "fallback"])
    with patch.object(settings, "max_retries", 1), \
         patch.object(gemini_client, "get_client", return_value=object()), \
         patch.object(gemini_client, "_generate", generate), \
         patch("services.gemini_client.asyncio.sleep", new=AsyncMock()):
        result = await gemini_client.generate_text("prompt")
    assert result == "fallback"
    assert generate.await_args_list[0].args[1] == settings.gemini_model
    assert generate.await_args_list[-1].args[1] == settings.gemini_fallback_model


@pytest.mark.asyncio
async def test_other_errors_return_none_without_retry():
    generate = AsyncMock(side_effect=Exception("invalid API key"))
    with patch.object(gemini_client, "get_client", return_value=object()), \
         patch.object(gemini_client, "_generate", generate):
        assert await gemini_client.generate_text("prompt") is None
    assert generate.await_count == 1
