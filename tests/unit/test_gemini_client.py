"""Unit tests for the Gemini text-generation client."""

import asyncio
import time
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from gourmetnet.clients.gemini import GeminiClient, _is_transient
from gourmetnet.utils.errors import RecipeGenerationError


def make_client(**kwargs) -> GeminiClient:
    with patch("gourmetnet.clients.gemini.genai.Client") as mock_genai:
        client = GeminiClient(api_key="test-key", **kwargs)
    client._client = mock_genai.return_value
    return client


class TestGeminiClientInit:
    """Tests for GeminiClient construction."""

    def test_init_with_key_is_configured(self):
        with patch("gourmetnet.clients.gemini.genai.Client") as mock_genai:
            client = GeminiClient(api_key="test-key", model="gemini-test")

        mock_genai.assert_called_once_with(api_key="test-key")
        assert client.is_configured is True
        assert client.model == "gemini-test"

    def test_init_without_key_is_unconfigured(self):
        with patch("gourmetnet.clients.gemini.genai.Client") as mock_genai:
            client = GeminiClient(api_key="")

        mock_genai.assert_not_called()
        assert client.is_configured is False

    def test_init_rejects_zero_retries(self):
        with pytest.raises(ValueError, match="max_retries"):
            GeminiClient(api_key="", max_retries=0)

    def test_from_config(self):
        config = MagicMock(
            GEMINI_API_KEY="",
            GEMINI_MODEL="gemini-x",
            TEMPERATURE=0.3,
            MAX_OUTPUT_TOKENS=1024,
            LLM_TIMEOUT_SECONDS=5.0,
            MAX_RETRIES=2,
            DELAY_BETWEEN_RETRIES=0.5,
        )
        client = GeminiClient.from_config(config)

        assert client.model == "gemini-x"
        assert client.temperature == 0.3
        assert client.max_output_tokens == 1024
        assert client.max_retries == 2


class TestIsTransient:
    @pytest.mark.parametrize(
        "error",
        [
            asyncio.TimeoutError(),
            ConnectionError("reset"),
            Exception("503 UNAVAILABLE"),
            Exception("429 Too Many Requests"),
        ],
    )
    def test_transient(self, error):
        assert _is_transient(error) is True

    @pytest.mark.parametrize("error", [Exception("400 INVALID_ARGUMENT"), PermissionError("API key not valid")])
    def test_permanent(self, error):
        assert _is_transient(error) is False


class TestGenerate:
    """Tests for GeminiClient.generate."""

    @pytest.mark.asyncio
    async def test_returns_response_text(self):
        client = make_client(temperature=0.4, max_output_tokens=512)
        client._client.models.generate_content.return_value = MagicMock(text='{"title": "Soup"}')

        text = await client.generate("prompt")

        assert text == '{"title": "Soup"}'
        kwargs = client._client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["contents"] == "prompt"
        assert kwargs["config"].temperature == 0.4
        assert kwargs["config"].max_output_tokens == 512

    @pytest.mark.asyncio
    async def test_unconfigured_raises(self):
        client = GeminiClient(api_key="")

        with pytest.raises(RecipeGenerationError, match="not configured"):
            await client.generate("prompt")

    @pytest.mark.asyncio
    async def test_empty_response_raises(self):
        client = make_client()
        client._client.models.generate_content.return_value = MagicMock(text="   ")

        with pytest.raises(RecipeGenerationError, match="empty response"):
            await client.generate("prompt")

    @pytest.mark.asyncio
    async def test_sdk_error_is_wrapped(self):
        client = make_client()
        original = RuntimeError("400 API key not valid")
        client._client.models.generate_content.side_effect = original

        with pytest.raises(RecipeGenerationError) as exc_info:
            await client.generate("prompt")

        assert exc_info.value.__cause__ is original

    @pytest.mark.asyncio
    async def test_single_attempt_by_default(self):
        client = make_client()
        client._client.models.generate_content.side_effect = ConnectionError("reset")

        with pytest.raises(RecipeGenerationError):
            await client.generate("prompt")

        assert client._client.models.generate_content.call_count == 1

    @pytest.mark.asyncio
    @patch("gourmetnet.clients.gemini.asyncio.sleep", new_callable=AsyncMock)
    async def test_transient_errors_are_retried_with_backoff(self, mock_sleep):
        client = make_client(max_retries=3, retry_delay_seconds=1.0)
        client._client.models.generate_content.side_effect = [
            Exception("503 UNAVAILABLE"),
            ConnectionError("reset"),
            MagicMock(text="{}"),
        ]

        text = await client.generate("prompt")

        assert text == "{}"
        assert client._client.models.generate_content.call_count == 3
        assert [call.args[0] for call in mock_sleep.await_args_list] == [1.0, 2.0]

    @pytest.mark.asyncio
    @patch("gourmetnet.clients.gemini.asyncio.sleep", new_callable=AsyncMock)
    async def test_permanent_errors_are_not_retried(self, mock_sleep):
        client = make_client(max_retries=3)
        client._client.models.generate_content.side_effect = Exception("400 INVALID_ARGUMENT")

        with pytest.raises(RecipeGenerationError):
            await client.generate("prompt")

        assert client._client.models.generate_content.call_count == 1
        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_timeout_is_reported(self):
        client = make_client(timeout_seconds=0.01)
        client._client.models.generate_content.side_effect = lambda **_: time.sleep(0.2)

        with pytest.raises(RecipeGenerationError):
            await client.generate("prompt")
