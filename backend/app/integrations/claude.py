"""Claude/Anthropic client for post translation.

Calls the Messages API (POST /v1/messages) with a single user message.
The API key comes from the api_settings table and is passed per client.
"""

from typing import Any

from app.core.config import get_settings
from app.integrations.base import BaseLLMClient, LLMError, ParsedCompletion

ANTHROPIC_API_VERSION = "2023-06-01"


class ClaudeError(LLMError):
    """Raised for Claude responses that cannot be used."""

    pass


class ClaudeClient(BaseLLMClient):
    """Async client for the Anthropic Messages API."""

    PROVIDER = "claude"
    ENDPOINT = "/v1/messages"
    REQUEST_ID_HEADER = "request-id"

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        timeout: float | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> None:
        """Initialize Claude client.

        Args:
            api_key: Anthropic API key.
            model: Model to use. Defaults to settings (claude-3-haiku).
            timeout: Request timeout in seconds. Defaults to settings.
            max_tokens: Maximum response tokens. Defaults to settings.
            temperature: Sampling temperature. Defaults to settings.
        """
        settings = get_settings()
        super().__init__(
            api_key=api_key,
            model=model or settings.claude_model,
            base_url=settings.anthropic_api_url,
            timeout=timeout or settings.claude_timeout,
            max_tokens=max_tokens or settings.translation_max_tokens,
            temperature=(
                temperature if temperature is not None else settings.translation_temperature
            ),
        )

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "anthropic-version": ANTHROPIC_API_VERSION,
        }

    def _request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

    def _parse_response(self, data: dict[str, Any]) -> ParsedCompletion:
        content = data.get("content") or []
        if not content:
            raise ClaudeError("Invalid Claude API response - no content returned")

        usage = data.get("usage") or {}
        return ParsedCompletion(
            text=content[0].get("text", ""),
            stop_reason=data.get("stop_reason"),
            input_tokens=usage.get("input_tokens"),
            output_tokens=usage.get("output_tokens"),
        )
