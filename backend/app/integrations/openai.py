"""OpenAI client for post translation.

Calls the Chat Completions API (POST /chat/completions) with a single user
message. The API key comes from the api_settings table and is passed per
client.
"""

from typing import Any

from app.core.config import get_settings
from app.integrations.base import BaseLLMClient, LLMError, ParsedCompletion


class OpenAIError(LLMError):
    """Raised for OpenAI responses that cannot be used."""

    pass


class OpenAIClient(BaseLLMClient):
    """Async client for OpenAI chat completions."""

    PROVIDER = "openai"
    ENDPOINT = "/chat/completions"
    REQUEST_ID_HEADER = "x-request-id"

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        timeout: float | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> None:
        settings = get_settings()
        super().__init__(
            api_key=api_key,
            model=model or settings.openai_model,
            base_url=settings.openai_api_url,
            timeout=timeout or settings.openai_timeout,
            max_tokens=max_tokens or settings.translation_max_tokens,
            temperature=(
                temperature if temperature is not None else settings.translation_temperature
            ),
        )

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def _request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

    def _parse_response(self, data: dict[str, Any]) -> ParsedCompletion:
        choices = data.get("choices") or []
        if not choices:
            raise OpenAIError("Invalid OpenAI API response - no choices returned")

        choice = choices[0]
        usage = data.get("usage") or {}
        return ParsedCompletion(
            text=choice["message"].get("content") or "",
            stop_reason=choice.get("finish_reason"),
            input_tokens=usage.get("prompt_tokens"),
            output_tokens=usage.get("completion_tokens"),
        )
