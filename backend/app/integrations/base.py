"""Shared httpx plumbing for the LLM provider clients.

Features:
- Async HTTP client using httpx (direct API calls, created lazily)
- Single attempt per call, failures are surfaced immediately
- Handles timeouts, rate limits (429), auth failures (401/403), 5xx and 4xx
- Request/response logging through llm_logger, never logs API keys
- Token usage logging for quota tracking

Subclasses describe the wire format: endpoint path, auth headers, request
body and how to read text and usage out of the response.

ERROR LOGGING REQUIREMENTS:
- Log all outbound API calls with provider, model, timing
- Log request/response bodies at DEBUG level (truncate large responses)
- Log and handle: timeouts, rate limits (429), auth failures (401/403)
- Log API quota/credit usage if available
- Mask API keys and tokens in all logs
"""

import time
from dataclasses import dataclass
from typing import Any

import httpx

from app.core.logging import get_logger, llm_logger

logger = get_logger(__name__)


@dataclass
class CompletionResult:
    """Result of a completion request."""

    success: bool
    text: str | None = None
    stop_reason: str | None = None
    input_tokens: int | None = None
    output_tokens: int | None = None
    error: str | None = None
    status_code: int | None = None
    duration_ms: float = 0.0
    request_id: str | None = None


class LLMError(Exception):
    """Base exception for provider API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: dict[str, Any] | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.request_id = request_id


class LLMTimeoutError(LLMError):
    """Raised when a request times out."""

    pass


class LLMRateLimitError(LLMError):
    """Raised when rate limited (429)."""

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message, status_code=429, request_id=request_id)
        self.retry_after = retry_after


class LLMAuthError(LLMError):
    """Raised when authentication fails (401/403)."""

    pass


@dataclass
class ParsedCompletion:
    """Text and usage read from a successful provider response."""

    text: str
    stop_reason: str | None
    input_tokens: int | None
    output_tokens: int | None


class BaseLLMClient:
    """Async single-shot completion client.

    Subclasses set PROVIDER and implement _headers, _request_body and
    _parse_response.
    """

    PROVIDER = "llm"
    ENDPOINT = ""
    REQUEST_ID_HEADER = "request-id"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float,
        max_tokens: int,
        temperature: float,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url
        self._timeout = timeout
        self._max_tokens = max_tokens
        self._temperature = temperature

        # HTTP client (created lazily)
        self._client: httpx.AsyncClient | None = None

    @property
    def model(self) -> str:
        """Get the model being used."""
        return self._model

    @property
    def provider(self) -> str:
        return self.PROVIDER

    def _headers(self) -> dict[str, str]:
        raise NotImplementedError

    def _request_body(self, prompt: str) -> dict[str, Any]:
        raise NotImplementedError

    def _parse_response(self, data: dict[str, Any]) -> ParsedCompletion:
        raise NotImplementedError

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    **self._headers(),
                },
                timeout=httpx.Timeout(self._timeout),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
        logger.debug(f"{self.PROVIDER} client closed")

    async def __aenter__(self) -> "BaseLLMClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _send(self, prompt: str) -> tuple[ParsedCompletion, str | None, float]:
        """Make one request. Raises LLMError on any failure."""
        client = await self._get_client()
        llm_logger.api_call_start(self.PROVIDER, self._model, len(prompt))
        llm_logger.request_body(self.PROVIDER, self._model, prompt)

        start_time = time.monotonic()
        try:
            response = await client.post(self.ENDPOINT, json=self._request_body(prompt))
        except httpx.TimeoutException as e:
            llm_logger.timeout(self.PROVIDER, self._model, self._timeout)
            raise LLMTimeoutError(f"Request timed out after {self._timeout}s") from e
        except httpx.RequestError as e:
            duration_ms = (time.monotonic() - start_time) * 1000
            llm_logger.api_call_error(
                self.PROVIDER, self._model, duration_ms, None, str(e), type(e).__name__
            )
            raise LLMError(f"Request failed: {e}") from e

        duration_ms = (time.monotonic() - start_time) * 1000
        request_id = response.headers.get(self.REQUEST_ID_HEADER)

        if response.status_code == 429:
            retry_after_str = response.headers.get("retry-after")
            retry_after = float(retry_after_str) if retry_after_str else None
            llm_logger.rate_limit(
                self.PROVIDER, self._model, retry_after=retry_after, request_id=request_id
            )
            raise LLMRateLimitError(
                "Rate limit exceeded", retry_after=retry_after, request_id=request_id
            )

        if response.status_code in (401, 403):
            llm_logger.auth_failure(self.PROVIDER, response.status_code)
            raise LLMAuthError(
                f"Authentication failed ({response.status_code})",
                status_code=response.status_code,
                request_id=request_id,
            )

        if response.status_code >= 400:
            error_msg = _error_message(response)
            error_type = "ServerError" if response.status_code >= 500 else "ClientError"
            llm_logger.api_call_error(
                self.PROVIDER,
                self._model,
                duration_ms,
                response.status_code,
                error_msg,
                error_type,
                request_id=request_id,
            )
            raise LLMError(
                f"{self.PROVIDER} API error {response.status_code}: {error_msg}",
                status_code=response.status_code,
                request_id=request_id,
            )

        try:
            parsed = self._parse_response(response.json())
        except LLMError as e:
            # Provider-specific "no content" errors keep their own message
            e.status_code = e.status_code or response.status_code
            e.request_id = e.request_id or request_id
            llm_logger.api_call_error(
                self.PROVIDER,
                self._model,
                duration_ms,
                response.status_code,
                str(e),
                "InvalidResponse",
                request_id=request_id,
            )
            raise
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            llm_logger.api_call_error(
                self.PROVIDER,
                self._model,
                duration_ms,
                response.status_code,
                str(e),
                "InvalidResponse",
                request_id=request_id,
            )
            raise LLMError(
                f"Invalid {self.PROVIDER} API response - no content returned",
                status_code=response.status_code,
                request_id=request_id,
            ) from e

        return parsed, request_id, duration_ms

    async def complete(self, prompt: str) -> CompletionResult:
        """Send one prompt and return the response text.

        Never raises for API failures; they come back as success=False.
        """
        start_time = time.monotonic()
        try:
            parsed, request_id, duration_ms = await self._send(prompt)
        except LLMError as e:
            return CompletionResult(
                success=False,
                error=str(e),
                status_code=e.status_code,
                request_id=e.request_id,
                duration_ms=(time.monotonic() - start_time) * 1000,
            )

        llm_logger.api_call_success(
            self.PROVIDER,
            self._model,
            duration_ms,
            input_tokens=parsed.input_tokens,
            output_tokens=parsed.output_tokens,
            request_id=request_id,
        )
        llm_logger.response_body(
            self.PROVIDER, self._model, parsed.text, duration_ms, stop_reason=parsed.stop_reason
        )
        if parsed.input_tokens is not None and parsed.output_tokens is not None:
            llm_logger.token_usage(
                self.PROVIDER, self._model, parsed.input_tokens, parsed.output_tokens
            )

        return CompletionResult(
            success=True,
            text=parsed.text,
            stop_reason=parsed.stop_reason,
            input_tokens=parsed.input_tokens,
            output_tokens=parsed.output_tokens,
            request_id=request_id,
            duration_ms=(time.monotonic() - start_time) * 1000,
        )


def _error_message(response: httpx.Response) -> str:
    """Best-effort error message from a provider error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:500] or "Unknown error"
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
    return str(body)[:500]
