"""Integrations layer - External service clients.

Integrations handle communication with external APIs and services.
They abstract the details of external service protocols.
"""

from app.integrations.base import (
    BaseLLMClient,
    CompletionResult,
    LLMAuthError,
    LLMError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from app.integrations.claude import ClaudeClient, ClaudeError
from app.integrations.openai import OpenAIClient, OpenAIError

__all__ = [
    "BaseLLMClient",
    "ClaudeClient",
    "ClaudeError",
    "CompletionResult",
    "LLMAuthError",
    "LLMError",
    "LLMRateLimitError",
    "LLMTimeoutError",
    "OpenAIClient",
    "OpenAIError",
]
