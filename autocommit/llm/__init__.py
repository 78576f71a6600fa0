"""LLM Client Package"""

from autocommit.llm.base import (
    APIStatusError,
    CommitMessage,
    ContentDecodeError,
    EmptyResponseError,
    LLMError,
    ResponseDecodeError,
    TransportError,
)
from autocommit.llm.openrouter import OpenRouterClient, generate

__all__ = [
    "APIStatusError",
    "CommitMessage",
    "ContentDecodeError",
    "EmptyResponseError",
    "LLMError",
    "ResponseDecodeError",
    "TransportError",
    "OpenRouterClient",
    "generate",
]
