"""LLM Base Classes and Error Taxonomy"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommitMessage:
    """Title and body decoded from the model's structured output."""
    title: str
    description: str


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class TransportError(LLMError):
    """The request failed on the network or the response was cut short."""
    pass


class APIStatusError(LLMError):
    """The service answered with a non-200 status."""

    def __init__(self, message: str, status_code: int, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ResponseDecodeError(LLMError):
    """The outer response envelope is not valid JSON."""
    pass


class EmptyResponseError(LLMError):
    """The envelope decoded but carries no choices or no content."""
    pass


class ContentDecodeError(LLMError):
    """The message content is not a JSON CommitMessage."""
    pass
