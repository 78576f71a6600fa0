"""OpenRouter LLM Client - structured-output chat completions."""

import http.client
import json
import urllib.error
import urllib.request

from autocommit import DEFAULT_MODEL, OPENROUTER_API_URL
from autocommit.git import ChangeSet
from autocommit.llm.base import (
    APIStatusError,
    CommitMessage,
    ContentDecodeError,
    EmptyResponseError,
    LLMError,
    ResponseDecodeError,
    TransportError,
)
from autocommit.prompts import PromptBuilder


class OpenRouterClient:
    """One-shot client: one POST, no retries, transport-default timeout."""

    def __init__(self, api_key: str, model: str | None = None, api_url: str | None = None, opener=None):
        if not api_key:
            raise LLMError("No API key given. Set OPENROUTER_API_KEY.")
        self.api_key = api_key
        self.model = model or DEFAULT_MODEL
        self.api_url = api_url or OPENROUTER_API_URL
        self._urlopen = opener or urllib.request.urlopen
        self._builder = PromptBuilder()

    @property
    def name(self) -> str:
        return f"OpenRouter ({self.model})"

    def generate(self, change_text: str, language: str | None = None) -> CommitMessage:
        request = self._builder.build_request(change_text, language, self.model)
        status, raw = self._post(request.to_json())

        if status != 200:
            raise self._status_error(status, raw)

        content = self._extract_content(raw)
        return self._decode_content(content)

    def _post(self, body: bytes) -> tuple[int, bytes]:
        """POST the body and return (status, raw response body)."""
        req = urllib.request.Request(
            self.api_url,
            data=body,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            method="POST",
        )
        try:
            with self._urlopen(req) as response:
                return response.status, response.read()
        except urllib.error.HTTPError as e:
            try:
                return e.code, e.read()
            finally:
                e.close()
        except urllib.error.URLError as e:
            raise TransportError(f"Failed to make API request: {e.reason}")
        except http.client.HTTPException as e:
            raise TransportError(f"Incomplete response from API: {e}")
        except OSError as e:
            raise TransportError(f"Failed to make API request: {e}")

    @staticmethod
    def _status_error(status: int, raw: bytes) -> APIStatusError:
        try:
            body = json.loads(raw.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            return APIStatusError(
                f"API request failed with status {status}, could not decode error body: {e}",
                status_code=status,
            )
        return APIStatusError(f"API request failed with status {status}: {body}", status_code=status, body=body)

    @staticmethod
    def _extract_content(raw: bytes) -> str:
        """First decode: the chat-completions envelope."""
        try:
            envelope = json.loads(raw.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ResponseDecodeError(f"Failed to decode LLM response: {e}")
        if not isinstance(envelope, dict):
            raise ResponseDecodeError(f"Failed to decode LLM response: expected an object, got {type(envelope).__name__}")

        choices = envelope.get("choices") or []
        if not isinstance(choices, list):
            raise ResponseDecodeError("Failed to decode LLM response: 'choices' is not a list")
        if not choices:
            raise EmptyResponseError("LLM response contained no choices or empty content")
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not content:
            raise EmptyResponseError("LLM response contained no choices or empty content")
        return content

    @staticmethod
    def _decode_content(content: str) -> CommitMessage:
        """Second decode: the JSON string the model wrote into the message."""
        try:
            data = json.loads(content)
        except (TypeError, json.JSONDecodeError) as e:
            raise ContentDecodeError(f"Failed to unmarshal commit message from LLM content: {e}")
        if not isinstance(data, dict):
            raise ContentDecodeError("Failed to unmarshal commit message from LLM content: expected a JSON object")

        title = data.get("title")
        description = data.get("description")
        if not isinstance(title, str) or not isinstance(description, str):
            raise ContentDecodeError(
                "Failed to unmarshal commit message from LLM content: 'title' and 'description' must be strings"
            )
        return CommitMessage(title=title, description=description)


def generate(api_key: str, change_set: ChangeSet, language: str | None = None, model: str | None = None) -> CommitMessage:
    """Generate a commit message for change_set with a fresh client."""
    return OpenRouterClient(api_key, model=model).generate(change_set.text, language)
