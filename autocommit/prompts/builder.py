"""Prompt Builder - Construct the structured-output request for commit message generation."""

import json
from dataclasses import dataclass

from autocommit import DEFAULT_LANGUAGE, LANGUAGE_CODES


@dataclass(frozen=True)
class LocaleTemplate:
    """Instruction text and schema field descriptions for one language."""
    instruction: str
    title_description: str
    body_description: str


LOCALES = {
    "English": LocaleTemplate(
        instruction=(
            "Analyze the following git diff and generate a concise commit title (max 70 chars) "
            "and a detailed commit description. Respond in JSON format according to the schema:"
        ),
        title_description="Concise commit message title",
        body_description="Detailed commit message description",
    ),
    "Spanish": LocaleTemplate(
        instruction=(
            "Analiza el siguiente git diff y genera un título de commit conciso (máx. 70 caracteres) "
            "y una descripción detallada del commit. Responde en formato JSON de acuerdo con el esquema:"
        ),
        title_description="Título conciso del mensaje de commit",
        body_description="Descripción detallada del mensaje de commit",
    ),
}

SCHEMA_NAME = "commit_message"


def language_from_code(code: str | None) -> str:
    """Map a stdin/CLI language code to a locale name. Only 'es' picks Spanish."""
    if code is not None and code.strip() == 'es':
        return LANGUAGE_CODES['es']
    return DEFAULT_LANGUAGE


def get_locale(language: str | None) -> LocaleTemplate:
    """Unknown languages fall back to English."""
    if language == "Spanish":
        return LOCALES["Spanish"]
    return LOCALES[DEFAULT_LANGUAGE]


def build_schema(locale: LocaleTemplate) -> dict:
    """JSON schema for CommitMessage. Both fields are always required."""
    return {
        "type": "object",
        "properties": {
            "title": {
                "type": "string",
                "description": locale.title_description,
            },
            "description": {
                "type": "string",
                "description": locale.body_description,
            },
        },
        "required": ["title", "description"],
        "additionalProperties": False,
    }


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class JSONSchemaDescriptor:
    schema: dict
    name: str = SCHEMA_NAME
    strict: bool = True

    def to_dict(self) -> dict:
        return {"name": self.name, "strict": self.strict, "schema": self.schema}


@dataclass(frozen=True)
class GenerationRequest:
    """Body of one chat-completions call in structured-output mode."""
    model: str
    messages: tuple[ChatMessage, ...]
    schema: JSONSchemaDescriptor

    def to_dict(self) -> dict:
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "response_format": {
                "type": "json_schema",
                "json_schema": self.schema.to_dict(),
            },
        }

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict(), ensure_ascii=False).encode('utf-8')


class PromptBuilder:
    """Builds the prompt and the request around it."""

    def build(self, change_text: str, language: str | None = None) -> str:
        locale = get_locale(language)
        readable_schema = json.dumps(build_schema(locale), indent=2, ensure_ascii=False)
        return (
            f"{locale.instruction}\n\n"
            f"```json\n{readable_schema}\n```\n\n"
            f"Git Diff:\n```diff\n{change_text}\n```"
        )

    def build_request(self, change_text: str, language: str | None, model: str) -> GenerationRequest:
        locale = get_locale(language)
        return GenerationRequest(
            model=model,
            messages=(ChatMessage(role="user", content=self.build(change_text, language)),),
            schema=JSONSchemaDescriptor(schema=build_schema(locale)),
        )
