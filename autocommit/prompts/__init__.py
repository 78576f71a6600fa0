"""Prompt Construction Package"""

from autocommit.prompts.builder import (
    LOCALES,
    ChatMessage,
    GenerationRequest,
    JSONSchemaDescriptor,
    LocaleTemplate,
    PromptBuilder,
    build_schema,
    get_locale,
    language_from_code,
)

__all__ = [
    "LOCALES",
    "ChatMessage",
    "GenerationRequest",
    "JSONSchemaDescriptor",
    "LocaleTemplate",
    "PromptBuilder",
    "build_schema",
    "get_locale",
    "language_from_code",
]
