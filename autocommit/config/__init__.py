"""Configuration - .autocommitrc settings and the process environment."""

import json
import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from autocommit import API_KEY_ENV, DEFAULT_MODEL, LANGUAGE_CODES, OPENROUTER_API_URL

CONFIG_FILENAME = ".autocommitrc"
MODEL_ENV = "AUTOCOMMIT_MODEL"

# Field name -> predicate a loaded value must satisfy
_VALID = {
    'model': lambda v: isinstance(v, str) and bool(v.strip()),
    'api_url': lambda v: isinstance(v, str) and v.startswith(('http://', 'https://')),
    'language': lambda v: v is None or v in LANGUAGE_CODES,
    'push': lambda v: isinstance(v, bool),
    'max_title_length': lambda v: isinstance(v, int) and not isinstance(v, bool) and v > 0,
}


@dataclass
class Config:
    """Run settings. `language=None` means ask on stdin."""
    model: str = DEFAULT_MODEL
    api_url: str = OPENROUTER_API_URL
    language: Optional[str] = None
    push: bool = True
    max_title_length: int = 70

    def validate(self) -> list[str]:
        """Reset invalid fields to their defaults and describe each reset."""
        warnings = []
        for f in fields(self):
            value = getattr(self, f.name)
            if not _VALID[f.name](value):
                setattr(self, f.name, f.default)
                warnings.append(f"Invalid {f.name} {value!r}, using {f.default!r}")
        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        known = {f.name for f in fields(cls)}
        for key in sorted(set(data) - known):
            print(f"Config warning: unknown key '{key}' ignored", file=sys.stderr)
        config = cls(**{k: v for k, v in data.items() if k in known})
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


def find_config_file(cwd: Optional[Path] = None, home: Optional[Path] = None) -> Optional[Path]:
    """The project-local rc file wins over the one in the home directory."""
    for directory in (cwd or Path.cwd(), home or Path.home()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config_file(path: Path) -> Config:
    """Parse one rc file; unreadable or malformed files yield defaults."""
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
        return Config()
    if not isinstance(data, dict):
        print(f"Warning: Could not load {path}: expected a JSON object", file=sys.stderr)
        return Config()
    return Config.from_dict(data)


def load_config() -> Config:
    path = find_config_file()
    return read_config_file(path) if path else Config()


def load_environment() -> None:
    """Pull variables from the nearest .env (searched upward from cwd) into os.environ."""
    load_dotenv(find_dotenv(usecwd=True), override=False)


def get_api_key() -> Optional[str]:
    return os.environ.get(API_KEY_ENV) or None


def get_env_model() -> Optional[str]:
    return os.environ.get(MODEL_ENV) or None


__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "MODEL_ENV",
    "find_config_file",
    "read_config_file",
    "load_config",
    "load_environment",
    "get_api_key",
    "get_env_model",
]
