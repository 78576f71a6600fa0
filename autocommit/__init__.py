"""
autocommit

AI-generated commit messages for the working tree, then commit and push.
"""

__version__ = "1.0.0"

# Remote endpoint and model - fixed for the lifetime of the process
OPENROUTER_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "tngtech/deepseek-r1t2-chimera:free"  # must support structured outputs

API_KEY_ENV = "OPENROUTER_API_KEY"

# Language codes accepted on stdin / --lang, mapped to locale names
LANGUAGE_CODES = {
    'en': 'English',
    'es': 'Spanish',
}
DEFAULT_LANGUAGE = 'English'
