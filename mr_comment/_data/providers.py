from typing import Dict

PROVIDERS = ("openai", "claude")
DEFAULT_PROVIDER: str = "claude"

DEFAULT_ENDPOINTS: Dict[str, str] = {
    "openai": "https://api.openai.com/v1/chat/completions",
    "claude": "https://api.anthropic.com/v1/messages",
}

DEFAULT_MODELS: Dict[str, str] = {
    "openai": "gpt-4-turbo",
    "claude": "claude-3-7-sonnet-20250219",
}

API_KEY_ENV_VARS: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
}

# Shown by --debug next to the token estimate
CONTEXT_LIMITS: Dict[str, int] = {
    "openai": 128_000,
    "claude": 200_000,
}

ANTHROPIC_VERSION: str = "2023-06-01"
TEMPERATURE: float = 0.7
CLAUDE_MAX_TOKENS: int = 4000

DEFAULT_MAX_LINES: int = 10_000
CONFIG_FILE_NAME: str = ".mr-comment"
