"""
HTTP clients for the supported text-generation providers.

Both providers accept a system instruction plus one user message and return
generated text. They differ only in how the request is authenticated, how
the payload is shaped, and where the text sits in the response, so each
subclass of LLMClient supplies just those three pieces.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

import requests
from pydantic import ValidationError

from mr_comment._data.providers import (
    ANTHROPIC_VERSION,
    API_KEY_ENV_VARS,
    CLAUDE_MAX_TOKENS,
    TEMPERATURE,
)
from mr_comment._types.errors import (
    ConfigError,
    EmptyResponseError,
    ParseFailureError,
    RequestFailedError,
)
from mr_comment._types.model import ClaudeResponse, OpenAIResponse, Settings


class LLMClient(ABC):
    """A single-attempt, blocking client for one provider."""

    display_name = "LLM"

    def __init__(self, api_key: str, endpoint: str, model: str) -> None:
        self.api_key = api_key
        self.endpoint = endpoint
        self.model = model

    @abstractmethod
    def build_headers(self) -> Dict[str, str]:
        """Authentication and content headers for the request."""

    @abstractmethod
    def build_payload(self, system_prompt: str, user_message: str) -> Dict[str, Any]:
        """Provider-specific JSON body."""

    @abstractmethod
    def extract_text(self, body: str) -> str:
        """Pull the generated text out of a successful response body."""

    def generate(self, system_prompt: str, user_message: str) -> str:
        """
        Send one request and return the generated text.

        Raises:
            RequestFailedError: the request could not be sent or returned a
                non-success status. The provider's error body is included.
            ParseFailureError: the body is not in the expected shape.
            EmptyResponseError: the body parsed but holds no usable text.
        """
        try:
            response = requests.post(
                self.endpoint,
                headers=self.build_headers(),
                json=self.build_payload(system_prompt, user_message),
            )
        except requests.exceptions.RequestException as e:
            raise RequestFailedError(f"Failed to call {self.display_name} API: {e}") from e

        if not 200 <= response.status_code < 300:
            error_text = response.text or "Could not read error response"
            raise RequestFailedError(
                f"{self.display_name} API request failed ({response.status_code}): {error_text}"
            )

        return self.extract_text(response.text)


class OpenAIClient(LLMClient):
    display_name = "OpenAI"

    def build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def build_payload(self, system_prompt: str, user_message: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            "temperature": TEMPERATURE,
        }

    def extract_text(self, body: str) -> str:
        try:
            parsed = OpenAIResponse.model_validate_json(body)
        except ValidationError as e:
            raise ParseFailureError(f"Failed to parse OpenAI API response: {e}") from e

        if not parsed.choices:
            raise EmptyResponseError("OpenAI API response contained no choices")

        content = parsed.choices[0].message.content
        if not content or not content.strip():
            raise EmptyResponseError("OpenAI API response contained no message content")
        return content


class ClaudeClient(LLMClient):
    display_name = "Claude"

    def build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def build_payload(self, system_prompt: str, user_message: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "system": system_prompt,
            "messages": [
                {"role": "user", "content": user_message},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": CLAUDE_MAX_TOKENS,
        }

    def extract_text(self, body: str) -> str:
        try:
            parsed = ClaudeResponse.model_validate_json(body)
        except ValidationError as e:
            raise ParseFailureError(f"Failed to parse Claude API response: {e}") from e

        if not parsed.content:
            raise EmptyResponseError("Claude API response contained no content")

        # First text block wins; tool_use and other block types are skipped
        for block in parsed.content:
            if block.type == "text" and block.text and block.text.strip():
                return block.text

        raise EmptyResponseError("Claude API response contained no text content")


CLIENTS = {
    "openai": OpenAIClient,
    "claude": ClaudeClient,
}


def create_client(settings: Settings) -> LLMClient:
    """
    Build the client for the configured provider.

    Raises:
        ConfigError: no API key was resolved for the provider.
    """
    if not settings.api_key:
        env_var = API_KEY_ENV_VARS[settings.provider]
        raise ConfigError(
            f"API key is required. Provide it with --api-key or set {env_var} environment variable"
        )

    client_class = CLIENTS[settings.provider]
    return client_class(
        api_key=settings.api_key,
        endpoint=settings.endpoint,
        model=settings.model,
    )
