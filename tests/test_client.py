import json

import pytest
import requests

from mr_comment._engine.llm import (
    ClaudeClient,
    OpenAIClient,
    build_request,
    build_user_message,
    create_client,
)
from mr_comment._engine.diff import truncate_diff
from mr_comment._types.errors import (
    ConfigError,
    EmptyResponseError,
    ParseFailureError,
    RequestFailedError,
)
from mr_comment._types.model import Settings


class FakeResponse:
    def __init__(self, status_code: int, body):
        self.status_code = status_code
        self.text = body if isinstance(body, str) else json.dumps(body)


def _install_post(monkeypatch, response):
    calls = []

    def fake_post(url, headers=None, json=None, **kwargs):
        calls.append({"url": url, "headers": headers, "json": json, "kwargs": kwargs})
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr("mr_comment._engine.llm.client.requests.post", fake_post)
    return calls


def _settings(provider: str, api_key="key-123") -> Settings:
    return Settings(
        provider=provider,
        api_key=api_key,
        endpoint=f"https://{provider}.example/v1",
        model=f"{provider}-model",
        max_lines=10_000,
    )


def test_openai_request_shape_and_text(monkeypatch):
    calls = _install_post(
        monkeypatch,
        FakeResponse(200, {"choices": [{"message": {"role": "assistant", "content": "Title\n\nBody"}}]}),
    )
    client = create_client(_settings("openai"))
    assert isinstance(client, OpenAIClient)

    assert client.generate("system text", "Git diff:\n\n+x") == "Title\n\nBody"

    call = calls[0]
    assert call["url"] == "https://openai.example/v1"
    assert call["headers"]["Authorization"] == "Bearer key-123"
    assert call["json"] == {
        "model": "openai-model",
        "messages": [
            {"role": "system", "content": "system text"},
            {"role": "user", "content": "Git diff:\n\n+x"},
        ],
        "temperature": 0.7,
    }
    # No timeout or retry configuration is passed to requests
    assert call["kwargs"] == {}


def test_claude_request_shape_and_first_text_block(monkeypatch):
    calls = _install_post(
        monkeypatch,
        FakeResponse(
            200,
            {
                "content": [
                    {"type": "tool_use", "id": "t1", "name": "noop", "input": {}},
                    {"type": "text", "text": "MR comment"},
                    {"type": "text", "text": "ignored"},
                ]
            },
        ),
    )
    client = create_client(_settings("claude"))
    assert isinstance(client, ClaudeClient)

    assert client.generate("system text", "user text") == "MR comment"

    call = calls[0]
    assert call["headers"]["x-api-key"] == "key-123"
    assert call["headers"]["anthropic-version"] == "2023-06-01"
    assert "Authorization" not in call["headers"]
    assert call["json"] == {
        "model": "claude-model",
        "system": "system text",
        "messages": [{"role": "user", "content": "user text"}],
        "temperature": 0.7,
        "max_tokens": 4000,
    }


@pytest.mark.parametrize("provider", ["openai", "claude"])
def test_non_success_status_carries_error_body(monkeypatch, provider):
    _install_post(monkeypatch, FakeResponse(401, '{"error": "invalid x-api-key"}'))
    client = create_client(_settings(provider))

    with pytest.raises(RequestFailedError) as exc_info:
        client.generate("s", "u")
    assert "401" in str(exc_info.value)
    assert "invalid x-api-key" in str(exc_info.value)


def test_transport_failure_is_request_failed(monkeypatch):
    _install_post(monkeypatch, requests.exceptions.ConnectionError("connection refused"))
    client = create_client(_settings("openai"))

    with pytest.raises(RequestFailedError, match="connection refused"):
        client.generate("s", "u")


@pytest.mark.parametrize(
    "provider, body",
    [
        ("openai", "<html>bad gateway</html>"),
        ("openai", {"result": "nope"}),
        ("claude", {"content": "not a list"}),
    ],
)
def test_unexpected_shape_is_parse_failure(monkeypatch, provider, body):
    _install_post(monkeypatch, FakeResponse(200, body))
    with pytest.raises(ParseFailureError):
        create_client(_settings(provider)).generate("s", "u")


@pytest.mark.parametrize(
    "provider, body",
    [
        ("openai", {"choices": []}),
        ("openai", {"choices": [{"message": {"content": None}}]}),
        ("claude", {"content": []}),
        ("claude", {"content": [{"type": "tool_use", "id": "t1"}]}),
    ],
)
def test_missing_text_is_empty_response(monkeypatch, provider, body):
    _install_post(monkeypatch, FakeResponse(200, body))
    with pytest.raises(EmptyResponseError):
        create_client(_settings(provider)).generate("s", "u")


def test_create_client_requires_api_key():
    with pytest.raises(ConfigError, match="ANTHROPIC_API_KEY"):
        create_client(_settings("claude", api_key=None))
    with pytest.raises(ConfigError, match="OPENAI_API_KEY"):
        create_client(_settings("openai", api_key=""))


def test_user_message_mentions_truncation():
    short = truncate_diff("a\nb", 10)
    assert build_user_message(short) == "Git diff:\n\na\nb"

    long = truncate_diff("\n".join(str(i) for i in range(30)), 10)
    assert build_user_message(long).startswith("Git diff (truncated from 30 lines):\n\n0\n")


def test_build_request_uses_settings():
    request = build_request(_settings("openai"), truncate_diff("+x", 10))
    assert request.provider == "openai"
    assert request.model == "openai-model"
    assert request.endpoint == "https://openai.example/v1"
    assert request.system_prompt.startswith("Create standard gitlab MR comment\n\n")
    assert request.user_message == "Git diff:\n\n+x"
