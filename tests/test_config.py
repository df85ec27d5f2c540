import json

import pytest

from mr_comment._engine.config import load_config, resolve_settings, save_config, update_config
from mr_comment._types.errors import ConfigError
from mr_comment._types.model import FileConfig


def test_missing_config_file_is_empty(tmp_path):
    assert load_config(tmp_path / "absent.json") == FileConfig()


def test_load_config_reads_known_keys_and_ignores_others(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"provider": "openai", "openai_model": "gpt-4o", "theme": "dark"}),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.provider == "openai"
    assert config.openai_model == "gpt-4o"


@pytest.mark.parametrize(
    "content",
    ["{not json", "[1, 2]", json.dumps({"provider": "gemini"}), json.dumps({"openai_api_key": 42})],
)
def test_malformed_config_raises(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "config.json"
    config = update_config(FileConfig(), "openai", api_key="sk-1", model="gpt-4o")

    assert save_config(config, path) == path
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "provider": "openai",
        "openai_api_key": "sk-1",
        "openai_model": "gpt-4o",
    }
    assert load_config(path) == config


def test_update_config_keeps_other_provider_values():
    config = FileConfig(claude_api_key="ck", provider="claude")
    updated = update_config(config, "openai", endpoint="http://localhost:8080/v1/chat/completions")
    assert updated.claude_api_key == "ck"
    assert updated.provider == "openai"
    assert updated.openai_endpoint == "http://localhost:8080/v1/chat/completions"


def test_defaults_when_nothing_is_set():
    settings = resolve_settings(FileConfig(), {})
    assert settings.provider == "claude"
    assert settings.api_key is None
    assert settings.endpoint == "https://api.anthropic.com/v1/messages"
    assert settings.model == "claude-3-7-sonnet-20250219"
    assert settings.max_lines == 10_000


def test_flag_beats_env_beats_file():
    file_config = FileConfig(openai_api_key="from-file", openai_model="file-model")
    env = {"OPENAI_API_KEY": "from-env"}

    settings = resolve_settings(file_config, env, provider="openai", api_key="from-flag")
    assert settings.api_key == "from-flag"

    settings = resolve_settings(file_config, env, provider="openai")
    assert settings.api_key == "from-env"
    assert settings.model == "file-model"

    settings = resolve_settings(file_config, {"OPENAI_API_KEY": ""}, provider="openai")
    assert settings.api_key == "from-file"


def test_env_key_matches_selected_provider():
    env = {"OPENAI_API_KEY": "openai-key", "ANTHROPIC_API_KEY": "claude-key"}
    assert resolve_settings(FileConfig(), env).api_key == "claude-key"
    assert resolve_settings(FileConfig(), env, provider="openai").api_key == "openai-key"


def test_file_provider_is_default_unless_flag_given():
    file_config = FileConfig(provider="openai", claude_endpoint="https://proxy/v1/messages")

    assert resolve_settings(file_config, {}).provider == "openai"

    settings = resolve_settings(file_config, {}, provider="claude", model="claude-3-haiku-20240307")
    assert settings.provider == "claude"
    assert settings.endpoint == "https://proxy/v1/messages"
    assert settings.model == "claude-3-haiku-20240307"


def test_unknown_provider_flag_raises():
    with pytest.raises(ConfigError, match="Unknown provider"):
        resolve_settings(FileConfig(), {}, provider="gemini")
