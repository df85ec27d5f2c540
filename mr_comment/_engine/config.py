"""
Configuration loading, saving, and resolution.

The persisted config is a JSON document in the user's home directory.
resolve_settings() merges it with command-line flags and environment
variables; it is pure so precedence can be tested without touching disk.
"""

# Standard Library Imports
import json
from pathlib import Path
from typing import Mapping, Optional

# Third-Party Library Imports
from pydantic import ValidationError

# Internal Module Imports
from mr_comment._data.providers import (
    API_KEY_ENV_VARS,
    CONFIG_FILE_NAME,
    DEFAULT_ENDPOINTS,
    DEFAULT_MAX_LINES,
    DEFAULT_MODELS,
    DEFAULT_PROVIDER,
    PROVIDERS,
)
from mr_comment._engine.console import info
from mr_comment._types.errors import ConfigError
from mr_comment._types.model import FileConfig, Settings


def default_config_path() -> Path:
    return Path.home() / CONFIG_FILE_NAME


def load_config(path: Optional[Path] = None) -> FileConfig:
    """
    Load the config file, or an empty config when it does not exist.

    Raises:
        ConfigError: the file exists but is unreadable, not JSON, or has
            values of the wrong type.
    """
    config_path = path or default_config_path()
    if not config_path.exists():
        info(f"No config file at [dim]{config_path}[/dim], using defaults")
        return FileConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Failed to parse config file: {config_path} ({e})") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read config file: {config_path} ({e})") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a JSON object: {config_path}")

    try:
        config = FileConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    info(f"Loaded config from [dim]{config_path}[/dim]")
    return config


def save_config(config: FileConfig, path: Optional[Path] = None) -> Path:
    """Write config as indented JSON, creating parent directories. Returns the path written."""
    config_path = path or default_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(exclude_none=True), f, indent=4)
    except OSError as e:
        raise ConfigError(f"Failed to write config file: {config_path} ({e})") from e
    return config_path


def update_config(
    config: FileConfig,
    provider: str,
    api_key: Optional[str] = None,
    endpoint: Optional[str] = None,
    model: Optional[str] = None,
) -> FileConfig:
    """Return a copy of config with provider as default and the given values stored for it."""
    updates = {"provider": provider}
    if api_key:
        updates[f"{provider}_api_key"] = api_key
    if endpoint:
        updates[f"{provider}_endpoint"] = endpoint
    if model:
        updates[f"{provider}_model"] = model
    return config.model_copy(update=updates)


def _first(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None


def resolve_settings(
    file_config: FileConfig,
    env: Mapping[str, str],
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
    endpoint: Optional[str] = None,
    model: Optional[str] = None,
    max_lines: int = DEFAULT_MAX_LINES,
) -> Settings:
    """
    Merge flags, environment and file config into Settings.

    Precedence is flag > environment > config file > built-in default.
    Only API keys have an environment source. A missing API key is not an
    error here; create_client() reports it, so --debug works without one.
    """
    selected = _first(provider, file_config.provider) or DEFAULT_PROVIDER
    if selected not in PROVIDERS:
        raise ConfigError(
            f"Unknown provider '{selected}'. Expected one of: {', '.join(PROVIDERS)}"
        )

    return Settings(
        provider=selected,
        api_key=_first(
            api_key,
            env.get(API_KEY_ENV_VARS[selected]),
            getattr(file_config, f"{selected}_api_key"),
        ),
        endpoint=_first(endpoint, getattr(file_config, f"{selected}_endpoint"))
        or DEFAULT_ENDPOINTS[selected],
        model=_first(model, getattr(file_config, f"{selected}_model"))
        or DEFAULT_MODELS[selected],
        max_lines=max_lines,
    )
