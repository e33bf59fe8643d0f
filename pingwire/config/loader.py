"""Configuration loading utilities."""

import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

from pingwire.config.schema import Config


# Mapping from env var → attribute path on the Config object (snake_case).
# The bare names are what the service has always been deployed with; the
# prefixed ones follow the settings convention and win when both are set.
_ENV_TO_ATTR: dict[str, tuple[str, ...]] = {
    "TELEGRAM_BOT_TOKEN": ("telegram", "bot_token"),
    "TELEGRAM_CHAT_ID": ("telegram", "chat_id"),
    "AUTH_KEY": ("gateway", "auth_key"),
    "PINGWIRE_TELEGRAM__BOT_TOKEN": ("telegram", "bot_token"),
    "PINGWIRE_TELEGRAM__CHAT_ID": ("telegram", "chat_id"),
    "PINGWIRE_GATEWAY__AUTH_KEY": ("gateway", "auth_key"),
}


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".pingwire" / "config.json"


def get_env_path() -> Path:
    """Get the default secrets .env file path."""
    return Path.home() / ".pingwire" / ".env"


def _load_dotenv(env_path: Path) -> dict[str, str]:
    """Parse a simple .env file into a dict (no shell expansion)."""
    values: dict[str, str] = {}
    if not env_path.exists():
        return values
    for line in env_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export ") :].strip()
        # Strip optional surrounding quotes
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            value = value[1:-1]
        values[key] = value
    return values


def _inject_env(env_path: Path) -> None:
    """Load .env values into os.environ (existing vars take precedence)."""
    for key, value in _load_dotenv(env_path).items():
        os.environ.setdefault(key, value)


def load_config(config_path: Path | None = None, env_path: Path | None = None) -> Config:
    """
    Load configuration from file + .env secrets.

    Resolution order (highest priority wins):
      1. Real environment variables (e.g. export PINGWIRE_TELEGRAM__BOT_TOKEN=…)
      2. ~/.pingwire/.env file
      3. ~/.pingwire/config.json

    Args:
        config_path: Optional path to config file. Uses default if not provided.
        env_path: Optional path to the secrets file. Uses default if not provided.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()

    # Inject .env into os.environ before Pydantic reads env vars
    _inject_env(env_path or get_env_path())

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            config = Config.model_validate(convert_keys(data))
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Failed to load config from {path}: {e}; using default configuration")
            config = Config()
    else:
        config = Config()

    _apply_env_secrets(config)

    return config


def _apply_env_secrets(config: Config) -> None:
    """Overlay secret values from environment variables onto the config object.

    Later entries in ``_ENV_TO_ATTR`` override earlier ones, so the prefixed
    variables take priority over the bare legacy names.
    """
    for env_var, attr_path in _ENV_TO_ATTR.items():
        value = os.environ.get(env_var, "")
        if not value:
            continue

        obj: Any = config
        for part in attr_path[:-1]:
            obj = getattr(obj, part, None)
            if obj is None:
                break
        if obj is not None:
            setattr(obj, attr_path[-1], value.strip())


# ── Key conversion helpers ──


def convert_keys(data: Any) -> Any:
    """Convert camelCase keys to snake_case for Pydantic."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.lower())
    return "".join(result)
