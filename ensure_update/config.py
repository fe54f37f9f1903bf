"""Configuration loading and validation."""

import json
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from ensure_update.errors import ConfigError
from ensure_update.state import default_state_path
from ensure_update.updater import DEFAULT_UPDATE_COMMAND

APP_NAME = "ensure-update"
ORGANIZATION = "hack-commons"
DEFAULT_MAX_AGE_HOURS = 8
MAX_AGE_LIMIT = 2**31 - 1


def check_max_age(hours: int) -> bool:
    """Return True if hours fits the supported max age range."""
    return abs(hours) <= MAX_AGE_LIMIT


@dataclass
class Config:
    """Application configuration."""

    app_name: str = APP_NAME
    organization: str = ORGANIZATION
    state_path: Path | None = None
    update_command: list[str] = field(default_factory=lambda: list(DEFAULT_UPDATE_COMMAND))
    max_age_hours: int = DEFAULT_MAX_AGE_HOURS

    def resolve_state_path(self) -> Path:
        """Return the configured state file, or the per-user default."""
        if self.state_path is not None:
            return self.state_path
        return default_state_path(self.app_name, self.organization)


def default_config_path() -> Path:
    """Return the per-user config file location."""
    return Path(user_config_dir(APP_NAME, ORGANIZATION)) / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from JSON file.

    With no path, the per-user config file is used if it exists and the
    defaults otherwise. An explicit path must exist.
    """
    if config_path is None:
        config_path = default_config_path()
        if not config_path.exists():
            return Config()
    elif not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file {config_path}: expected a JSON object")

    state = data.get("state", {})
    update = data.get("update", {})
    if not isinstance(state, dict) or not isinstance(update, dict):
        raise ConfigError(f"Invalid config file {config_path}: sections must be JSON objects")

    config = Config(
        app_name=state.get("app_name", APP_NAME),
        organization=state.get("organization", ORGANIZATION),
        update_command=update.get("command", list(DEFAULT_UPDATE_COMMAND)),
        max_age_hours=update.get("max_age_hours", DEFAULT_MAX_AGE_HOURS),
    )
    if state.get("path"):
        config.state_path = Path(state["path"]).expanduser()

    _validate(config, config_path)
    return config


def _validate(config: Config, config_path: Path) -> None:
    if not isinstance(config.app_name, str) or not config.app_name:
        raise ConfigError(f"{config_path}: state.app_name must be a non-empty string")
    if not isinstance(config.organization, str):
        raise ConfigError(f"{config_path}: state.organization must be a string")
    if (
        not isinstance(config.update_command, list)
        or not config.update_command
        or not all(isinstance(arg, str) for arg in config.update_command)
    ):
        raise ConfigError(f"{config_path}: update.command must be a non-empty list of strings")
    if isinstance(config.max_age_hours, bool) or not isinstance(config.max_age_hours, int):
        raise ConfigError(f"{config_path}: update.max_age_hours must be an integer")
    if not check_max_age(config.max_age_hours):
        raise ConfigError(f"{config_path}: update.max_age_hours must be at most {MAX_AGE_LIMIT} hours")
