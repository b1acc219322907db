"""Where Income Track keeps its settings and its data.

settings.json (in the config dir) currently knows one key, data_dir.
The config dir is INCOME_TRACK_CONFIG_PATH when set, otherwise
$XDG_CONFIG_HOME/income-track. Work days live under data_dir, or under
$XDG_DATA_HOME/income-track when data_dir is unset.
"""

import json
import os
from pathlib import Path
from typing import Any


APP_NAME = "income-track"
SETTINGS_FILENAME = "settings.json"
CONFIG_PATH_ENV = "INCOME_TRACK_CONFIG_PATH"


def _xdg_dir(env_var: str, fallback: Path) -> Path:
    return Path(os.environ.get(env_var) or fallback) / APP_NAME


def get_config_dir() -> Path:
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override)
    return _xdg_dir("XDG_CONFIG_HOME", Path.home() / ".config")


def get_settings_path() -> Path:
    """settings.json inside the config dir. May not exist yet."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Parsed settings.json, or {} when there is none.

    Malformed JSON is not hidden: json.JSONDecodeError propagates.
    """
    path = get_settings_path()
    if not path.exists():
        return {}
    with open(path) as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    path = get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(settings, f, indent=2)
    return path


def get_setting(key: str, default: Any = None) -> Any:
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Store one key, keeping the rest of settings.json. Returns the file written."""
    return save_settings({**load_settings(), key: value})


def clear_setting(key: str) -> bool:
    """Remove one key. Returns False when it was not set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_default_data_path() -> Path:
    """XDG data path, ignoring any data_dir setting."""
    return _xdg_dir("XDG_DATA_HOME", Path.home() / ".local" / "share")


def get_data_path() -> Path:
    """Effective data directory, created on first use."""
    custom = get_setting("data_dir")
    data_path = Path(custom).expanduser() if custom else get_default_data_path()
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path
