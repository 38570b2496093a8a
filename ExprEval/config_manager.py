# config_manager.py
import os
import json
from pathlib import Path

from . import error as E

config_json = Path(__file__).resolve().parent.parent / "config.json"

# Used whenever config.json is missing, unreadable or lacks a key
DEFAULT_SETTINGS = {
    "decimal_places": 2,
    "log_level": "WARNING",
}


def config_path():
    """Return the settings file, honouring the EXPREVAL_CONFIG override."""
    override = os.getenv("EXPREVAL_CONFIG", "").strip()
    if override:
        return Path(override)
    return config_json


def load_setting_value(key_value):
    settings_dict = dict(DEFAULT_SETTINGS)
    try:
        with open(config_path(), 'r', encoding= 'utf-8') as f:
            loaded = json.load(f)
        if isinstance(loaded, dict):
            settings_dict.update(loaded)

    except (OSError, json.JSONDecodeError):
        pass

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, DEFAULT_SETTINGS.get(key_value))


def load_scale():
    """Return the configured 'decimal_places' as the evaluator scale."""
    decimal_places = load_setting_value("decimal_places")
    # bool is an int subclass but never a valid scale
    if isinstance(decimal_places, bool) or not isinstance(decimal_places, int):
        raise E.ConfigError(f"decimal_places = {decimal_places!r}", code="5001")
    return decimal_places


def save_setting(settings_dict):
    with open(config_path(), 'w', encoding= 'utf-8') as f:
        json.dump(settings_dict, f, indent=4)
    return settings_dict
