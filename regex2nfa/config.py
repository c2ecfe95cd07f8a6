from __future__ import annotations
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

import toml


DEFAULT_CONFIG_FILE = "regex2nfa.toml"
CONFIG_SECTION = "regex2nfa"
OUTPUT_FORMATS = ("blocks", "table")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    epsilon_symbol: str = "ε"
    label_prefix: str = "q"
    output_format: str = "blocks"
    reduce: bool = False
    prompt: str = "Enter a regular expression: "
    next_prompt: str = "\nEnter another regular expression (or press Enter to exit): "


def settings_from_mapping(values: Mapping[str, Any]) -> Settings:
    defaults = Settings()
    known = {f.name for f in fields(Settings)}
    for key, value in values.items():
        if key not in known:
            raise ConfigError(f"Unknown setting '{key}'")
        expected = type(getattr(defaults, key))
        if not isinstance(value, expected):
            raise ConfigError(f"Setting '{key}' must be {expected.__name__}, got {type(value).__name__}")

    settings = replace(defaults, **dict(values))
    if settings.output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"output_format must be one of {', '.join(OUTPUT_FORMATS)}")
    if not settings.label_prefix:
        raise ConfigError("label_prefix must not be empty")
    if not settings.epsilon_symbol:
        raise ConfigError("epsilon_symbol must not be empty")
    return settings


def load_settings(path: Optional[str] = None) -> Settings:
    # The default file is optional; an explicitly named one is not.
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG_FILE):
            return Settings()
        path = DEFAULT_CONFIG_FILE
    elif not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        config = toml.load(path)
    except toml.TomlDecodeError as ex:
        raise ConfigError(f"Invalid TOML in {path}: {ex}") from ex

    section = config.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{CONFIG_SECTION}] must be a table")
    return settings_from_mapping(section)
