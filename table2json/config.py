"""Configuration loader for the table2json CLI and service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .allowed import ConfigurationError
from .presets import DEFAULT_PRESET, validate_preset


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is not None:
        value = value.strip()
        if value == "":
            return default
        return value
    return default


def _get_int(key: str, default: int) -> int:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer") from exc


def _get_bool(key: str, default: bool) -> bool:
    value = _get_env(key)
    if value is None:
        return default
    value_lower = value.lower()
    if value_lower in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if value_lower in {"0", "false", "f", "no", "n", "off"}:
        return False
    raise ValueError(f"Environment variable {key} must be a boolean")


@dataclass(slots=True)
class AppConfig:
    log_level: str
    json_logs: bool
    default_preset: str
    json_indent: int
    ensure_ascii: bool


def load_config() -> AppConfig:
    log_level = _get_env("TABLE2JSON_LOG_LEVEL", "INFO").upper()
    json_logs = _get_bool("TABLE2JSON_LOG_JSON", True)

    default_preset = _get_env("TABLE2JSON_DEFAULT_PRESET", DEFAULT_PRESET)
    try:
        validate_preset(default_preset)
    except ConfigurationError as exc:
        raise ValueError(f"Environment variable TABLE2JSON_DEFAULT_PRESET is invalid: {exc}") from exc

    json_indent = max(0, _get_int("TABLE2JSON_JSON_INDENT", 2))
    ensure_ascii = _get_bool("TABLE2JSON_ENSURE_ASCII", False)

    return AppConfig(
        log_level=log_level,
        json_logs=json_logs,
        default_preset=default_preset,
        json_indent=json_indent,
        ensure_ascii=ensure_ascii,
    )
