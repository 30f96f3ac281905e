#!/usr/bin/env python3
"""Configuration loader for i18nkit."""

import os
from dataclasses import dataclass, field
from typing import Any, List, Optional

import yaml

from i18nkit.loader import DEFAULT_TIMEOUT
from i18nkit.preferences import DEFAULT_LANGUAGE_KEY
from i18nkit.utils import i18n_log


def load_config_yaml(config_path: str = "i18n.yaml") -> dict:
    """Load configuration from a YAML file."""
    if os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            i18n_log("CONFIG", f"Warning: Failed to load {config_path}: {e}", level="WARNING")
    return {}


def _parse_bool(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in ("true", "1", "yes")
    return bool(raw)


def _parse_language_list(raw: Any) -> Optional[List[str]]:
    """Accept a YAML list or a comma-separated string; empty means accept any."""
    if raw is None:
        return None
    if isinstance(raw, str):
        items = [part.strip() for part in raw.split(",")]
    elif isinstance(raw, (list, tuple, set)):
        items = [str(part).strip() for part in raw]
    else:
        i18n_log("CONFIG", f"Ignoring allowed_languages={raw!r}", level="WARNING")
        return None
    items = [item for item in items if item]
    return items or None


@dataclass
class I18nConfig:
    """i18n runtime configuration."""
    language: str = ""

    # None = any language string is accepted
    allowed_languages: Optional[List[str]] = None

    # Resource files, given without the language suffix
    resource_paths: List[str] = field(default_factory=list)
    base_url: str = ""
    request_timeout: float = DEFAULT_TIMEOUT
    reload_on_language_change: bool = False

    # Empty = the language choice is not persisted
    preference_file: str = ""
    preference_key: str = DEFAULT_LANGUAGE_KEY

    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, yaml_config: Optional[dict]) -> "I18nConfig":
        """Create config from YAML + env vars."""
        config = cls()
        yaml_config = yaml_config or {}

        config.language = str(yaml_config.get("language", config.language) or "").strip()
        config.allowed_languages = _parse_language_list(yaml_config.get("allowed_languages"))
        config.log_level = str(yaml_config.get("log_level", config.log_level)).strip().upper()

        res_cfg = yaml_config.get("resources", {})
        if isinstance(res_cfg, dict):
            paths = res_cfg.get("paths", config.resource_paths)
            if isinstance(paths, str):
                paths = [paths]
            config.resource_paths = [str(p) for p in paths or []]
            config.base_url = str(res_cfg.get("base_url", config.base_url) or "").strip()
            config.request_timeout = float(res_cfg.get("timeout", config.request_timeout))
            config.reload_on_language_change = _parse_bool(
                res_cfg.get("reload_on_language_change", config.reload_on_language_change)
            )

        prefs_cfg = yaml_config.get("preferences", {})
        if isinstance(prefs_cfg, dict):
            config.preference_file = str(prefs_cfg.get("file", config.preference_file) or "").strip()
            config.preference_key = str(prefs_cfg.get("key", config.preference_key)).strip() or DEFAULT_LANGUAGE_KEY

        # Env var overrides
        if os.getenv("I18N_LANGUAGE"):
            config.language = os.getenv("I18N_LANGUAGE").strip()
        if os.getenv("I18N_ALLOWED_LANGUAGES"):
            config.allowed_languages = _parse_language_list(os.getenv("I18N_ALLOWED_LANGUAGES"))
        if os.getenv("I18N_BASE_URL"):
            config.base_url = os.getenv("I18N_BASE_URL").strip()
        if os.getenv("I18N_REQUEST_TIMEOUT"):
            config.request_timeout = float(os.getenv("I18N_REQUEST_TIMEOUT"))
        if os.getenv("I18N_RELOAD_ON_LANGUAGE_CHANGE"):
            config.reload_on_language_change = _parse_bool(os.getenv("I18N_RELOAD_ON_LANGUAGE_CHANGE"))
        if os.getenv("I18N_PREFERENCE_FILE"):
            config.preference_file = os.getenv("I18N_PREFERENCE_FILE").strip()
        if os.getenv("I18N_LOG_LEVEL"):
            config.log_level = os.getenv("I18N_LOG_LEVEL").strip().upper()

        if config.request_timeout <= 0:
            i18n_log("CONFIG", f"Invalid resources.timeout={config.request_timeout}, fallback to {DEFAULT_TIMEOUT}", level="WARNING")
            config.request_timeout = DEFAULT_TIMEOUT

        if (
            config.language
            and config.allowed_languages is not None
            and config.language not in config.allowed_languages
        ):
            i18n_log(
                "CONFIG",
                f"language='{config.language}' is not in allowed_languages, fallback to '{config.allowed_languages[0]}'",
                level="WARNING",
            )
            config.language = config.allowed_languages[0]

        return config

    @classmethod
    def from_file(cls, config_path: str = "i18n.yaml") -> "I18nConfig":
        return cls.from_yaml(load_config_yaml(config_path))
