"""Persistence for user preferences such as the chosen language.

The file store keeps a flat YAML mapping on disk and rewrites it on every
``set``.
"""

import os
from typing import Any, Dict, Optional

import yaml

from i18nkit.utils import i18n_log

DEFAULT_LANGUAGE_KEY = "language"


class PreferenceStore:
    """Key/value persistence interface."""

    def get(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError


class MemoryPreferenceStore(PreferenceStore):
    """In-process store, handy for tests and headless tools."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class FilePreferenceStore(PreferenceStore):
    """YAML file backed store."""

    def __init__(self, path: str):
        self._path = os.path.expanduser(path)
        self._data: Dict[str, Any] = self._load()

    @property
    def path(self) -> str:
        return self._path

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self._path):
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            i18n_log("PREFS", f"Failed to read {self._path}: {e}", level="WARNING")
            return {}
        if not isinstance(data, dict):
            i18n_log("PREFS", f"Ignoring non-mapping preferences in {self._path}", level="WARNING")
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        directory = os.path.dirname(self._path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self._data, f, allow_unicode=True, sort_keys=True)
