#!/usr/bin/env python3
"""Resource store: the merged resource tree plus the active language."""

import threading
from typing import Any, Iterable, Mapping, Optional

from i18nkit.errors import InvalidLanguageError
from i18nkit.formatting import format_text
from i18nkit.merge import deep_merge
from i18nkit.paths import MISSING, get_nested_value
from i18nkit.utils import i18n_log


class I18nContext:
    """Holds one merged resource tree and the active language identifier.

    Bundles are merged in submission order, each with its own override
    policy. There is a single tree for all languages: the language only
    decides which language-suffixed files the loader requests next.

    With ``allowed_languages=None`` any language string is accepted. When a
    set is given, assigning a language outside it raises
    ``InvalidLanguageError`` and keeps the previous value.
    """

    def __init__(self, allowed_languages: Optional[Iterable[str]] = None, language: str = ""):
        self._lock = threading.RLock()
        self._resources: Any = {}
        self._allowed: Optional[frozenset] = None
        self._language: str = ""
        self.set_allowed_languages(allowed_languages)
        if language:
            self.set_language(language)

    # ------------------------------------------------------------------
    # Language
    # ------------------------------------------------------------------

    @property
    def allowed_languages(self) -> Optional[frozenset]:
        return self._allowed

    def set_allowed_languages(self, allowed_languages: Optional[Iterable[str]]) -> None:
        """Switch between the accept-any (None) and validating policies.

        A current language outside the new set falls back to the first
        allowed language (or "" for an empty set).
        """
        ordered = list(allowed_languages) if allowed_languages is not None else None
        with self._lock:
            self._allowed = frozenset(ordered) if ordered is not None else None
            if self._language and not self.is_allowed_language(self._language):
                fallback = ordered[0] if ordered else ""
                i18n_log(
                    "I18N",
                    f"Language '{self._language}' is not in allowed_languages, fallback to '{fallback}'",
                    level="WARNING",
                )
                self._language = fallback

    def is_allowed_language(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        return self._allowed is None or value in self._allowed

    @property
    def language(self) -> str:
        return self._language

    @language.setter
    def language(self, value: str) -> None:
        self.set_language(value)

    def set_language(self, value: str) -> None:
        with self._lock:
            if not self.is_allowed_language(value):
                raise InvalidLanguageError(value, self._allowed)
            if value != self._language:
                i18n_log("I18N", f"Language: '{self._language}' -> '{value}'", level="DEBUG")
            self._language = value

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    @property
    def resources(self) -> Any:
        return self._resources

    def set_resource(self, bundle: Any, override: bool = True) -> None:
        """Merge ``bundle`` into the held tree."""
        with self._lock:
            self._resources = deep_merge(self._resources, bundle, override)
        if bundle is not None:
            i18n_log("I18N", f"Merged bundle (override={override})", level="DEBUG")

    def reset(self) -> None:
        """Drop every merged bundle."""
        with self._lock:
            self._resources = {}

    def get(self, key: str) -> Any:
        """Return the node at ``key`` or ``MISSING``."""
        return get_nested_value(self._resources, key)

    def get_text(self, key: str, params: Any = None, default_text: Optional[str] = None) -> str:
        """
        Get the text at ``key``, interpolating ``{{placeholders}}``.

        Args:
            key: Dotted key
            params: Mapping used for interpolation. A str here is taken as
                ``default_text``.
            default_text: Returned when the key is missing or not a string

        Returns:
            The resolved text, ``default_text``, or ``"Invalid key: {key}"``
        """
        if isinstance(params, str):
            default_text, params = params, None

        text = self.get(key)
        if text is MISSING or not isinstance(text, str):
            text = default_text or f"Invalid key: {key}"

        if isinstance(params, Mapping):
            text = format_text(text, params)
        return text

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not MISSING

    def __repr__(self) -> str:
        keys = list(self._resources) if isinstance(self._resources, dict) else []
        return f"<I18nContext language={self._language!r} namespaces={keys!r}>"
