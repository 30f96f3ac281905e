"""Exceptions raised by i18nkit.

Lookups never raise: missing keys come back as diagnostic strings. Only
configuration mistakes such as assigning a language outside the allowed set
surface as exceptions.
"""

from typing import Iterable, Optional


class I18nError(Exception):
    """Base class for i18nkit errors."""


class InvalidLanguageError(I18nError, ValueError):
    """Raised when a language outside the configured allowed set is assigned."""

    def __init__(self, language: str, allowed: Optional[Iterable[str]] = None):
        self.language = language
        self.allowed = sorted(allowed) if allowed is not None else []
        message = f"invalid language: {language!r}"
        if self.allowed:
            message += f" (allowed: {', '.join(self.allowed)})"
        super().__init__(message)
