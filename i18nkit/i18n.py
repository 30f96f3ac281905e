"""Process-wide i18n entry points.

One :class:`I18nContext` is created at import time and shared by every
caller; it is configured with :func:`setup` but never replaced, so the merge
history stays consistent. Functions here are thin wrappers that bind the
loader, preference store and facade to that context.
"""

from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from i18nkit.config_loader import I18nConfig
from i18nkit.context import I18nContext
from i18nkit.formatting import format_text
from i18nkit.loader import DEFAULT_TIMEOUT
from i18nkit.loader import load_resources as _load_resources
from i18nkit.preferences import DEFAULT_LANGUAGE_KEY, FilePreferenceStore, PreferenceStore
from i18nkit.proxy import ResourceProxy
from i18nkit.proxy import create_resource_proxy as _create_resource_proxy
from i18nkit.utils import i18n_log, set_log_level

_context = I18nContext()
# (item, base_url, timeout) for every load_resources request, replayed on reload
_loaded_paths: List[Tuple[str, Optional[str], float]] = []
_base_url: Optional[str] = None
_timeout: float = DEFAULT_TIMEOUT
_preferences: Optional[PreferenceStore] = None
_preference_key: str = DEFAULT_LANGUAGE_KEY
_reload_on_language_change: bool = False


def get_context() -> I18nContext:
    """Return the shared context."""
    return _context


def setup(config: Optional[I18nConfig] = None) -> I18nContext:
    """Apply ``config`` to the shared context and load its resources."""
    global _base_url, _timeout, _preferences, _preference_key, _reload_on_language_change
    config = config or I18nConfig()

    set_log_level(config.log_level)
    _context.set_allowed_languages(config.allowed_languages)
    _base_url = config.base_url or None
    _timeout = config.request_timeout
    _reload_on_language_change = config.reload_on_language_change
    _preference_key = config.preference_key
    _preferences = FilePreferenceStore(config.preference_file) if config.preference_file else None

    if config.language:
        _context.set_language(config.language)
    if _preferences is not None:
        initialize(_preferences, _preference_key)

    if config.resource_paths:
        load_resources(config.resource_paths)
    return _context


def initialize(store: PreferenceStore, key: str = DEFAULT_LANGUAGE_KEY,
               context: Optional[I18nContext] = None) -> None:
    """Restore the previously chosen language from ``store``."""
    context = context or _context
    value = store.get(key)
    if value is None:
        return
    if not context.is_allowed_language(value):
        i18n_log("I18N", f"Stored language {value!r} is not allowed, keeping '{context.language}'", level="WARNING")
        return
    context.set_language(value)


def set_language(value: str, store: Optional[PreferenceStore] = None,
                 key: Optional[str] = None, reload: Optional[bool] = None) -> None:
    """
    Switch the active language.

    Args:
        value: New language identifier
        store: Where to persist the choice (defaults to the configured store)
        key: Preference key (defaults to the configured key)
        reload: Re-request previously loaded resources with the new suffix.
            Defaults to the ``reload_on_language_change`` setting.
    """
    previous = _context.language
    _context.set_language(value)

    store = store if store is not None else _preferences
    if store is not None:
        try:
            store.set(key or _preference_key, value)
        except OSError as e:
            i18n_log("PREFS", f"Failed to persist language {value!r}: {e}", level="ERROR")

    if reload is None:
        reload = _reload_on_language_change
    if reload and value != previous and _loaded_paths:
        for item, item_base_url, item_timeout in list(_loaded_paths):
            _load_resources([item], _context, base_url=item_base_url, timeout=item_timeout)


def get_language() -> str:
    return _context.language


get_locale = get_language


def set_resource(bundle: Any, override: bool = True) -> None:
    _context.set_resource(bundle, override)


def get(key: str) -> Any:
    return _context.get(key)


def get_text(key: str, params: Any = None, default_text: Optional[str] = None) -> str:
    return _context.get_text(key, params, default_text)


def t(key: str, default_text: Optional[str] = None, **params) -> str:
    """Get translated text by dot-notation key, interpolating ``params``."""
    return _context.get_text(key, params or None, default_text)


def load_resources(res: Union[str, Sequence[str]], base_url: Optional[str] = None,
                   timeout: Optional[float] = None) -> List[str]:
    """Load language-suffixed bundles into the shared context."""
    items = [res] if isinstance(res, str) else list(res)
    base_url = base_url if base_url is not None else _base_url
    timeout = timeout if timeout is not None else _timeout
    for item in items:
        request = (item, base_url, timeout)
        if request not in _loaded_paths:
            _loaded_paths.append(request)
    return _load_resources(items, _context, base_url=base_url, timeout=timeout)


def create_resource_proxy(default_bundle: Any, namespace: str,
                          base_path: Optional[str] = None) -> ResourceProxy:
    return _create_resource_proxy(default_bundle, namespace, base_path, context=_context)


def get_i18n_text(token: Mapping[str, str], params: Any = None) -> str:
    """Get text for a ``{"key": ..., "text": ...}`` token; ``text`` is the fallback."""
    return format_text(_context.get_text(token.get("key", ""), default_text=token.get("text")), params)
