"""Dotted-key lookup into nested resource trees."""

from typing import Any, List


class _Missing:
    """Marker for "no value at this path". Distinct from None (JSON null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


def get_nested_object(obj: Any, keys: List[str]) -> Any:
    """Walk ``keys`` from ``obj``; any gap along the way yields an empty dict."""
    current = obj
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return {}
        current = current[key]
    return current


def get_nested_value(data: Any, key: str) -> Any:
    """Resolve a dot-separated key in a nested dict.

    The last segment is looked up on whatever the preceding segments lead
    to, so a broken path simply ends in ``MISSING``.
    """
    keys = key.split(".")
    attr = keys.pop()
    obj = get_nested_object(data, keys) if keys else data
    if isinstance(obj, dict) and attr in obj:
        return obj[attr]
    return MISSING


resolve = get_nested_value
