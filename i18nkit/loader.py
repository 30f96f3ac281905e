#!/usr/bin/env python3
"""Resource bundle loading.

Bundles are JSON (or YAML) documents named per language, e.g.
``strings_en.json``. They are fetched over HTTP with requests or read from
the local filesystem, then merged into an :class:`I18nContext` one at a time.
Loading is best-effort: a file that fails to download or parse is logged and
skipped.
"""

import json
import os
from typing import Any, List, Optional, Sequence, Union
from urllib.parse import urljoin, urlparse

import requests
import yaml

from i18nkit.context import I18nContext
from i18nkit.utils import i18n_log

DEFAULT_TIMEOUT = 10.0
YAML_EXTENSIONS = (".yaml", ".yml")


def append_suffix(filename: str, suffix: str) -> str:
    """Insert ``_{suffix}`` before the extension.

    Without an extension the suffix is appended as-is:
    ``append_suffix("strings", "en") == "stringsen"``.
    """
    last_dot = filename.rfind(".")
    if last_dot == -1:
        return filename + suffix
    return f"{filename[:last_dot]}_{suffix}{filename[last_dot:]}"


def is_remote(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https")


def resolve_location(item: str, base_url: Optional[str] = None) -> str:
    """Join a relative resource path to ``base_url`` (URL or directory)."""
    if not base_url or is_remote(item) or os.path.isabs(item):
        return item
    if is_remote(base_url):
        return urljoin(base_url if base_url.endswith("/") else base_url + "/", item)
    return os.path.join(base_url, item)


def _parse_document(text: str, location: str) -> Any:
    path = urlparse(location).path if is_remote(location) else location
    if path.lower().endswith(YAML_EXTENSIONS):
        return yaml.safe_load(text)
    return json.loads(text)


def _fetch_text(location: str, timeout: float) -> str:
    if is_remote(location):
        response = requests.get(location, timeout=timeout)
        response.raise_for_status()
        return response.text

    if location.startswith("file://"):
        location = urlparse(location).path
    with open(location, "r", encoding="utf-8") as f:
        return f.read()


def load_json_file(url: str, timeout: float = DEFAULT_TIMEOUT) -> Any:
    """
    Fetch and parse one resource document.

    Args:
        url: http(s) URL, file:// URL or filesystem path
        timeout: HTTP request timeout in seconds

    Returns:
        Parsed tree, or None on any transport or parse failure
    """
    try:
        return _parse_document(_fetch_text(url, timeout), url)
    except (requests.RequestException, OSError, ValueError, yaml.YAMLError) as e:
        i18n_log("LOADER", f"Failed to fetch resource {url}: {e}", level="ERROR")
        return None


def load_resources(
    res: Union[str, Sequence[str]],
    context: I18nContext,
    base_url: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[str]:
    """
    Load language-suffixed bundles and merge them into ``context`` in order.

    Args:
        res: One resource path or a list of them (without language suffix)
        context: Target resource store; its language picks the suffix
        base_url: Optional URL or directory prepended to relative paths
        timeout: HTTP request timeout in seconds

    Returns:
        Locations that produced data
    """
    items = [res] if isinstance(res, str) else list(res)
    loaded: List[str] = []

    for item in items:
        location = resolve_location(append_suffix(item, context.language), base_url)
        try:
            bundle = load_json_file(location, timeout=timeout)
            context.set_resource(bundle)
        except Exception as e:
            i18n_log("LOADER", f"cannot load resource: {item} ({e})", level="ERROR")
            continue

        if bundle is not None:
            loaded.append(location)
            i18n_log("LOADER", f"Loaded {location}")

    return loaded
