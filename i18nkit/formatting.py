#!/usr/bin/env python3
"""
Template interpolation for localized strings.

Placeholders look like ``{{ user.name }}``; each dotted path is resolved
against a params tree one segment at a time (numeric segments index lists).
A path that cannot be followed renders as the literal word ``Missing``.
"""

import json
import re
from typing import Any, Mapping

PLACEHOLDER_PATTERN = re.compile(r"{{\s*([^}]+?)\s*}}")
MISSING_PARAM_TEXT = "Missing"


def stringify(value: Any) -> str:
    """Render a parameter value as display text (JSON-style booleans and null)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)


def _lookup_param(params: Any, path: str) -> str:
    value = params
    for key in path.split("."):
        if isinstance(value, Mapping) and key in value:
            value = value[key]
        elif isinstance(value, (list, tuple)) and key.isdecimal() and int(key) < len(value):
            value = value[int(key)]
        else:
            return MISSING_PARAM_TEXT
    return stringify(value)


def format_text(template: str, params: Any = None) -> str:
    """Expand ``{{path}}`` placeholders in ``template`` from ``params``."""
    if params is None:
        params = {}
    return PLACEHOLDER_PATTERN.sub(lambda m: _lookup_param(params, m.group(1)), template)
