"""Structural deep merge of resource trees.

Trees are plain JSON/YAML data: dicts, lists and scalar leaves. Merging never
mutates its inputs; each level it touches is shallow-copied and untouched
subtrees are shared with the inputs.
"""

from enum import Enum
from typing import Any


class NodeKind(Enum):
    """Shape of a node in a resource tree."""
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"

    @property
    def is_composite(self) -> bool:
        return self is not NodeKind.SCALAR


def node_kind(value: Any) -> NodeKind:
    if isinstance(value, dict):
        return NodeKind.MAPPING
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def same_shape(a: Any, b: Any) -> bool:
    """True when both values are composites of the same kind (dict/dict or list/list)."""
    kind = node_kind(a)
    return kind.is_composite and kind is node_kind(b)


def deep_merge(target: Any, source: Any, override: bool = True) -> Any:
    """
    Merge ``source`` into ``target`` and return the result.

    Args:
        target: Existing tree (may be None)
        source: Incoming tree (may be None)
        override: When True incoming values win on conflict, otherwise
            existing values are kept and only absent paths are added

    Returns:
        The merged tree. ``target`` itself when ``source`` is None and
        ``source`` itself when ``target`` is None.
    """
    if source is None:
        return target
    if target is None:
        return source

    target_kind = node_kind(target)
    source_kind = node_kind(source)

    if target_kind is NodeKind.SEQUENCE and source_kind is NodeKind.SEQUENCE:
        return _merge_sequences(target, source, override)

    if target_kind is NodeKind.MAPPING and source_kind is NodeKind.MAPPING:
        return _merge_mappings(target, source, override)

    return source if override else target


def _merge_sequences(target, source, override: bool) -> list:
    result = list(target)
    for i, item in enumerate(source):
        if i >= len(result):
            result.append(item)
        elif same_shape(result[i], item):
            result[i] = deep_merge(result[i], item, override)
        elif override:
            result[i] = item
    return result


def _merge_mappings(target: dict, source: dict, override: bool) -> dict:
    result = dict(target)
    for key, value in source.items():
        if key in target and same_shape(target[key], value):
            result[key] = deep_merge(target[key], value, override)
        elif override or key not in target:
            result[key] = value
    return result


merge = deep_merge
