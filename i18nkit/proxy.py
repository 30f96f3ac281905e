"""Lazy attribute-style access to a namespace of the resource tree.

    strings = create_resource_proxy({"greeting": {"hello": "Hi"}}, "app")
    strings.greeting.hello          # "Hi"
    strings.greeting.bye            # "missing key: [app.greeting.bye]"

Nodes never copy the tree; every access reads the live context, so bundles
merged later show up without rebuilding the proxy.
"""

from typing import Any, Optional

from i18nkit.context import I18nContext
from i18nkit.merge import NodeKind, node_kind
from i18nkit.paths import MISSING


class ResourceProxy:
    """Immutable view over ``namespace[.path]`` in an :class:`I18nContext`."""

    __slots__ = ("_context", "_namespace", "_path")

    def __init__(self, context: I18nContext, namespace: str, path: Optional[str] = None):
        object.__setattr__(self, "_context", context)
        object.__setattr__(self, "_namespace", namespace)
        object.__setattr__(self, "_path", path or None)

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def full_path(self) -> str:
        return f"{self._namespace}.{self._path}" if self._path else self._namespace

    def get(self, field: str) -> Any:
        """Resolve ``field`` below this node.

        Mappings come back as child proxies, other values verbatim, and
        missing keys as ``"missing key: [<full key>]"``.
        """
        current = f"{self._path}.{field}" if self._path else field
        full_key = f"{self._namespace}.{current}"
        value = self._context.get(full_key)

        if value is MISSING:
            return f"missing key: [{full_key}]"
        if node_kind(value) is NodeKind.MAPPING:
            return ResourceProxy(self._context, self._namespace, current)
        return value

    def resolve(self) -> Any:
        """Return the raw subtree this node points at (or ``MISSING``)."""
        return self._context.get(self.full_path)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get(name)

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ResourceProxy is read-only")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResourceProxy):
            return NotImplemented
        return (
            self._context is other._context
            and self._namespace == other._namespace
            and self._path == other._path
        )

    def __hash__(self) -> int:
        return hash((id(self._context), self._namespace, self._path))

    def __repr__(self) -> str:
        return f"<ResourceProxy {self.full_path}>"


def create_resource_proxy(
    default_bundle: Any,
    namespace: str,
    base_path: Optional[str] = None,
    context: Optional[I18nContext] = None,
) -> ResourceProxy:
    """
    Register ``default_bundle`` under ``namespace`` and return a proxy over it.

    The default bundle is merged without override, so values loaded earlier
    for the same namespace win over the shipped defaults.
    """
    if context is None:
        from i18nkit.i18n import get_context
        context = get_context()
    context.set_resource({namespace: default_bundle}, False)
    return ResourceProxy(context, namespace, base_path)
