"""i18nkit — runtime resource resolver for localized text bundles."""
import os

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
__version__ = "0.3.0"

from i18nkit.errors import I18nError, InvalidLanguageError  # noqa: E402
from i18nkit.paths import MISSING, get_nested_object, get_nested_value, resolve  # noqa: E402
from i18nkit.merge import NodeKind, deep_merge, merge, node_kind  # noqa: E402
from i18nkit.formatting import format_text  # noqa: E402
from i18nkit.context import I18nContext  # noqa: E402
from i18nkit.proxy import ResourceProxy  # noqa: E402
from i18nkit.loader import append_suffix  # noqa: E402
from i18nkit.i18n import (  # noqa: E402
    create_resource_proxy,
    get_context,
    get_i18n_text,
    get_text,
    initialize,
    load_resources,
    t,
)

__all__ = [
    "PROJECT_ROOT",
    "__version__",
    "I18nError",
    "InvalidLanguageError",
    "MISSING",
    "get_nested_object",
    "get_nested_value",
    "resolve",
    "NodeKind",
    "deep_merge",
    "merge",
    "node_kind",
    "format_text",
    "I18nContext",
    "ResourceProxy",
    "append_suffix",
    "create_resource_proxy",
    "get_context",
    "get_i18n_text",
    "get_text",
    "initialize",
    "load_resources",
    "t",
]
