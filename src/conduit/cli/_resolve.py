"""Provider import resolution — resolves ``"module:attribute"`` strings to Provider instances.

Shared utility used by ``conduit routes`` and ``conduit resolve``.
"""

import importlib
import sys

from conduit.errors import ConduitError
from conduit.provider import Provider


def resolve_provider(import_string: str) -> Provider:
    """Resolve an import string to a conduit Provider instance.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"provider"`` (e.g. ``"myapp"`` resolves to
    ``myapp.provider``).

    Supports factory functions: if the resolved object is callable and
    not a Provider instance, it will be called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a Provider or factory.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "provider"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Provider):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Provider):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a conduit.Provider instance"
        raise TypeError(msg)

    return obj


def load_provider(import_string: str) -> Provider:
    """Resolve and start a provider, exiting with status 1 on any setup error."""
    try:
        provider = resolve_provider(import_string)
        provider.startup()
    except (ModuleNotFoundError, AttributeError, TypeError, ConduitError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    return provider
