r"""zapnotes -- look up Nostr zap receipts for a public key.

Connects once to a fixed set of relays, normalizes an ``npub`` or hex public
key, and fetches the zap receipts (kind 9735) that tag it.

Imports flow strictly downward:

```text
        services        Connection bootstrap and receipt queries
        /      \
     core     utils     Config, logging, errors / keys, nostr_sdk helpers
        \      /
        models          Pure frozen dataclasses (zero I/O)
```

Note:
    Top-level imports (``from zapnotes import RelayConnection``) are lazy
    and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("zapnotes")

__all__ = [
    "ConnectionState",
    "Logger",
    "Relay",
    "RelayConnection",
    "ZapNotesConfig",
    "ZapReceipt",
    "lookup_receipts",
    "normalize_public_key",
    "query_receipts",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "Logger": ("zapnotes.core", "Logger"),
    "ZapNotesConfig": ("zapnotes.core", "ZapNotesConfig"),
    "ConnectionState": ("zapnotes.models", "ConnectionState"),
    "Relay": ("zapnotes.models", "Relay"),
    "ZapReceipt": ("zapnotes.models", "ZapReceipt"),
    "normalize_public_key": ("zapnotes.utils.keys", "normalize_public_key"),
    "RelayConnection": ("zapnotes.services", "RelayConnection"),
    "lookup_receipts": ("zapnotes.services", "lookup_receipts"),
    "query_receipts": ("zapnotes.services", "query_receipts"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'zapnotes' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
