"""Core layer: configuration, exceptions, logging and YAML loading.

Attributes:
    ZapNotesConfig: Top-level Pydantic configuration with
        [ConnectionConfig][zapnotes.core.config.ConnectionConfig] and
        [QueryConfig][zapnotes.core.config.QueryConfig] sections.
    Logger: Structured logger supporting key=value and JSON output modes.
    load_yaml: Safe YAML loading with ``yaml.safe_load()``.

See Also:
    [zapnotes.core.exceptions][zapnotes.core.exceptions]: The exception
        hierarchy shared by every layer.
"""

from .config import ConnectionConfig, QueryConfig, ZapNotesConfig
from .logger import Logger, StructuredFormatter, format_kv_pairs
from .yaml import load_yaml


__all__ = [
    "ConnectionConfig",
    "Logger",
    "QueryConfig",
    "StructuredFormatter",
    "ZapNotesConfig",
    "format_kv_pairs",
    "load_yaml",
]
