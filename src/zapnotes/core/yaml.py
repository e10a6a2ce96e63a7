"""YAML configuration loading for zapnotes.

Uses ``yaml.safe_load`` so configuration files can only produce plain
strings, numbers, lists and dicts. The result is validated afterwards by
[ZapNotesConfig][zapnotes.core.config.ZapNotesConfig].

Examples:
    ```python
    from zapnotes.core.yaml import load_yaml

    data = load_yaml("config/zapnotes.yaml")
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_yaml(config_path: str | Path) -> dict[str, Any]:
    """Load and parse a YAML configuration file.

    Args:
        config_path: Path to the YAML file (absolute or relative).

    Returns:
        Parsed configuration as a dictionary. An empty file yields ``{}``.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file contains invalid YAML syntax.
        TypeError: If the document's top level is not a mapping.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise TypeError(f"Config file must contain a mapping, got {type(data).__name__}")
    return data
