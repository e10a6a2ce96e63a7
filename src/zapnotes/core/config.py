"""Configuration models for zapnotes.

Pydantic models with defaults for every field, so an empty or partial YAML
file is valid and only overrides what it names.

Examples:
    ```yaml
    connection:
      relays:
        - wss://relay.damus.io
        - wss://nos.lol
      timeout: 5.0
    query:
      timeout: 15.0
    ```

See Also:
    [load_yaml()][zapnotes.core.yaml.load_yaml]: Reads the YAML file.
    [RelayConnection][zapnotes.services.connection.RelayConnection]: Consumes
        [ConnectionConfig][zapnotes.core.config.ConnectionConfig].
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from zapnotes.models.constants import DEFAULT_RELAYS
from zapnotes.models.relay import Relay

from .exceptions import ConfigurationError
from .yaml import load_yaml


class ConnectionConfig(BaseModel):
    """Relay endpoints and connect timeout for the bootstrap step.

    Relay URLs are validated and normalized through
    [Relay][zapnotes.models.relay.Relay]; duplicates after normalization are
    dropped, keeping the first occurrence.
    """

    model_config = {"extra": "forbid"}

    relays: list[str] = Field(
        default_factory=lambda: list(DEFAULT_RELAYS),
        min_length=1,
        description="Relay WebSocket URLs to connect to at startup",
    )
    timeout: float = Field(
        default=10.0,
        ge=1.0,
        le=120.0,
        description="Seconds to wait for relay connections to open",
    )

    @field_validator("relays")
    @classmethod
    def _normalize_relays(cls, value: list[str]) -> list[str]:
        seen: dict[str, None] = {}
        for raw in value:
            seen.setdefault(Relay(raw).url)
        return list(seen)

    def relay_models(self) -> list[Relay]:
        return [Relay(url) for url in self.relays]


class QueryConfig(BaseModel):
    """Settle timeout for the zap receipt fetch."""

    model_config = {"extra": "forbid"}

    timeout: float = Field(
        default=10.0,
        ge=1.0,
        le=300.0,
        description="Seconds to wait for relays to finish sending stored events",
    )


class ZapNotesConfig(BaseModel):
    """Top-level configuration."""

    model_config = {"extra": "forbid"}

    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ZapNotesConfig:
        """Validate a configuration dictionary.

        Raises:
            ConfigurationError: If validation fails.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> ZapNotesConfig:
        """Load and validate a YAML configuration file.

        Raises:
            ConfigurationError: If the file is missing, is not valid YAML,
                or fails validation.
        """
        try:
            data = load_yaml(config_path)
        except (FileNotFoundError, TypeError, yaml.YAMLError) as e:
            raise ConfigurationError(str(e)) from e
        return cls.from_dict(data)
