"""Application settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Environment variables (prefix: ``TXVIEWER_``, nested via ``__``)
2. YAML config file (``TXVIEWER_CONFIG_PATH`` env var)
3. Defaults defined here

The upstream API key is only ever supplied through 1 or 2.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Enums for validated choices
# ---------------------------------------------------------------------------


class Network(enum.StrEnum):
    """Blockchain network queried on the upstream provider."""

    MAINNET = "mainnet"
    TESTNET = "testnet"


# ---------------------------------------------------------------------------
# Sub-config models
# ---------------------------------------------------------------------------


class ServerConfig(BaseSettings):
    """HTTP server settings."""

    model_config = SettingsConfigDict(
        env_prefix="TXVIEWER_SERVER__",
        case_sensitive=False,
    )

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 5000


class ProviderConfig(BaseSettings):
    """Upstream blockchain-data provider (Crypto APIs) settings."""

    model_config = SettingsConfigDict(
        env_prefix="TXVIEWER_PROVIDER__",
        case_sensitive=False,
    )

    url: str = "https://rest.cryptoapis.io/v2"
    api_key: str = Field(default="", description="Value sent in the X-API-Key header")
    blockchain: str = "bitcoin"
    network: Network = Network.TESTNET
    timeout: float = 30.0


class ViewerConfig(BaseSettings):
    """Detail viewer settings."""

    model_config = SettingsConfigDict(
        env_prefix="TXVIEWER_VIEWER__",
        case_sensitive=False,
    )

    proxy_url: str = Field(
        default="",
        description="Base URL of the proxy endpoint; empty means the in-process app",
    )
    timezone: str = Field(
        default="",
        description="IANA zone for rendered dates; empty means local time",
    )
    timeout: float = 30.0


class MetricsConfig(BaseSettings):
    """Prometheus metrics settings."""

    model_config = SettingsConfigDict(
        env_prefix="TXVIEWER_METRICS__",
        case_sensitive=False,
    )

    enabled: bool = True


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is empty.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Loads settings from environment variables (``TXVIEWER_`` prefix),
    an optional YAML file, and built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="TXVIEWER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    debug: bool = False
    version: str = "0.1.0"
    config_path: str = ""

    server: ServerConfig = Field(default_factory=ServerConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    viewer: ViewerConfig = Field(default_factory=ViewerConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Merge YAML config file contents under the env var overrides."""
        config_path = values.get("config_path", "")
        if not config_path:
            return values
        yaml_data = _load_yaml(config_path)
        # YAML values serve as defaults; env vars (already in *values*) win.
        for key, val in yaml_data.items():
            if key not in values or values[key] is None:
                values[key] = val
            elif isinstance(val, dict) and isinstance(values.get(key), dict):
                values[key] = {**val, **values[key]}
        return values

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct ``AppConfig`` loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))
