# src/nearstock/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/nearstock/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `NEARSTOCK_CONFIG_PATH` (replaces the packaged defaults)
- environment variables (`SHOPIFY_API_KEY`, `NEARSTOCK_LOG_LEVEL`, `NEARSTOCK_COMMERCE_API_URL`)

The resulting `Settings` object is built once per process and passed explicitly into
the clients and the stock-check pipeline; nothing below reads globals at request time.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from nearstock.core.env import load_dotenv_if_present
from nearstock.core.geo import GeoPoint


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `nearstock.config`."""
    text = resources.files("nearstock.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "nearstock"
    http_timeout_seconds: float = Field(15, gt=0)
    log_level: str = "INFO"


class GeocodingSettings(BaseModel):
    base_url: str = "https://nominatim.openstreetmap.org/search"
    country: str = "India"
    user_agent: str = "nearstock/0.1.0"


class CommerceSettings(BaseModel):
    api_url: str
    access_token: str | None = None
    variants_first: int = Field(10, ge=1, le=250)
    inventory_levels_first: int = Field(10, ge=1, le=250)


class WarehouseSettings(BaseModel):
    """Static warehouse data: coordinates by postal code + location names by postal code."""

    registry: dict[str, GeoPoint] = Field(default_factory=dict)
    location_map: dict[str, str] = Field(default_factory=dict)

    def consistency_problems(self) -> list[str]:
        """Describe registry/location-map entries that do not correspond 1:1.

        A mismatch never fails a request: the nearest tier simply cannot match and
        the fallback tier answers instead, so we surface it for operators.
        """
        problems: list[str] = []
        mapped_codes = set(self.location_map.values())
        for code in self.registry:
            if code not in mapped_codes:
                problems.append(f"warehouse {code} has no location name in location_map")
        for name, code in self.location_map.items():
            if code not in self.registry:
                problems.append(f"location '{name}' maps to {code}, which is not in the registry")
        return problems


class ErrorPolicySettings(BaseModel):
    # When true, an unresolvable pincode answers 404 instead of the generic 500.
    geocode_miss_as_not_found: bool = False


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    geocoding: GeocodingSettings = Field(default_factory=GeocodingSettings)
    commerce: CommerceSettings
    warehouses: WarehouseSettings = Field(default_factory=WarehouseSettings)
    errors: ErrorPolicySettings = Field(default_factory=ErrorPolicySettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload."""
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("NEARSTOCK_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    api_url = os.getenv("NEARSTOCK_COMMERCE_API_URL")
    if api_url:
        data.setdefault("commerce", {})["api_url"] = api_url

    token = os.getenv("SHOPIFY_API_KEY")
    if token:
        data.setdefault("commerce", {})["access_token"] = token

    return data


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load and validate settings without caching (used by tests and tools)."""
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    return load_settings(os.getenv("NEARSTOCK_CONFIG_PATH") or None)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
