"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="RouterConfig")


@dataclass
class RouterConfig:
    """Router configuration."""

    # Matching
    case_sensitive: bool = False
    default_methods: List[str] = field(default_factory=lambda: ["GET"])

    # Built-in responses
    empty_path_body: str = "<h1>No page path was provided.</h1>"
    page_error_body: str = "<h1>There is an issue with the page you are trying to access.</h1>"
    method_not_allowed_body: str = "Method Not Allowed"

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create config from dictionary."""
        # Filter to only valid fields
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        ignored = set(data) - valid_fields
        if ignored:
            logger.warning(f"Ignoring unknown config keys: {sorted(ignored)}")
        return cls(**filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        try:
            import yaml
        except ImportError:
            raise ImportError("PyYAML required for YAML config")
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_env(cls: Type[T], prefix: str = "ROUTER_") -> T:
        """Load config from environment variables.

        Values are converted by the declared field type:
        ``ROUTER_CASE_SENSITIVE=true`` becomes a bool and
        ``ROUTER_DEFAULT_METHODS=GET,HEAD`` a list. String fields keep
        the raw value, so ``ROUTER_METHOD_NOT_ALLOWED_BODY=405`` stays "405".
        """
        # Annotations are strings under postponed evaluation
        field_types = {
            f.name: str(f.type) for f in cls.__dataclass_fields__.values()
        }
        data: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if key.startswith(prefix):
                config_key = key[len(prefix):].lower()
                field_type = field_types.get(config_key, "str")

                # Type conversion
                if field_type in ("bool", str(bool)):
                    data[config_key] = value.strip().lower() in ("true", "1", "yes", "on")
                elif field_type in ("int", str(int)):
                    data[config_key] = int(value)
                elif field_type in ("float", str(float)):
                    data[config_key] = float(value)
                elif "List[" in field_type:
                    data[config_key] = [m.strip() for m in value.split(",") if m.strip()]
                else:
                    data[config_key] = value

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {}
        for field_name in self.__dataclass_fields__:
            result[field_name] = getattr(self, field_name)
        return result

    def merge(self, overrides: Dict[str, Any]) -> "RouterConfig":
        """Return a copy with the given fields replaced."""
        data = self.to_dict()
        data.update(overrides)
        return type(self).from_dict(data)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "ROUTER_",
) -> RouterConfig:
    """Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults
    """
    config = RouterConfig()

    # Load from file if provided
    if path:
        path_obj = Path(path)
        if path_obj.exists():
            if path.endswith(".json"):
                config = RouterConfig.from_json(path)
            elif path.endswith((".yaml", ".yml")):
                config = RouterConfig.from_yaml(path)
            else:
                logger.warning(f"Unknown config format: {path}")
        else:
            logger.warning(f"Config file not found: {path}")

    # Override with environment variables; only keys actually present
    env_keys = {
        key[len(env_prefix):].lower()
        for key in os.environ
        if key.startswith(env_prefix)
    }
    if env_keys:
        env_config = RouterConfig.from_env(env_prefix).to_dict()
        config = config.merge({k: v for k, v in env_config.items() if k in env_keys})

    return config


__all__ = [
    "RouterConfig",
    "load_config",
]
