"""
Config system - Layered typed configuration with validation.

Merge precedence (later overrides earlier):
defaults < config files (JSON/YAML) < .env file < DOCSTORE_* environment
variables < explicit overrides.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, is_dataclass, MISSING
from pathlib import Path
from typing import Any, Dict, Optional, Type, get_args, get_origin

from .faults import ConfigError

logger = logging.getLogger("docstore.config")

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "DocStoreConfig",
    "configure",
    "get_config",
    "reset_config",
]


@dataclass(frozen=True)
class DocStoreConfig:
    """
    Process-wide defaults for document classes.

    Attributes:
        json_column: Attribute holding the JSON container on host documents
        destroy_marker: Payload key that drops an embedded document
        strict_enumerations: Default ``strict`` for enumeration attributes
    """

    json_column: str = "data"
    destroy_marker: str = "_destroy"
    strict_enumerations: bool = False


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources.
    """

    def __init__(self, env_prefix: str = "DOCSTORE_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[list[str]] = None,
        env_prefix: str = "DOCSTORE_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "ConfigLoader":
        """
        Load configuration from multiple sources with proper merge strategy.

        Args:
            paths: Config file paths (glob patterns supported)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)

        Returns:
            Configured ConfigLoader instance
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def _load_from_files(self, pattern: str):
        """Load config from JSON or YAML files."""
        from glob import glob

        for path_str in sorted(glob(pattern)):
            path = Path(path_str)
            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)
            else:
                logger.debug(f"Ignoring config file with unknown suffix: {path}")

    def _load_json_file(self, path: Path):
        """Load config from JSON file."""
        with open(path) as f:
            data = json.load(f)
            self._merge_dict(self.config_data, data)

    def _load_yaml_file(self, path: Path):
        """Load config from YAML file."""
        import yaml
        with open(path) as f:
            data = yaml.safe_load(f)
            if data:
                self._merge_dict(self.config_data, data)

    def _load_env_file(self, path: str):
        """Load config from .env file."""
        from dotenv import dotenv_values

        env_path = Path(path)
        if not env_path.exists():
            return

        for key, value in dotenv_values(env_path).items():
            if key.startswith(self.env_prefix) and value is not None:
                self._set_key(key, value)

    def _load_from_env(self):
        """Load config from environment variables."""
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_key(key, value)

    def _set_key(self, key: str, value: str):
        """Convert DOCSTORE_JSON_COLUMN to json_column."""
        key = key[len(self.env_prefix):].lower()
        self.config_data[key] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        parts = path.split(".")
        current = self.config_data

        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return current

    def build(self, config_class: Type = DocStoreConfig):
        """Instantiate ``config_class`` from the merged data."""
        if not is_dataclass(config_class):
            raise ConfigError(f"{config_class!r} is not a dataclass")

        kwargs = {}
        for field_info in fields(config_class):
            field_name = field_info.name
            if field_name in self.config_data:
                value = self.config_data[field_name]
                if not self._check_type(value, field_info.type):
                    raise ConfigError(
                        f"Config field '{field_name}' expected {field_info.type}, "
                        f"got {type(value).__name__}",
                        key=field_name,
                    )
                kwargs[field_name] = value
            elif field_info.default is not MISSING:
                kwargs[field_name] = field_info.default
            elif field_info.default_factory is not MISSING:
                kwargs[field_name] = field_info.default_factory()
            else:
                raise ConfigError(
                    f"Required config field '{field_name}' not provided", key=field_name
                )

        return config_class(**kwargs)

    def _check_type(self, value: Any, expected_type: Any) -> bool:
        """Basic type checking."""
        # Annotations are strings under postponed evaluation
        if isinstance(expected_type, str):
            expected_type = {"str": str, "bool": bool, "int": int, "float": float}.get(
                expected_type, object
            )

        origin = get_origin(expected_type)
        if origin is not None:
            args = get_args(expected_type)
            if value is None and type(None) in args:
                return True
            return isinstance(value, origin) if isinstance(origin, type) else True

        if expected_type is str:
            return isinstance(value, str) and value != ""
        return isinstance(value, expected_type)

    def to_dict(self) -> dict:
        """Export all config as dictionary."""
        return self.config_data.copy()


_config: Optional[DocStoreConfig] = None


def _default_paths() -> list[str]:
    """Config files named by ``DOCSTORE_CONFIG`` (os.pathsep-separated, globs allowed)."""
    value = os.environ.get("DOCSTORE_CONFIG", "")
    return [part for part in value.split(os.pathsep) if part]


def get_config() -> DocStoreConfig:
    """
    Return the process configuration, loading it on first use from the files
    named by ``DOCSTORE_CONFIG`` and the ``DOCSTORE_*`` environment.
    """
    global _config
    if _config is None:
        _config = ConfigLoader.load(paths=_default_paths()).build()
        logger.debug(f"Loaded configuration: {_config}")
    return _config


def configure(
    paths: Optional[list[str]] = None,
    env_file: Optional[str] = None,
    **overrides: Any,
) -> DocStoreConfig:
    """
    Replace the process configuration.

    Args:
        paths: JSON/YAML config files (glob patterns supported); defaults to
            the files named by ``DOCSTORE_CONFIG``
        env_file: Path to a .env file with ``DOCSTORE_*`` entries
        **overrides: Field values taking precedence over every other source
    """
    global _config
    _config = ConfigLoader.load(
        paths=_default_paths() if paths is None else paths,
        env_file=env_file,
        overrides=overrides,
    ).build()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration (for testing)."""
    global _config
    _config = None
