"""Configuration source with typed accessors.

This module provides the Configuration class, a key/value store keyed by
Hadoop-style dotted names (e.g. ``fs.cosn.credentials.provider``). It is the
configuration source handed to every credentials provider at construction
time.
"""

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml

from cosn_core.exceptions import ConfigurationError

# Get logger for this module
logger = structlog.get_logger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def _flatten(values: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into dotted keys."""
    flat: dict[str, Any] = {}
    for key, value in values.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, full_key))
        else:
            flat[full_key] = value
    return flat


class Configuration:
    """Key/value configuration source."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        """Initialize the configuration.

        Args:
            values: Initial values. Nested mappings are flattened to dotted keys.
        """
        self._values: dict[str, Any] = _flatten(values) if values else {}

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Configuration":
        """Load a configuration from a YAML file.

        Args:
            path: Path to a YAML document whose top level is a mapping.

        Returns:
            The loaded configuration.

        Raises:
            ConfigurationError: If the file cannot be read or is not a mapping.
        """
        try:
            with Path(path).open(encoding="utf-8") as f:
                document = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(  # noqa: TRY003
                f"Unable to load configuration file '{path}': {e}"
            ) from e

        if document is None:
            document = {}
        if not isinstance(document, Mapping):
            raise ConfigurationError(  # noqa: TRY003
                f"Configuration file '{path}' must contain a mapping at the top level"
            )

        logger.debug("CONFIGURATION_LOADED", path=str(path), keys=len(document))
        return cls(document)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def unset(self, key: str) -> None:
        self._values.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def keys(self) -> list[str]:
        return list(self._values)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def get_raw(self, key: str, default: Any = None) -> Any:
        """Get the value for ``key`` without any conversion."""
        return self._values.get(key, default)

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a value as a stripped string.

        Args:
            key: Configuration key.
            default: Value returned when the key is absent.

        Returns:
            The string value, or ``default`` if the key is not set.
        """
        value = self._values.get(key)
        if value is None:
            return default
        return str(value).strip()

    def get_int(self, key: str, default: int) -> int:
        """Get a value as an integer.

        Raises:
            ConfigurationError: If the value is set but is not an integer.
        """
        value = self.get(key)
        if value is None or value == "":
            return default
        try:
            return int(value)
        except ValueError as e:
            raise ConfigurationError(  # noqa: TRY003
                f"Value '{value}' for '{key}' is not an integer", key
            ) from e

    def get_bool(self, key: str, *, default: bool = False) -> bool:
        """Get a value as a boolean.

        Raises:
            ConfigurationError: If the value is set but is not a boolean.
        """
        value = self.get(key)
        if value is None or value == "":
            return default
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigurationError(  # noqa: TRY003
            f"Value '{value}' for '{key}' is not a boolean", key
        )

    def get_trimmed_strings(self, key: str) -> list[str]:
        """Get a list value, trimming whitespace and dropping empty entries.

        The value may be a comma-separated string or a list of strings.

        Raises:
            ConfigurationError: If the value is neither a string nor a list of
                strings.
        """
        value = self._values.get(key)
        if value is None:
            return []
        if isinstance(value, str):
            items: list[Any] = value.split(",")
        elif isinstance(value, list | tuple):
            items = list(value)
        else:
            raise ConfigurationError(  # noqa: TRY003
                f"Value for '{key}' must be a string or a list, "
                f"got {type(value).__name__}",
                key,
            )

        result = []
        for item in items:
            if not isinstance(item, str):
                raise ConfigurationError(  # noqa: TRY003
                    f"Entries of '{key}' must be strings, got {type(item).__name__}",
                    key,
                )
            stripped = item.strip()
            if stripped:
                result.append(stripped)
        return result

    def __repr__(self) -> str:
        return f"Configuration(keys={sorted(self._values)!r})"
