"""Settings implementation."""

from typing import Any, Mapping

from .base import BaseSettings


class Settings(BaseSettings):
    """Mutable settings collected from the command line and environment."""

    def __init__(self, values: Mapping[str, Any] = None):
        """Initialize a Settings object.

        Args:
            values: An optional dictionary of settings
        """
        self._values = dict(values or {})

    def get_value(self, *var_names, default=None):
        """Fetch the first defined setting among the given names."""
        for k in var_names:
            if k in self._values:
                return self._values[k]
        return default

    def set_value(self, var_name: str, value):
        """Add or replace a setting."""
        if not isinstance(var_name, str):
            raise TypeError("Setting name must be a string")
        if not var_name:
            raise ValueError("Setting name must be non-empty")
        self._values[var_name] = value

    def __contains__(self, index):
        """Define 'in' operator."""
        return index in self._values

    def __iter__(self):
        """Iterate settings keys."""
        return iter(self._values)

    def __setitem__(self, index, value):
        """Implement update operator for array index."""
        self.set_value(index, value)

    def __len__(self):
        """Fetch the length of the mapping."""
        return len(self._values)

    def copy(self) -> BaseSettings:
        """Produce a copy of the settings instance."""
        return Settings(self._values)

    def extend(self, other: Mapping[str, Any]) -> BaseSettings:
        """Merge another mapping to produce a new instance."""
        return Settings({**self._values, **other})
