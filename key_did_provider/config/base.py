"""Configuration base classes."""

from abc import abstractmethod
from typing import Any, Iterator, Mapping, Optional

from ..core.error import BaseError

# never rendered by repr
SECRET_SETTINGS = frozenset(["provider.seed"])


class ConfigError(BaseError):
    """A base exception for all configuration errors."""


class BaseSettings(Mapping[str, Any]):
    """Read access to settings with typed getters."""

    @abstractmethod
    def get_value(self, *var_names, default: Optional[Any] = None) -> Any:
        """Fetch a setting.

        Args:
            var_names: A list of variable name alternatives
            default: The default value to return if none are defined

        Returns:
            The setting value, if defined, otherwise the default value

        """

    def get_str(self, *var_names, default: Optional[str] = None) -> Optional[str]:
        """Fetch a setting as a string value."""
        value = self.get_value(*var_names, default=default)
        return None if value is None else str(value)

    def __getitem__(self, index):
        """Fetch as an array index."""
        if not isinstance(index, str):
            raise TypeError(f"Index {index} must be a string")
        missing = object()
        result = self.get_value(index, default=missing)
        if result is missing:
            raise KeyError(f"Undefined index: {index}")
        return result

    @abstractmethod
    def __iter__(self) -> Iterator:
        """Iterate settings keys."""

    @abstractmethod
    def __len__(self):
        """Fetch the length of the mapping."""

    @abstractmethod
    def copy(self) -> "BaseSettings":
        """Produce a copy of the settings instance."""

    @abstractmethod
    def extend(self, other: Mapping[str, Any]) -> "BaseSettings":
        """Merge another mapping to produce a new settings instance."""

    def __repr__(self) -> str:
        """Provide a human readable representation, hiding secret values."""
        items = ", ".join(
            f"{k}={'****' if k in SECRET_SETTINGS else self[k]}" for k in self
        )
        return f"<{self.__class__.__name__}({items})>"
