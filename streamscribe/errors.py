"""Exceptions raised while loading configuration documents."""

from __future__ import annotations

from pathlib import Path
from typing import Union


class ConfigError(Exception):
    """Base class for configuration loading failures.

    The underlying cause (``OSError``, ``yaml.YAMLError``, pydantic
    ``ValidationError``) is always chained as ``__cause__``.
    """

    def __init__(self, message: str, path: Union[str, Path, None] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ConfigIOError(ConfigError):
    """The configuration file could not be read."""

    @property
    def missing(self) -> bool:
        """True when the file does not exist at all."""
        return isinstance(self.__cause__, FileNotFoundError)


class ConfigParseError(ConfigError):
    """The document is not valid YAML or does not match the schema."""
