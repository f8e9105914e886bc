"""Shared machinery for the client and server configuration loaders.

Both roles read a YAML document into a tree of frozen pydantic models. The
defaulting pass lives on ``Section``: every scalar field that ends up holding
its type's zero value is replaced by the default declared on the model, so
the model declarations double as the table of default constants.
"""

from pathlib import Path
from typing import Any, Dict, Type, TypeVar, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticUndefined

from streamscribe.errors import ConfigIOError, ConfigParseError

PathLike = Union[str, Path]

ModelT = TypeVar("ModelT", bound=BaseModel)


def is_zero(value: Any) -> bool:
    """Return True if *value* is the zero value of a scalar field.

    Booleans never count: ``False`` is a legitimate setting, not a hole.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return False
    return value == type(value)()


class Section(BaseModel):
    """A group of settings under one top-level (or nested) YAML key."""

    # protected_namespaces: sections carry fields named `model_path`
    model_config = ConfigDict(frozen=True, extra="ignore", protected_namespaces=())

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # `key: ~` behaves exactly like a missing key
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("*", mode="before")
    @classmethod
    def _reject_bool_numbers(cls, value: Any, info: ValidationInfo) -> Any:
        # lax mode would read `true` as 1 for int and float fields
        field = cls.model_fields.get(info.field_name)
        if isinstance(value, bool) and field is not None and field.annotation is not bool:
            raise ValueError(f"expected {getattr(field.annotation, '__name__', field.annotation)}, got a boolean")
        return value

    @field_validator("*", mode="after")
    @classmethod
    def _fill_default(cls, value: Any, info: ValidationInfo) -> Any:
        if not is_zero(value):
            return value
        field = cls.model_fields.get(info.field_name)
        if field is None or field.default is PydanticUndefined:
            return value
        if is_zero(field.default):
            return value
        return field.default


def read_document(path: PathLike) -> Dict[str, Any]:
    """Read and parse a YAML mapping from *path*.

    Args:
        path: Location of the configuration file.

    Returns:
        The top-level mapping. An empty document yields ``{}``.

    Raises:
        ConfigIOError: If the file cannot be read.
        ConfigParseError: If the file is not valid YAML or its top level is
            not a mapping.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigIOError(f"failed to read config file {path}: {e}", path) from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"failed to parse config file {path}: {e}", path) from e

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"failed to parse config file {path}: {e}", path) from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigParseError(
            f"failed to parse config file {path}: expected a YAML mapping, "
            f"got {type(raw).__name__}",
            path,
        )
    return raw


def load_model(model: Type[ModelT], path: PathLike) -> ModelT:
    """Read *path* and validate it into *model*, applying defaults.

    Raises:
        ConfigIOError: If the file cannot be read.
        ConfigParseError: If the document is malformed or has fields of the
            wrong type.
    """
    raw = read_document(path)
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise ConfigParseError(f"failed to parse config file {path}: {e}", path) from e
