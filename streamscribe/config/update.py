"""In-place edits of configuration files.

Used by the calibration flow (which persists a measured VAD energy threshold)
and by ``streamscribe set`` for non-interactive updates without hand-editing
YAML. Unrelated keys and sections are preserved.
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml

from streamscribe.config.base import PathLike, read_document
from streamscribe.errors import ConfigIOError

VAD_THRESHOLD_KEY = "transcription.vad.energy_threshold"


def _split_key(key_path: str) -> List[str]:
    if not key_path:
        raise ValueError("key_path must not be empty")
    parts = key_path.split(".")
    if not all(parts):
        raise ValueError(f"key_path {key_path!r} has an empty segment")
    return parts


def _set_nested(data: Dict[str, Any], key_path: str, value: Any) -> None:
    parts = _split_key(key_path)
    cur: dict = data
    for part in parts[:-1]:
        nxt = cur.get(part)
        if nxt is None:
            nxt = {}
            cur[part] = nxt
        if not isinstance(nxt, dict):
            raise ValueError(
                f"Cannot set {key_path}: {part!r} is not a mapping in config"
            )
        cur = nxt
    cur[parts[-1]] = value


def _write_document(path: Path, data: Dict[str, Any]) -> None:
    try:
        path.write_text(
            yaml.safe_dump(data, sort_keys=False, default_flow_style=False),
            encoding="utf-8",
        )
    except OSError as e:
        raise ConfigIOError(f"failed to write config file {path}: {e}", path) from e


def set_value(path: PathLike, key_path: str, value: Any) -> Path:
    """Set a nested key (dot-separated) to an already-typed *value*.

    Args:
        path: Existing YAML configuration file.
        key_path: Dot-separated path, e.g. ``"audio.sample_rate"``.
        value: Value to store.

    Returns:
        Path to the file that was updated.

    Raises:
        ConfigIOError: If the file is missing or cannot be written.
        ConfigParseError: If the file is not a YAML mapping.
        ValueError: If *key_path* is empty or crosses a non-mapping value.
    """
    path = Path(path)
    data = read_document(path)
    _set_nested(data, key_path, value)
    _write_document(path, data)
    return path


def set_config_key(path: PathLike, key_path: str, value_str: str) -> Path:
    """Set a nested key from a string encoded as a YAML scalar.

    ``"4"`` is stored as an int, ``"true"`` as a bool, ``"hello"`` as a str.

    Raises:
        ValueError: If *value_str* is not valid YAML, or see ``set_value``.
    """
    # Parse scalar using YAML so numbers/bools become typed.
    try:
        value = yaml.safe_load(value_str)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid value for {key_path}: {e}") from e
    return set_value(path, key_path, value)


def update_vad_threshold(path: PathLike, threshold: float) -> Path:
    """Persist a calibrated VAD energy threshold.

    Creates the ``transcription`` and ``vad`` mappings when they do not exist
    yet. The file itself must exist.
    """
    return set_value(path, VAD_THRESHOLD_KEY, float(threshold))
