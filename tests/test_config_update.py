"""In-place config edits used by calibration and `streamscribe set`."""

from __future__ import annotations

import pytest
import yaml

from streamscribe.config import set_config_key, update_vad_threshold
from streamscribe.errors import ConfigIOError, ConfigParseError


def test_vad_threshold_creates_missing_sections(write_config) -> None:
    path = write_config({"server": {"url": "ws://10.0.0.2:8080"}})

    returned = update_vad_threshold(path, 612.5)

    assert returned == path
    data = yaml.safe_load(path.read_text())
    assert data["transcription"]["vad"]["energy_threshold"] == 612.5
    assert data["server"]["url"] == "ws://10.0.0.2:8080"


def test_vad_threshold_overwrites_existing_value(write_config) -> None:
    path = write_config(
        {"transcription": {"language": "en", "vad": {"energy_threshold": 500.0, "enabled": True}}}
    )

    update_vad_threshold(path, 350)

    data = yaml.safe_load(path.read_text())
    assert data["transcription"]["language"] == "en"
    assert data["transcription"]["vad"] == {"energy_threshold": 350.0, "enabled": True}


def test_vad_threshold_requires_existing_file(tmp_path) -> None:
    with pytest.raises(ConfigIOError) as exc_info:
        update_vad_threshold(tmp_path / "config.yaml", 500.0)
    assert exc_info.value.missing


def test_vad_threshold_rejects_invalid_yaml(write_config) -> None:
    path = write_config("transcription: [\n")
    with pytest.raises(ConfigParseError):
        update_vad_threshold(path, 500.0)
    assert path.read_text() == "transcription: [\n"


def test_set_config_key_parses_yaml_scalars(write_config) -> None:
    path = write_config({"audio": {"sample_rate": 16000}})

    set_config_key(path, "audio.channels", "2")
    set_config_key(path, "client.debug", "true")
    set_config_key(path, "audio.device_name", "MacBook Pro Microphone")

    data = yaml.safe_load(path.read_text())
    assert data["audio"] == {
        "sample_rate": 16000,
        "channels": 2,
        "device_name": "MacBook Pro Microphone",
    }
    assert data["client"]["debug"] is True


def test_set_config_key_rejects_non_mapping_parent(write_config) -> None:
    path = write_config({"audio": 5})
    with pytest.raises(ValueError, match="not a mapping"):
        set_config_key(path, "audio.channels", "2")


def test_set_config_key_rejects_empty_key(write_config) -> None:
    path = write_config({})
    with pytest.raises(ValueError):
        set_config_key(path, "..", "1")


@pytest.mark.parametrize("key_path", ["audio..channels", ".audio.channels", "audio.channels."])
def test_set_config_key_rejects_empty_segment(write_config, key_path) -> None:
    path = write_config({"audio": {"channels": 1}})
    before = path.read_text()
    with pytest.raises(ValueError, match="empty segment"):
        set_config_key(path, key_path, "2")
    assert path.read_text() == before


def test_set_config_key_rejects_invalid_yaml_value(write_config) -> None:
    path = write_config({"audio": {"device_name": "default"}})
    before = path.read_text()
    with pytest.raises(ValueError, match="audio.device_name") as exc_info:
        set_config_key(path, "audio.device_name", "[unclosed")
    assert isinstance(exc_info.value.__cause__, yaml.YAMLError)
    assert path.read_text() == before
