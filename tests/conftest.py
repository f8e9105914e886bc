from __future__ import annotations

import io

import pytest
import yaml

from streamscribe.log import Logger


@pytest.fixture
def write_config(tmp_path):
    """Write a mapping (or raw text) to a YAML file and return its path."""

    def _write(data, name: str = "config.yaml"):
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data)
        else:
            path.write_text(yaml.safe_dump(data, sort_keys=False))
        return path

    return _write


@pytest.fixture
def make_logger():
    """Build loggers writing to an in-memory stream; handlers removed after."""
    created = []

    def _make(**kwargs):
        stream = io.StringIO()
        log = Logger(sink=stream, **kwargs)
        created.append(log)
        return log, stream

    yield _make
    for log in created:
        log.close()
