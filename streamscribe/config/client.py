"""Client process configuration.

Loaded from a YAML document shaped like::

    client:
      api_bind_address: localhost:8081
      debug: false
      debug_log_path: ./debug.log
      debug_log_max_size: 8388608
    server:
      url: ws://localhost:8080
      reconnect_delay_ms: 1000
      max_reconnect_delay_ms: 30000
      reconnect_backoff_multiplier: 2.0
    audio:
      sample_rate: 16000
      channels: 1
      bits_per_sample: 16
      chunk_duration_ms: 150
      device_name: ""

Every value shown above except ``debug`` and ``device_name`` is also the
default used when the key is absent or zero.
"""

from pydantic import Field

from streamscribe.config.base import PathLike, Section, load_model


class ClientSection(Section):
    """Local API endpoint and debug logging."""

    api_bind_address: str = "localhost:8081"
    debug: bool = False
    debug_log_path: str = "./debug.log"
    debug_log_max_size: int = 8 * 1024 * 1024


class ServerLink(Section):
    """Where the transcription server lives and how to reconnect to it."""

    url: str = "ws://localhost:8080"
    reconnect_delay_ms: int = 1000
    max_reconnect_delay_ms: int = 30000
    reconnect_backoff_multiplier: float = 2.0


class AudioSection(Section):
    """Capture format sent to the server."""

    sample_rate: int = 16000
    channels: int = 1
    bits_per_sample: int = 16
    chunk_duration_ms: int = 150
    device_name: str = ""


class ClientConfig(Section):
    """Root of the client configuration tree."""

    client: ClientSection = Field(default_factory=ClientSection)
    server: ServerLink = Field(default_factory=ServerLink)
    audio: AudioSection = Field(default_factory=AudioSection)


def load(path: PathLike) -> ClientConfig:
    """Load the client configuration from *path*.

    Raises:
        ConfigIOError: If the file cannot be read.
        ConfigParseError: If the YAML is malformed or mistyped.
    """
    return load_model(ClientConfig, path)


def default() -> ClientConfig:
    """Configuration used before (or instead of) reading a file.

    Identical to loading an empty document, except debug is switched on.
    """
    return ClientConfig(client=ClientSection(debug=True))
