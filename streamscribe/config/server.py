"""Server process configuration.

Only ``server.bind_address`` has a default. The remaining fields keep their
zero values when absent and the consuming components decide what an empty
model path or a zero threshold means.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from streamscribe.config.base import PathLike, Section, load_model


class ServerSection(Section):
    bind_address: str = "localhost:8080"
    debug: bool = False
    log_level: str = ""  # debug, info, warn, error, fatal
    log_format: str = ""  # text, json


class ICEServer(BaseModel):
    """One STUN/TURN entry, taken verbatim from the document."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    urls: Tuple[str, ...] = ()
    username: Optional[str] = None
    credential: Optional[str] = None


class WebRTCSection(Section):
    ice_servers: Tuple[ICEServer, ...] = ()


class TranscriptionSection(Section):
    model_path: str = ""
    language: str = ""
    translate: bool = False
    threads: int = 0
    use_gpu: bool = False


class NoiseSuppressionSection(Section):
    enabled: bool = False
    model_path: str = ""


class VADSection(Section):
    enabled: bool = False
    energy_threshold: float = 0.0
    silence_threshold_ms: int = 0
    min_chunk_duration_ms: int = 0
    max_chunk_duration_ms: int = 0


class ServerConfig(Section):
    """Root of the server configuration tree."""

    server: ServerSection = Field(default_factory=ServerSection)
    webrtc: WebRTCSection = Field(default_factory=WebRTCSection)
    transcription: TranscriptionSection = Field(default_factory=TranscriptionSection)
    noise_suppression: NoiseSuppressionSection = Field(
        default_factory=NoiseSuppressionSection
    )
    vad: VADSection = Field(default_factory=VADSection)


def load(path: PathLike) -> ServerConfig:
    """Load the server configuration from *path*.

    Raises:
        ConfigIOError: If the file cannot be read.
        ConfigParseError: If the YAML is malformed or mistyped.
    """
    return load_model(ServerConfig, path)


def default() -> ServerConfig:
    """Configuration used when no file is available, with debug switched on."""
    return ServerConfig(server=ServerSection(debug=True))
