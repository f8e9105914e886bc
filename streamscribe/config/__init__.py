"""
Configuration

YAML-backed settings for the two process roles:
- client: local API, reconnect policy, audio capture format
- server: bind address, WebRTC ICE servers, transcription, noise
  suppression and VAD settings
"""

from streamscribe.config.client import ClientConfig
from streamscribe.config.client import default as default_client
from streamscribe.config.client import load as load_client
from streamscribe.config.server import ICEServer, ServerConfig
from streamscribe.config.server import default as default_server
from streamscribe.config.server import load as load_server
from streamscribe.config.update import set_config_key, update_vad_threshold

__all__ = [
    # Client
    "ClientConfig",
    "load_client",
    "default_client",
    # Server
    "ServerConfig",
    "ICEServer",
    "load_server",
    "default_server",
    # Editing
    "set_config_key",
    "update_vad_threshold",
]
