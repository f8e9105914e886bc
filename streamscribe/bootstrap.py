"""Process startup helpers.

Mirrors what the client and server entry points do before anything else:
load the config (falling back to defaults when the file does not exist),
then build the one ``Logger`` the process will pass around.
"""

from typing import Literal, Union, overload

from streamscribe.config import client, server
from streamscribe.config.base import PathLike
from streamscribe.config.client import ClientConfig
from streamscribe.config.server import ServerConfig
from streamscribe.debuglog import TranscriptLog
from streamscribe.errors import ConfigIOError
from streamscribe.log import Logger, parse_log_level, parse_output_format

Role = Literal["client", "server"]
AnyConfig = Union[ClientConfig, ServerConfig]

ROLES = ("client", "server")

_MODULES = {"client": client, "server": server}


@overload
def load_or_default(role: Literal["client"], path: PathLike) -> ClientConfig: ...


@overload
def load_or_default(role: Literal["server"], path: PathLike) -> ServerConfig: ...


def load_or_default(role: Role, path: PathLike) -> AnyConfig:
    """Load the configuration for *role*, or its defaults if *path* is missing.

    Only a missing file triggers the fallback. Permission problems and parse
    errors still raise.

    Raises:
        ValueError: If *role* is not ``"client"`` or ``"server"``.
        ConfigIOError: If the file exists but cannot be read.
        ConfigParseError: If the document is malformed.
    """
    try:
        module = _MODULES[role]
    except KeyError:
        raise ValueError(f"Unknown role {role!r}, expected one of {ROLES}") from None

    try:
        return module.load(path)
    except ConfigIOError as e:
        if e.missing:
            return module.default()
        raise


def logger_for(config: AnyConfig, **kwargs) -> Logger:
    """Build the process logger described by *config*.

    Client: debug flag from ``client.debug``. The debug log path belongs to
    the transcript log, see ``transcript_log_for``.

    Server: level from ``server.log_level`` (INFO when empty), format from
    ``server.log_format``; ``server.debug`` forces DEBUG.

    Extra keyword arguments (``sink``, ``exit_func``) go to ``Logger``.
    """
    if isinstance(config, ClientConfig):
        return Logger(debug=config.client.debug, **kwargs)

    settings = config.server
    return Logger(
        debug=settings.debug,
        level=parse_log_level(settings.log_level),
        fmt=parse_output_format(settings.log_format),
        **kwargs,
    )


def transcript_log_for(config: ClientConfig) -> TranscriptLog:
    """Transcript debug log for the client; disabled unless debug is on."""
    settings = config.client
    if not settings.debug:
        return TranscriptLog(None)
    return TranscriptLog(settings.debug_log_path, settings.debug_log_max_size)
