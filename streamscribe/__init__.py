"""streamscribe - configuration and logging core for the streaming
transcription client and server."""

from loguru import logger

from streamscribe.log import ContextLogger, Logger, LogLevel, OutputFormat

__version__ = "0.1.0"

# Each Logger registers its own handlers; drop loguru's default stderr one
# so records are not printed twice.
logger.remove()

__all__ = ["Logger", "ContextLogger", "LogLevel", "OutputFormat", "__version__"]
