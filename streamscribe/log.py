"""Leveled logger shared by the client and server processes.

A ``Logger`` owns its output sinks and the debug flag. ``with_context`` and
``with_fields`` return lightweight decorators that rewrite each record and
hand it back to their parent, so any number of them can be stacked without
copying sink or level state::

    log = Logger(debug=cfg.client.debug)
    rtc = log.with_context("webrtc")
    rtc.info("connected to %s", url)
    # 2026/10/18 14:03:11.402113 [INFO] [webrtc] connected to ws://...

Records are written through loguru handlers registered per ``Logger``
instance and filtered on an id bound into each record, so two loggers in the
same process never see each other's output. Each handler serialises its own
writes, which keeps lines whole when several threads log at once.
"""

import json
import os
import sys
import uuid
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, TextIO, Union

from loguru import logger as _loguru

_TIME_FORMAT = "YYYY/MM/DD HH:mm:ss.SSSSSS"
_TEXT_FORMAT = "{time:" + _TIME_FORMAT + "} [{extra[tag]}] {message}"


class LogLevel(IntEnum):
    """Severity of a record, ordered from least to most severe."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4


# loguru level names used for each severity
_LOGURU_LEVELS = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARN: "WARNING",
    LogLevel.ERROR: "ERROR",
    LogLevel.FATAL: "CRITICAL",
}


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def parse_log_level(value: Optional[str]) -> LogLevel:
    """Map a config string such as ``"warn"`` to a ``LogLevel``.

    Matching is case-insensitive and ``"warning"`` is accepted. Anything
    unrecognised falls back to ``INFO``.
    """
    name = (value or "").strip().upper()
    if name == "WARNING":
        name = "WARN"
    return LogLevel.__members__.get(name, LogLevel.INFO)


def parse_output_format(value: Optional[str]) -> OutputFormat:
    """Map ``"text"``/``"json"`` (any case) to an ``OutputFormat``; default text."""
    try:
        return OutputFormat((value or "").strip().lower())
    except ValueError:
        return OutputFormat.TEXT


def _render(template: str, args: tuple) -> str:
    if not args:
        return template
    try:
        return template % args
    except (TypeError, ValueError):
        # bad format args: keep the record rather than drop it
        return f"{template} {args!r}"


def _json_format(record: Dict[str, Any]) -> str:
    entry: Dict[str, Any] = {
        "timestamp": record["time"].strftime("%Y/%m/%d %H:%M:%S.%f"),
        "level": record["extra"]["tag"],
        "message": record["message"],
    }
    fields = record["extra"].get("fields")
    if fields:
        entry["fields"] = fields
    record["extra"]["serialized"] = json.dumps(entry, default=str)
    return "{extra[serialized]}\n"


class Emitter(Protocol):
    """Anything that can accept a fully described log record."""

    @property
    def debug_enabled(self) -> bool: ...

    def emit(
        self,
        level: LogLevel,
        template: str,
        args: tuple = (),
        fields: Optional[Mapping[str, Any]] = None,
    ) -> None: ...


class _LevelMethods:
    """The five severity operations, expressed in terms of ``emit``."""

    def emit(
        self,
        level: LogLevel,
        template: str,
        args: tuple = (),
        fields: Optional[Mapping[str, Any]] = None,
    ) -> None:
        raise NotImplementedError

    def debug(self, template: str, *args: Any) -> None:
        self.emit(LogLevel.DEBUG, template, args)

    def info(self, template: str, *args: Any) -> None:
        self.emit(LogLevel.INFO, template, args)

    def warn(self, template: str, *args: Any) -> None:
        self.emit(LogLevel.WARN, template, args)

    def error(self, template: str, *args: Any) -> None:
        self.emit(LogLevel.ERROR, template, args)

    def fatal(self, template: str, *args: Any) -> None:
        """Log at FATAL and terminate the process with status 1."""
        self.emit(LogLevel.FATAL, template, args)

    def with_context(self, label: str) -> "ContextLogger":
        """Return a logger that prefixes every message with ``[label] ``."""
        return ContextLogger(self, label=label)

    def with_fields(self, **fields: Any) -> "ContextLogger":
        """Return a logger that attaches *fields* to every record."""
        return ContextLogger(self, fields=fields)


class Logger(_LevelMethods):
    """Base logger: owns the sinks, the level and the debug flag.

    Args:
        debug: Enable DEBUG records. Fixed for the lifetime of the logger.
        level: Minimum severity to emit. Defaults to DEBUG when *debug* is
            set, INFO otherwise; *debug* always forces DEBUG.
        fmt: ``OutputFormat.TEXT`` (default) or ``OutputFormat.JSON``.
        sink: Text stream to write to. Defaults to ``sys.stdout``.
        file_path: Optional log file written in addition to *sink*.
        max_file_size: Size in bytes at which *file_path* is rotated. Zero
            disables rotation.
        exit_func: Called with status 1 after a FATAL record. Defaults to
            ``os._exit``.
    """

    def __init__(
        self,
        debug: bool = False,
        *,
        level: Optional[LogLevel] = None,
        fmt: OutputFormat = OutputFormat.TEXT,
        sink: Optional[TextIO] = None,
        file_path: Union[str, Path, None] = None,
        max_file_size: int = 0,
        exit_func: Optional[Callable[[int], Any]] = None,
    ):
        if debug:
            level = LogLevel.DEBUG
        elif level is None:
            level = LogLevel.INFO
        self._level = LogLevel(level)
        self._format = OutputFormat(fmt)
        self._exit = exit_func or os._exit
        self._id = uuid.uuid4().hex
        self._log = _loguru.bind(logger_id=self._id)

        record_format: Union[str, Callable[[Dict[str, Any]], str]] = (
            _json_format if self._format is OutputFormat.JSON else _TEXT_FORMAT
        )
        self._handler_ids = [
            _loguru.add(
                sink if sink is not None else sys.stdout,
                level=0,
                format=record_format,
                filter=self._owns,
                colorize=False,
            )
        ]
        if file_path:
            rotation: Dict[str, Any] = {}
            if max_file_size > 0:
                rotation = {"rotation": max_file_size, "retention": 1}
            self._handler_ids.append(
                _loguru.add(
                    str(file_path),
                    level=0,
                    format=record_format,
                    filter=self._owns,
                    colorize=False,
                    encoding="utf-8",
                    **rotation,
                )
            )

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def debug_enabled(self) -> bool:
        return self._level <= LogLevel.DEBUG

    def _owns(self, record: Dict[str, Any]) -> bool:
        return record["extra"].get("logger_id") == self._id

    def emit(
        self,
        level: LogLevel,
        template: str,
        args: tuple = (),
        fields: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if level < self._level:
            return

        message = _render(template, args)
        fields = dict(fields or {})
        if fields and self._format is OutputFormat.TEXT:
            message += " |" + "".join(f" {k}={v}" for k, v in fields.items())

        self._log.bind(tag=level.name, fields=fields).log(
            _LOGURU_LEVELS[level], message
        )

        if level is LogLevel.FATAL:
            self._terminate()

    def _terminate(self) -> None:
        self.close()
        for stream in (sys.stdout, sys.stderr):
            if stream is not None:
                stream.flush()
        self._exit(1)

    def close(self) -> None:
        """Detach this logger's handlers, flushing and closing any log file."""
        handler_ids, self._handler_ids = self._handler_ids, []
        for handler_id in handler_ids:
            _loguru.remove(handler_id)


class ContextLogger(_LevelMethods):
    """Decorator that rewrites records before passing them to *parent*.

    A label turns ``template`` into ``"[label] " + template``; fields are
    merged underneath the fields of any decorator further down the chain.
    Level and debug gating always come from the base ``Logger``.
    """

    def __init__(
        self,
        parent: Emitter,
        label: Optional[str] = None,
        fields: Optional[Mapping[str, Any]] = None,
    ):
        self._parent = parent
        self._label = label
        self._fields = dict(fields or {})

    @property
    def label(self) -> Optional[str]:
        return self._label

    @property
    def debug_enabled(self) -> bool:
        return self._parent.debug_enabled

    def emit(
        self,
        level: LogLevel,
        template: str,
        args: tuple = (),
        fields: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if self._label is not None:
            # the label is literal text, not part of the format
            label = self._label.replace("%", "%%") if args else self._label
            template = f"[{label}] {template}"
        if self._fields:
            fields = {**self._fields, **(fields or {})}
        self._parent.emit(level, template, args, fields)
