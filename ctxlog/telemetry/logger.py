"""Scoped logger wrapper and record formatting for context-carried logging.

Provides :class:`ScopedLogger`, an immutable wrapper around the OTel Logger
API carrying a hierarchical name, accumulated structured fields and a
severity threshold, plus :func:`format_log_record` (development console
line) and :func:`format_log_record_json` (production JSON line) used by
log-record exporters.
"""

import json
import sys
import time
from collections.abc import Mapping, Sequence
from datetime import datetime

from opentelemetry._logs import LogRecord, SeverityNumber

from ..utils import format_stack, short_caller

# Reserved attribute keys; every other attribute is a structured field.
NAME_KEY = "log.name"
CALLER_KEY = "log.caller"
STACKTRACE_KEY = "log.stacktrace"
RESERVED_KEYS = (NAME_KEY, CALLER_KEY, STACKTRACE_KEY)

_SEVERITY_TEXT: dict[SeverityNumber, str] = {
    SeverityNumber.DEBUG: "DEBUG",
    SeverityNumber.INFO: "INFO",
    SeverityNumber.WARN: "WARN",
    SeverityNumber.ERROR: "ERROR",
}

_SEVERITY_NAMES: dict[str, SeverityNumber] = {
    "debug": SeverityNumber.DEBUG,
    "info": SeverityNumber.INFO,
    "warn": SeverityNumber.WARN,
    "warning": SeverityNumber.WARN,
    "error": SeverityNumber.ERROR,
}


def parse_severity(level: str | SeverityNumber) -> SeverityNumber:
    """Resolve a level name (``"debug"``, ``"warn"``, ...) to a SeverityNumber.

    Raises:
        ValueError: If *level* names no known severity.
    """
    if isinstance(level, SeverityNumber):
        return level
    try:
        return _SEVERITY_NAMES[level.lower()]
    except KeyError:
        raise ValueError(
            f"Invalid severity: {level!r}. Choose from {sorted(_SEVERITY_NAMES)}."
        ) from None


def severity_text(severity: SeverityNumber) -> str:
    return _SEVERITY_TEXT.get(severity, severity.name)


def _attribute_value(value):
    """Coerce a field value into something OTel accepts as an attribute."""
    if isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        if all(isinstance(v, (str, bool, int, float)) for v in value):
            return tuple(value)
    return str(value)


# =============================================================================
# Log Record Formatting
# =============================================================================


def split_attributes(attributes: Mapping | None) -> tuple[dict, dict]:
    """Separate reserved ``log.*`` attributes from structured fields."""
    reserved: dict = {}
    fields: dict = {}
    for key, value in (attributes or {}).items():
        if key in RESERVED_KEYS:
            reserved[key] = value
        else:
            fields[key] = value
    return reserved, fields


def _jsonable(value):
    return list(value) if isinstance(value, tuple) else value


def format_log_record(record: LogRecord) -> str:
    """
    Format a LogRecord as a human-readable console line.

    Format: ``TIMESTAMP\\tLEVEL\\t[name\\t][caller\\t]body[\\t{fields}]\\n``

    The timestamp is local time with millisecond precision and a numeric
    UTC offset, e.g. ``2018-08-24T01:17:29.510+0300``.  The logger name is
    left out for the root logger and the field blob is left out when the
    record carries no fields.

    Args:
        record: OpenTelemetry LogRecord to format.

    Returns:
        Formatted string suitable for console output.
    """
    timestamp_ns = record.timestamp or 0
    moment = datetime.fromtimestamp(timestamp_ns / 1e9).astimezone()
    timestamp_str = (
        f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}."
        f"{moment.microsecond // 1000:03d}{moment.strftime('%z')}"
    )
    reserved, fields = split_attributes(record.attributes)

    parts = [timestamp_str, record.severity_text or ""]
    if reserved.get(NAME_KEY):
        parts.append(str(reserved[NAME_KEY]))
    if reserved.get(CALLER_KEY):
        parts.append(str(reserved[CALLER_KEY]))
    parts.append(str(record.body))
    if fields:
        parts.append(
            json.dumps({k: _jsonable(v) for k, v in fields.items()}, default=str)
        )

    line = "\t".join(parts) + "\n"
    if reserved.get(STACKTRACE_KEY):
        line += f"{reserved[STACKTRACE_KEY]}\n"
    return line


def format_log_record_json(record: LogRecord) -> str:
    """
    Format a LogRecord as a compact JSON line.

    Keys come in the order ``level``, ``ts``, ``logger``, ``caller``,
    ``msg``, followed by every structured field flattened at top level and
    finally ``stacktrace``.  ``logger`` is omitted for the root logger,
    ``caller`` and ``stacktrace`` when they were not captured.

    Args:
        record: OpenTelemetry LogRecord to format.

    Returns:
        JSON string (single line) with newline terminator.
    """
    timestamp_ns = record.timestamp or 0
    reserved, fields = split_attributes(record.attributes)

    data = {
        "level": (record.severity_text or "").lower(),
        "ts": timestamp_ns / 1e9,
    }
    if reserved.get(NAME_KEY):
        data["logger"] = reserved[NAME_KEY]
    if reserved.get(CALLER_KEY):
        data["caller"] = reserved[CALLER_KEY]
    data["msg"] = record.body
    for key, value in fields.items():
        data[key] = _jsonable(value)
    if reserved.get(STACKTRACE_KEY):
        data["stacktrace"] = reserved[STACKTRACE_KEY]

    return json.dumps(data, default=str, separators=(",", ":")) + "\n"


# =============================================================================
# Scoped Logger
# =============================================================================


class ScopedLogger:
    """Immutable logger handle: hierarchical name, fields, threshold, sink.

    Every derivation (:meth:`named`, :meth:`with_fields`) returns a new
    ScopedLogger sharing the same underlying OTel Logger; the original keeps
    its own name and fields and can still be used independently.

    A ScopedLogger without an OTel Logger discards every record.

    Example:
        >>> root = ScopedLogger(provider.get_logger("ctxlog"))
        >>> log = root.named("process").with_fields(request_id="00001885154")
        >>> log.info("start")
        >>> log.named("auth").debug("token valid")
    """

    def __init__(
        self,
        logger=None,
        name: str = "",
        fields: tuple[tuple[str, object], ...] = (),
        min_severity: SeverityNumber | None = None,
        *,
        add_caller: bool = False,
        stacktrace_level: SeverityNumber | None = None,
    ):
        """Initialize the logger handle.

        Args:
            logger: OTel Logger instance from LoggerProvider.get_logger(),
                or None for a logger that discards everything.
            name: Dot-separated hierarchical name; empty at the root.
            fields: Accumulated ``(key, value)`` pairs, oldest first.
            min_severity: Records below this severity are silently dropped.
            add_caller: Attach the call site as ``log.caller``.
            stacktrace_level: Attach the call stack as ``log.stacktrace``
                to records at or above this severity.
        """
        self._logger = logger
        self._name = name
        self._fields = tuple(fields)
        self._min_severity = min_severity
        self._add_caller = add_caller
        self._stacktrace_level = stacktrace_level

    @classmethod
    def nop(cls) -> "ScopedLogger":
        """Build a logger that accepts every call and discards every record."""
        return cls(None)

    @property
    def name(self) -> str:
        return self._name

    @property
    def fields(self) -> dict[str, object]:
        """Accumulated fields; on a repeated key the most recent value wins."""
        return dict(self._fields)

    @property
    def min_severity(self) -> SeverityNumber | None:
        return self._min_severity

    @property
    def is_nop(self) -> bool:
        return self._logger is None

    def enabled_for(self, severity: SeverityNumber) -> bool:
        """Whether a record at *severity* would reach the sink."""
        if self._logger is None:
            return False
        if self._min_severity and severity.value < self._min_severity.value:
            return False
        return True

    def _derive(self, name: str, fields: tuple) -> "ScopedLogger":
        return ScopedLogger(
            self._logger,
            name=name,
            fields=fields,
            min_severity=self._min_severity,
            add_caller=self._add_caller,
            stacktrace_level=self._stacktrace_level,
        )

    def named(self, segment: str) -> "ScopedLogger":
        """Derive a child logger with *segment* appended to the name."""
        if not segment:
            return self._derive(self._name, self._fields)
        name = f"{self._name}.{segment}" if self._name else segment
        return self._derive(name, self._fields)

    def with_fields(self, **fields) -> "ScopedLogger":
        """Derive a child logger carrying additional structured fields."""
        return self._derive(self._name, self._fields + tuple(fields.items()))

    def log(self, severity: SeverityNumber | str, message: str, **fields) -> None:
        """Emit *message* at an arbitrary severity."""
        self._emit(parse_severity(severity), message, fields)

    def debug(self, message: str, **fields) -> None:
        self._emit(SeverityNumber.DEBUG, message, fields)

    def info(self, message: str, **fields) -> None:
        self._emit(SeverityNumber.INFO, message, fields)

    def warning(self, message: str, **fields) -> None:
        self._emit(SeverityNumber.WARN, message, fields)

    warn = warning

    def error(self, message: str, **fields) -> None:
        self._emit(SeverityNumber.ERROR, message, fields)

    def _emit(self, severity: SeverityNumber, message: str, fields: dict) -> None:
        """Build one record and hand it to the OTel Logger.

        The threshold check comes first so filtered calls do no field work.
        """
        if not self.enabled_for(severity):
            return

        attributes: dict[str, object] = {}
        if self._name:
            attributes[NAME_KEY] = self._name
        if self._add_caller or self._stacktrace_level:
            # _emit is always called directly from a public method, so the
            # call site sits two frames up.
            frame = sys._getframe(2)
            if self._add_caller:
                attributes[CALLER_KEY] = short_caller(frame)
            if (
                self._stacktrace_level
                and severity.value >= self._stacktrace_level.value
            ):
                attributes[STACKTRACE_KEY] = format_stack(frame)
        for key, value in (*self._fields, *fields.items()):
            # log.* keys belong to the logger; None has no attribute form.
            if key in RESERVED_KEYS or value is None:
                continue
            attributes[key] = _attribute_value(value)

        record = LogRecord(
            timestamp=time.time_ns(),
            body=message,
            severity_text=severity_text(severity),
            severity_number=severity,
            attributes=attributes,
        )
        self._logger.emit(record)

    def __repr__(self) -> str:
        if self._logger is None:
            return "ScopedLogger(nop)"
        return f"ScopedLogger(name={self._name!r}, fields={self.fields!r})"
