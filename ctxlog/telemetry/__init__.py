"""OpenTelemetry-backed logging for context-scoped loggers.

This package provides provider configuration, the :class:`ScopedLogger`
handle, log-record formatters and exporters, and Rx operators over
exported records.
"""

from .config import (
    build_logger,
    configure_telemetry,
    development_logger,
    get_default_provider,
    production_logger,
)
from .exporters import (
    LOG_FORMAT,
    RxLogRecordExporter,
    StreamLogRecordExporter,
)
from .logger import (
    CALLER_KEY,
    NAME_KEY,
    STACKTRACE_KEY,
    ScopedLogger,
    format_log_record,
    format_log_record_json,
    parse_severity,
    split_attributes,
)
from .stream import record_lines, severity_at_least, under_name

__all__ = [
    # config
    "configure_telemetry",
    "get_default_provider",
    "build_logger",
    "development_logger",
    "production_logger",
    # logger
    "ScopedLogger",
    "parse_severity",
    "format_log_record",
    "format_log_record_json",
    "split_attributes",
    "NAME_KEY",
    "CALLER_KEY",
    "STACKTRACE_KEY",
    # exporters
    "StreamLogRecordExporter",
    "RxLogRecordExporter",
    "LOG_FORMAT",
    # stream operators
    "severity_at_least",
    "under_name",
    "record_lines",
]
