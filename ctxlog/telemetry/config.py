"""OTel provider configuration and ready-made root loggers.

Provides :func:`configure_telemetry` (logger provider wiring),
:func:`get_default_provider` (lazy singleton with console output) and the
root-logger constructors :func:`build_logger`, :func:`development_logger`
and :func:`production_logger`.
"""

from typing import TextIO

from opentelemetry._logs import SeverityNumber
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import (
    BatchLogRecordProcessor,
    LogRecordExporter,
    SimpleLogRecordProcessor,
)
from opentelemetry.sdk.resources import Resource

from .exporters import StreamLogRecordExporter
from .logger import ScopedLogger

INSTRUMENTATION_NAME = "ctxlog"


def configure_telemetry(
    service_name: str = "ctxlog",
    service_version: str = "",
    log_exporter: LogRecordExporter | None = None,
    batch_logs: bool = False,
) -> LoggerProvider:
    """
    Configure an OTel LoggerProvider for context-scoped loggers.

    Returns the provider for explicit injection -- does NOT set the global
    provider.

    Args:
        service_name: Service identifier for resource attributes.
        service_version: Service version for resource attributes.
        log_exporter: Optional log exporter (e.g. StreamLogRecordExporter,
            RxLogRecordExporter, OTLPLogExporter).
        batch_logs: If True, use BatchLogRecordProcessor (better for network
            exporters). If False, use SimpleLogRecordProcessor (immediate,
            better for console and tests).

    Returns:
        Configured LoggerProvider.

    Example:
        >>> provider = configure_telemetry(
        ...     service_name="booking",
        ...     log_exporter=StreamLogRecordExporter(format="json"),
        ... )
        >>> root = build_logger(provider, min_severity=SeverityNumber.INFO)
    """
    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": service_version,
        }
    )

    logger_provider = LoggerProvider(resource=resource)
    if log_exporter:
        if batch_logs:
            logger_provider.add_log_record_processor(
                BatchLogRecordProcessor(log_exporter)
            )
        else:
            logger_provider.add_log_record_processor(
                SimpleLogRecordProcessor(log_exporter)
            )

    return logger_provider


# =============================================================================
# Default Provider
# =============================================================================


_default_logger_provider: LoggerProvider | None = None


def get_default_provider(service_name: str = "ctxlog") -> LoggerProvider:
    """Get or create the default provider with console output.

    Lazily initializes on first call and returns the same provider on
    subsequent calls.  Records go to stderr in the development text
    format with immediate (non-batched) processing.

    Args:
        service_name: Service name for the provider (only used on first call).
    """
    global _default_logger_provider

    if _default_logger_provider is None:
        _default_logger_provider = configure_telemetry(
            service_name=service_name,
            log_exporter=StreamLogRecordExporter(format="text"),
            batch_logs=False,  # Immediate output for CLI
        )

    return _default_logger_provider


# =============================================================================
# Root Loggers
# =============================================================================


def build_logger(
    logger_provider: LoggerProvider,
    *,
    instrumentation_name: str = INSTRUMENTATION_NAME,
    min_severity: SeverityNumber | None = SeverityNumber.INFO,
    add_caller: bool = False,
    stacktrace_level: SeverityNumber | None = None,
) -> ScopedLogger:
    """Build a root ScopedLogger (empty name, no fields) on *logger_provider*.

    Args:
        logger_provider: Provider the records are emitted through.
        instrumentation_name: OTel instrumentation scope name.
        min_severity: Threshold below which records are dropped.
        add_caller: Attach the call site to every record.
        stacktrace_level: Attach a stack trace to records at or above this
            severity; None disables stack traces.
    """
    return ScopedLogger(
        logger_provider.get_logger(instrumentation_name),
        min_severity=min_severity,
        add_caller=add_caller,
        stacktrace_level=stacktrace_level,
    )


def development_logger(
    stream: TextIO | None = None,
    *,
    logger_provider: LoggerProvider | None = None,
    min_severity: SeverityNumber = SeverityNumber.DEBUG,
) -> ScopedLogger:
    """Root logger writing development text lines, debug and up.

    Caller and stack traces are off.  Without *stream* or
    *logger_provider* the shared default provider (stderr) is used.
    """
    if logger_provider is None:
        if stream is None:
            logger_provider = get_default_provider()
        else:
            logger_provider = configure_telemetry(
                log_exporter=StreamLogRecordExporter(stream, format="text"),
            )
    return build_logger(logger_provider, min_severity=min_severity)


def production_logger(
    stream: TextIO | None = None,
    *,
    logger_provider: LoggerProvider | None = None,
    min_severity: SeverityNumber = SeverityNumber.INFO,
    add_caller: bool = True,
) -> ScopedLogger:
    """Root logger writing compact JSON lines, info and up, with caller.

    Stack traces are off.  Without *logger_provider* a new provider
    writing to *stream* (stderr when None) is created.
    """
    if logger_provider is None:
        logger_provider = configure_telemetry(
            log_exporter=StreamLogRecordExporter(stream, format="json"),
        )
    return build_logger(
        logger_provider,
        min_severity=min_severity,
        add_caller=add_caller,
    )
