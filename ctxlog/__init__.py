"""Convenience exports for the :mod:`ctxlog` package."""

from .booking import AuthResult, auth, process, process_booking  # noqa: F401
from .context import (  # noqa: F401
    LOGGER_KEY,
    Context,
    bind,
    current_logger,
    get_current_context,
    named,
    reset_current_context,
    resolve,
    set_current_context,
    use_context,
    with_fields,
)
from .mechanism import AuthorizationFailure, CtxLogError  # noqa: F401
from .telemetry import (  # noqa: F401
    RxLogRecordExporter,
    ScopedLogger,
    StreamLogRecordExporter,
    build_logger,
    configure_telemetry,
    development_logger,
    production_logger,
)

__all__ = [
    "CtxLogError",
    "AuthorizationFailure",

    # context
    "Context",
    "LOGGER_KEY",
    "bind",
    "resolve",
    "named",
    "with_fields",
    "get_current_context",
    "set_current_context",
    "reset_current_context",
    "use_context",
    "current_logger",

    # telemetry
    "ScopedLogger",
    "configure_telemetry",
    "build_logger",
    "development_logger",
    "production_logger",
    "StreamLogRecordExporter",
    "RxLogRecordExporter",

    # booking
    "AuthResult",
    "auth",
    "process",
    "process_booking",
]
