"""Rx operators over streams of emitted log records.

Meant for the ``records`` subject of :class:`RxLogRecordExporter`; items
that are not log records pass through untouched.
"""

from typing import Any

from opentelemetry._logs import SeverityNumber
from reactivex import Observable
from reactivex import operators as ops

from .logger import NAME_KEY, parse_severity


def _is_record(value: Any) -> bool:
    return hasattr(value, "severity_number") and hasattr(value, "attributes")


def severity_at_least(min_severity: SeverityNumber | str):
    """
    The operator to keep log records at or above *min_severity*.
    """
    threshold = parse_severity(min_severity)

    def _keep(value: Any) -> bool:
        if not _is_record(value):
            return True
        severity = value.severity_number
        return severity is not None and severity.value >= threshold.value

    return ops.filter(_keep)


def under_name(prefix: str):
    """
    The operator to keep log records whose logger name is *prefix* or nested
    below it (``"process"`` keeps ``process`` and ``process.auth``).
    """

    def _keep(value: Any) -> bool:
        if not _is_record(value):
            return True
        name = (value.attributes or {}).get(NAME_KEY, "")
        return name == prefix or name.startswith(prefix + ".")

    return ops.filter(_keep)


def record_lines(formatter):
    """
    The operator that renders log records with *formatter*, e.g.
    :func:`format_log_record_json`.
    """

    def _record_lines(source: Observable) -> Observable:
        def subscribe(observer, scheduler=None):
            def on_next(value: Any) -> None:
                if _is_record(value):
                    observer.on_next(formatter(value))
                else:
                    observer.on_next(value)

            return source.subscribe(
                on_next=on_next,
                on_error=observer.on_error,
                on_completed=observer.on_completed,
                scheduler=scheduler,
            )

        return Observable(subscribe)

    return _record_lines
