"""OTel log-record exporters for console and reactive output.

Provides :class:`StreamLogRecordExporter` (development text or production
JSON lines written to a text stream) and :class:`RxLogRecordExporter`
(records republished on a reactivex Subject).
"""

import sys
import threading
from collections.abc import Sequence
from typing import Literal, TextIO

from opentelemetry.sdk._logs._internal import ReadableLogRecord
from opentelemetry.sdk._logs.export import (
    LogRecordExporter,
    LogRecordExportResult,
)
from reactivex import Subject

from .logger import format_log_record, format_log_record_json

LOG_FORMAT = Literal["text", "json"]


# =============================================================================
# Stream Log Record Exporter
# =============================================================================


class StreamLogRecordExporter(LogRecordExporter):
    """OTel LogRecordExporter that writes one line per record to a stream.

    The ``"text"`` format is the human-readable development layout, the
    ``"json"`` format the compact production layout.  Writes from several
    threads are serialized so lines never interleave.

    Parameters:
        stream: Text stream to write to.  ``None`` means ``sys.stderr``,
            looked up at write time so redirection is honoured.
        format: Output format - "text" or "json".

    Example output (text):
        2018-08-24T01:17:29.510+0300\tINFO\tprocess\tstart\t{"request_id": "00001885154"}

    Example output (json):
        {"level":"info","ts":1535062649.510898,"logger":"process","msg":"start","request_id":"00001885154"}
    """

    def __init__(self, stream: TextIO | None = None, *, format: LOG_FORMAT = "text"):
        if format not in ("text", "json"):
            raise ValueError(f"Invalid format: {format}. Choose from 'text' or 'json'.")
        self._stream = stream
        self._format = format
        self._lock = threading.Lock()
        self._formatter = (
            format_log_record_json if format == "json" else format_log_record
        )

    @property
    def format(self) -> LOG_FORMAT:
        return self._format

    def _target(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def export(self, batch: Sequence[ReadableLogRecord]) -> LogRecordExportResult:
        """Write log records to the stream.

        Args:
            batch: Sequence of ReadableLogRecord objects to export.

        Returns:
            LogRecordExportResult.SUCCESS on success,
            LogRecordExportResult.FAILURE if the stream rejected the write.
        """
        try:
            with self._lock:
                target = self._target()
                for readable_record in batch:
                    target.write(self._formatter(readable_record.log_record))
                target.flush()
            return LogRecordExportResult.SUCCESS
        except (OSError, ValueError):
            return LogRecordExportResult.FAILURE

    def shutdown(self) -> None:
        """Shutdown the exporter. The stream belongs to the caller and stays open."""
        pass

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Flush the underlying stream.

        Returns:
            True always, as nothing is buffered beyond the stream itself.
        """
        with self._lock:
            self._target().flush()
        return True


# =============================================================================
# Reactive Log Record Exporter
# =============================================================================


class RxLogRecordExporter(LogRecordExporter):
    """
    OTel LogRecordExporter that republishes records on a reactivex Subject.

    Each exported ``LogRecord`` is pushed to :attr:`records` in export
    order; ``shutdown()`` completes the subject.  Subscribers run on the
    exporting thread, serialized by a lock.

    Example:
        >>> exporter = RxLogRecordExporter()
        >>> exporter.records.pipe(severity_at_least(SeverityNumber.WARN)).subscribe(print)
        >>> provider = configure_telemetry(log_exporter=exporter)
    """

    def __init__(self):
        self.records: Subject = Subject()
        self._lock = threading.RLock()
        self._closed = False

    def export(self, batch: Sequence[ReadableLogRecord]) -> LogRecordExportResult:
        """Push each record of *batch* to :attr:`records`.

        Returns:
            LogRecordExportResult.FAILURE once the exporter is shut down,
            LogRecordExportResult.SUCCESS otherwise.
        """
        with self._lock:
            if self._closed:
                return LogRecordExportResult.FAILURE
            for readable_record in batch:
                self.records.on_next(readable_record.log_record)
        return LogRecordExportResult.SUCCESS

    def shutdown(self) -> None:
        """Complete the subject; later exports are rejected."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self.records.on_completed()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Nothing is buffered: records are pushed as they are exported."""
        return True
