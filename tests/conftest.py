"""Shared test fixtures for ctxlog tests."""

from unittest.mock import MagicMock

import pytest
from opentelemetry._logs import SeverityNumber

from ctxlog import (
    Context,
    RxLogRecordExporter,
    ScopedLogger,
    bind,
    build_logger,
    configure_telemetry,
)


@pytest.fixture
def mock_logger():
    """A MagicMock standing in for an OTel Logger."""
    return MagicMock()


@pytest.fixture
def root_logger(mock_logger):
    """Debug-level root ScopedLogger emitting into ``mock_logger``."""
    return ScopedLogger(mock_logger, min_severity=SeverityNumber.DEBUG)


@pytest.fixture
def root_ctx(root_logger):
    """Background context with ``root_logger`` bound."""
    return bind(Context.background(), root_logger)


@pytest.fixture
def rx_sink():
    """A provider wired to an RxLogRecordExporter.

    Yields (root ScopedLogger, list collecting exported records).
    """
    exporter = RxLogRecordExporter()
    collected = []
    exporter.records.subscribe(collected.append)
    provider = configure_telemetry(
        service_name="test-app",
        log_exporter=exporter,
        batch_logs=False,
    )
    yield build_logger(provider, min_severity=SeverityNumber.DEBUG), collected
    provider.shutdown()
