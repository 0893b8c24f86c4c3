#!/usr/bin/env python3

"""Tests for logging setup, timing decorator and progress tracking."""

import logging
from pathlib import Path

import pytest

from winmd_c_headers.infrastructure.logging import (
    LoggerSetup,
    ProgressTracker,
    get_logger,
    log_banner,
    log_timing,
)

logger = get_logger(__name__)


@log_timing
def add(a: int, b: int) -> int:
    return a + b


@log_timing
def explode() -> None:
    raise RuntimeError("boom")


class TestLogTiming:
    """The timing decorator is transparent apart from its log lines."""

    @pytest.mark.unit
    def test_returns_result_and_keeps_metadata(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=__name__):
            assert add(2, 3) == 5

        assert add.__name__ == "add"
        assert "Completed add" in caplog.text

    @pytest.mark.unit
    def test_reraises_and_logs_failure(self, caplog):
        with caplog.at_level(logging.ERROR, logger=__name__):
            with pytest.raises(RuntimeError, match="boom"):
                explode()

        assert "Failed explode" in caplog.text

    @pytest.mark.unit
    def test_banner(self, caplog):
        with caplog.at_level(logging.INFO, logger=__name__):
            log_banner(logger, "SUMMARY")

        assert [r.getMessage() for r in caplog.records] == ["=" * 70, "SUMMARY", "=" * 70]


class TestProgressTracker:
    """Per-namespace statistics."""

    @pytest.fixture
    def tracker(self) -> ProgressTracker:
        return ProgressTracker(logger)

    @pytest.mark.unit
    def test_operation_is_timed(self, tracker, caplog):
        with caplog.at_level(logging.DEBUG, logger=__name__):
            with tracker.track_operation("load"):
                pass

        assert "Completed operation: load" in caplog.text

    @pytest.mark.unit
    def test_failed_operation_is_logged_and_reraised(self, tracker, caplog):
        with caplog.at_level(logging.ERROR, logger=__name__):
            with pytest.raises(ValueError):
                with tracker.track_operation("load"):
                    raise ValueError("bad dump")

        assert "Failed operation: load" in caplog.text

    @pytest.mark.unit
    def test_namespaces_are_counted(self, tracker):
        with tracker.track_namespace("Test.A"):
            pass
        with pytest.raises(KeyError):
            with tracker.track_namespace("Test.B"):
                raise KeyError("Test.B")

        assert tracker.namespace_count == 2

    @pytest.mark.unit
    def test_summary(self, tracker, caplog):
        tracker.count_entities("enums", 3)
        tracker.count_entities("structs")
        tracker.count_entities("enums")

        with caplog.at_level(logging.DEBUG, logger=__name__):
            tracker.report_summary()

        assert tracker.entity_counts == {"enums": 4, "structs": 1}
        assert "5 entities" in caplog.text
        assert "Entity breakdown: 4 enums, 1 structs" in caplog.text

    @pytest.mark.unit
    def test_memory_usage(self, tracker, caplog):
        with caplog.at_level(logging.DEBUG, logger=__name__):
            tracker.log_memory_usage()

        assert "Memory usage:" in caplog.text
        assert " MB" in caplog.text


class TestLoggerSetup:
    """Root logger configuration."""

    @pytest.mark.unit
    def test_initialize_with_log_file(self, tmp_path: Path, clean_logging):
        log_dir = tmp_path / "logs"

        LoggerSetup.initialize(log_dir, verbose=True)
        get_logger("winmd_c_headers.test").debug("written to file")

        log_file = LoggerSetup.get_log_file_path()
        assert LoggerSetup.is_initialized()
        assert log_file is not None
        assert log_file.parent == log_dir
        assert log_file.name.startswith("winmd_c_headers_")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")

    @pytest.mark.unit
    def test_initialize_is_idempotent(self, clean_logging):
        LoggerSetup.initialize(None)
        handlers = list(logging.getLogger().handlers)

        LoggerSetup.initialize(None, verbose=True)

        assert logging.getLogger().handlers == handlers
        assert LoggerSetup.get_log_file_path() is None

    @pytest.mark.unit
    def test_reset_allows_reinitialization(self, clean_logging):
        LoggerSetup.initialize(None)
        LoggerSetup.reset()

        assert not LoggerSetup.is_initialized()
        assert logging.getLogger().handlers == []
