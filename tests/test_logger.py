"""Tests for dataguard.utils.logger: structured console logging."""

from __future__ import annotations

import pathlib
from collections.abc import Iterator
from unittest import mock

import pytest

from dataguard.utils import logger


@pytest.fixture(autouse=True)
def _clean_buffer() -> Iterator[None]:
    logger.clear_log_buffer()
    yield
    logger.clear_log_buffer()
    logger.end_log_file()


class TestLogger:
    def test_writes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger.create_logger("Test").info("Hello")
        assert "Hello" in capsys.readouterr().err

    def test_buffer_is_ansi_stripped(self) -> None:
        logger.create_logger("Store").warn("Write failed", {"key": "k", "attempts": 1})
        (line,) = logger.get_log_buffer()
        assert "\033" not in line
        assert "[Store] Write failed" in line
        assert 'key="k"' in line
        assert "attempts=1" in line

    @pytest.mark.parametrize("level", ["info", "success", "warn", "error", "debug"])
    def test_levels(self, level: str) -> None:
        getattr(logger.create_logger("L"), level)("msg")
        assert len(logger.get_log_buffer()) == 1

    def test_section(self) -> None:
        logger.create_logger("S").section("Started")
        assert any("Started" in line for line in logger.get_log_buffer())

    def test_context(self) -> None:
        assert logger.create_logger("ConsentStore").context == "ConsentStore"


class TestFormatValue:
    def test_collections_summarised(self) -> None:
        assert "[3 items]" in logger._format_value([1, 2, 3])
        assert "{2 keys}" in logger._format_value({"a": 1, "b": 2})

    def test_long_string_truncated(self) -> None:
        assert logger._format_value("x" * 500).count("x") == 197


class TestLogFile:
    def test_disabled_by_default(self, tmp_path: pathlib.Path) -> None:
        with mock.patch.object(logger, "_write_to_file", False):
            assert logger.start_log_file(tmp_path) is None
        assert list(tmp_path.iterdir()) == []

    def test_writes_when_enabled(self, tmp_path: pathlib.Path) -> None:
        with mock.patch.object(logger, "_write_to_file", True):
            path = logger.start_log_file(tmp_path)
        assert path is not None
        logger.create_logger("File").info("to disk")
        logger.end_log_file()
        assert "to disk" in path.read_text(encoding="utf-8")
