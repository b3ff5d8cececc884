"""Unit tests for logging utilities."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from poli_qa.utils import create_cli_logger, get_library_logger
from poli_qa.utils._logging import _create_logger

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestCreateLogger:
    def test_creates_log_directory_if_missing(self, fs: "FakeFilesystem") -> None:
        log_path = Path("/logs/test.log")
        assert not log_path.parent.exists()

        _ = _create_logger(str(log_path))

        assert log_path.parent.exists()

    def test_default_format_is_json(self, fs: "FakeFilesystem") -> None:
        logger = _create_logger("/logs/test.log")

        logger.info("test_event", key="value")

        log_content = Path("/logs/test.log").read_text()
        assert '"event": "test_event"' in log_content
        assert '"key": "value"' in log_content
        assert '"level": "info"' in log_content

    def test_text_format(self, fs: "FakeFilesystem") -> None:
        logger = _create_logger("/logs/test.log", log_format="text")

        logger.info("test_event", key="value")

        log_content = Path("/logs/test.log").read_text()
        assert "test_event" in log_content
        assert "key=value" in log_content

    def test_level_filters_messages(self, fs: "FakeFilesystem") -> None:
        logger = _create_logger("/logs/test.log", log_level=logging.WARNING)

        logger.info("quiet_event")
        logger.warning("loud_event")

        log_content = Path("/logs/test.log").read_text()
        assert "quiet_event" not in log_content
        assert "loud_event" in log_content


class TestCreateLoggerRotation:
    def test_with_rotation_uses_rotating_handler(self, fs: "FakeFilesystem") -> None:
        logger = _create_logger("/logs/rotated.log", max_bytes=1000, backup_count=3)

        logger.info("rotated_event")

        handlers = [
            handler
            for name in logging.root.manager.loggerDict
            if name.startswith("poli_qa.rotated.")
            for handler in logging.getLogger(name).handlers
        ]
        assert handlers
        assert all(isinstance(h, RotatingFileHandler) for h in handlers)
        assert handlers[-1].maxBytes == 1000  # pyright: ignore[reportAttributeAccessIssue]
        assert handlers[-1].backupCount == 3  # pyright: ignore[reportAttributeAccessIssue]
        assert "rotated_event" in Path("/logs/rotated.log").read_text()

    def test_rotation_requires_both_params(self, fs: "FakeFilesystem") -> None:
        logger = _create_logger("/logs/partial.log", max_bytes=1000)

        logger.info("partial_event")

        assert "partial_event" in Path("/logs/partial.log").read_text()
        assert not any(
            name.startswith("poli_qa.partial.") for name in logging.root.manager.loggerDict
        )


class TestCreateCliLogger:
    def test_default_log_file(
        self, fs: "FakeFilesystem", monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("POLI_DEBUG", raising=False)
        fs.create_dir("/project")

        logger = create_cli_logger(command="scan", project_root=Path("/project"))
        logger.info("scan_started")

        content = Path("/project/.poli/logs/cli.log").read_text()
        assert '"event": "scan_started"' in content
        assert '"command": "scan"' in content

    def test_explicit_log_file(self, fs: "FakeFilesystem") -> None:
        logger = create_cli_logger(log_file="/var/log/poli.log")

        logger.info("explicit_event")

        assert "explicit_event" in Path("/var/log/poli.log").read_text()

    def test_respects_log_level(
        self, fs: "FakeFilesystem", monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("POLI_DEBUG", raising=False)

        logger = create_cli_logger(level="error", log_file="/logs/cli.log")
        logger.debug("debug_level_message")
        logger.error("error_level_message")

        content = Path("/logs/cli.log").read_text()
        assert "debug_level_message" not in content
        assert "error_level_message" in content

    def test_debug_env_overrides_level(
        self, fs: "FakeFilesystem", monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("POLI_DEBUG", "1")

        logger = create_cli_logger(level="error", log_file="/logs/cli.log")
        logger.debug("debug_level_message")

        assert "debug_level_message" in Path("/logs/cli.log").read_text()


class TestGetLibraryLogger:
    def test_returns_usable_logger(self) -> None:
        logger = get_library_logger()

        assert callable(logger.warning)
