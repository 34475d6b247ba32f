"""Tests for logging setup."""

import json
import logging
from pathlib import Path

import pytest

from amqp_common.logging.context import get_log_context
from amqp_common.logging.formatters import ConsoleFormatter, JSONFormatter
from amqp_common.logging.setup import NOISY_LOGGERS, get_log_file_path, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestGetLogFilePath:
    def test_with_component_and_container_id(self):
        path = get_log_file_path(Path("logs"), component="sender", container_id="brave-tiger")

        assert path.parts[0] == "logs"
        assert path.name.startswith("sender_")
        assert path.name.endswith("_brave-tiger.log")

    def test_defaults(self):
        path = get_log_file_path(Path("logs"))
        assert path.name.startswith("amqp_")
        assert path.suffix == ".log"


class TestSetupLogging:
    def test_file_and_console_handlers(self, tmp_path):
        logger = setup_logging(component="sender", log_dir=tmp_path, container_id="cid-1")

        root = logging.getLogger()
        assert len(root.handlers) == 2
        file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert isinstance(file_handlers[0].formatter, JSONFormatter)
        assert logger.name == "amqp_common"

    def test_writes_json_lines(self, tmp_path):
        logger = setup_logging(component="sender", log_dir=tmp_path, container_id="cid-1")
        logger.info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        log_files = list(tmp_path.rglob("*.log"))
        assert len(log_files) == 1
        lines = [json.loads(line) for line in log_files[0].read_text().splitlines()]
        hello = [line for line in lines if line["message"] == "hello"]
        assert hello[0]["component"] == "sender"
        assert hello[0]["container_id"] == "cid-1"

    def test_plain_text_file_format(self, tmp_path):
        setup_logging(log_dir=tmp_path, json_format=False)
        file_handler = next(h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler))
        assert not isinstance(file_handler.formatter, JSONFormatter)

    def test_stdout_only(self, tmp_path):
        setup_logging(log_dir=tmp_path, log_to_stdout=True)

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, ConsoleFormatter)
        assert list(tmp_path.iterdir()) == []

    def test_generates_container_id(self, tmp_path):
        setup_logging(component="receiver", log_to_stdout=True)
        assert get_log_context()["container_id"].startswith("receiver-")

    def test_suppresses_noisy_loggers(self):
        setup_logging(log_to_stdout=True)
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING


class TestGetLogger:
    def test_returns_named_logger(self):
        assert get_logger("amqp_common.test") is logging.getLogger("amqp_common.test")
