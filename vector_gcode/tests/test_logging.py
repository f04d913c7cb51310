"""Tests for logging setup and contextual fields."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator

import pytest

from vector_gcode.utils import logging_config


@pytest.fixture()
def restore_root_logging() -> Iterator[None]:
    """Put the root logger's handlers and level back after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    logging_config.pop_context()


@pytest.mark.usefixtures("restore_root_logging")
class TestSetupLogging:
    def test_json_file_output_and_idempotency(self, tmp_path: Path) -> None:
        log_path = tmp_path / "logs" / "run.log"
        logging_config.setup_logging(
            log_level="INFO",
            log_file=log_path,
            json_lines=True,
            to_stderr=False,
            context={"app": "test"},
        )
        logger = logging.getLogger("vector_gcode.test")
        logger.info("hello")

        handlers = logging_config.setup_logging(
            log_level="INFO",
            log_file=log_path,
            json_lines=True,
            to_stderr=False,
        )
        logger.info("world")
        for handler in handlers:
            handler.flush()

        lines = log_path.read_text(encoding="utf-8").strip().splitlines()
        assert len(lines) == 2
        rec = json.loads(lines[0])
        assert rec["msg"] == "hello"
        assert rec["lvl"] == "INFO"
        assert rec["app"] == "test"

    def test_human_format(self, tmp_path: Path) -> None:
        log_path = tmp_path / "run.log"
        handlers = logging_config.setup_logging(
            log_level="DEBUG", log_file=log_path, to_stderr=False, context={"scene": "a.yaml"}
        )
        logging.getLogger("vector_gcode.test").debug("paths=%d", 3)
        for handler in handlers:
            handler.flush()
        line = log_path.read_text(encoding="utf-8").strip()
        assert "| DEBUG" in line
        assert "scene=a.yaml |" in line
        assert line.endswith("paths=3")

    def test_rotating_file_handler(self, tmp_path: Path) -> None:
        handlers = logging_config.setup_logging(
            log_file=tmp_path / "run.log", to_stderr=False, max_bytes=1024
        )
        assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            logging_config.setup_logging(log_level="LOUD")


class TestContext:
    def test_push_and_pop(self) -> None:
        logging_config.pop_context()
        logging_config.push_context(app="x", run=1)
        assert logging_config.current_context() == {"app": "x", "run": 1}
        logging_config.pop_context(["run"])
        assert logging_config.current_context() == {"app": "x"}
        logging_config.pop_context()
        assert logging_config.current_context() == {}

    def test_bad_formatter_mode(self) -> None:
        with pytest.raises(ValueError):
            logging_config.ContextFormatter("xml")
