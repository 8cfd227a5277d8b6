"""Unit tests for logging_config and logging_utils."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from prealloc.core.logging_config import LOG_FORMAT, coerce_level, configure_logging
from prealloc.core.logging_utils import ComponentLogger, ensure_component_logger, get_module_logger


class TestComponentLogger:

    def test_module_logger_namespace(self):
        log = get_module_logger("Controller")

        assert log.name == "prealloc.Controller"
        assert log.component == "Controller"

    def test_dotted_module_name_uses_last_part(self):
        log = get_module_logger("prealloc.storage.reclaimer")

        assert log.name == "prealloc.storage.reclaimer"
        assert log.component == "reclaimer"

    def test_messages_are_prefixed(self, caplog):
        caplog.set_level(logging.INFO, logger="prealloc")

        get_module_logger("Allocator").info("wrote %d units", 3)

        assert "[Allocator] wrote 3 units" in caplog.messages

    def test_level_filtering_applies(self, caplog):
        caplog.set_level(logging.WARNING, logger="prealloc")

        get_module_logger("Volume").debug("hidden")

        assert caplog.messages == []

    def test_child_component(self):
        child = get_module_logger("Controller").getChild("Volume")

        assert isinstance(child, ComponentLogger)
        assert child.name == "prealloc.Controller.Volume"
        assert child.component == "Controller.Volume"

    def test_ensure_wraps_stdlib_logger(self):
        wrapped = ensure_component_logger(logging.getLogger("external.thing"), fallback_name="X")

        assert isinstance(wrapped, ComponentLogger)
        assert wrapped.name == "external.thing"
        assert wrapped.component == "thing"

    def test_ensure_unwraps_plain_adapter(self):
        adapter = logging.LoggerAdapter(logging.getLogger("external.other"), {})

        assert ensure_component_logger(adapter, fallback_name="X").name == "external.other"

    def test_ensure_passes_through_and_falls_back(self):
        existing = get_module_logger("A")

        assert ensure_component_logger(existing, fallback_name="X") is existing
        assert ensure_component_logger(None, fallback_name="B").name == "prealloc.B"


class TestConfigureLogging:

    def test_coerce_level(self):
        assert coerce_level("debug") == logging.DEBUG
        assert coerce_level(logging.WARNING) == logging.WARNING
        with pytest.raises(ValueError):
            coerce_level("loud")

    def test_console_handler(self, clean_root_logging):
        configure_logging("warning", force=True)

        root = clean_root_logging
        assert root.level == logging.WARNING
        ours = [h for h in root.handlers if h.formatter and h.formatter._fmt == LOG_FORMAT]
        assert len(ours) == 1

    def test_rotating_file_handler(self, clean_root_logging, tmp_path):
        log_file = tmp_path / "logs" / "prealloc.log"

        configure_logging("info", force=True, console=False, log_file=log_file)
        get_module_logger("Main").info("hello file")
        for handler in clean_root_logging.handlers:
            handler.flush()

        assert any(isinstance(h, RotatingFileHandler) for h in clean_root_logging.handlers)
        assert "[Main] hello file" in log_file.read_text()

    def test_second_call_only_changes_level(self, clean_root_logging):
        configure_logging("info", force=True)
        handlers = list(clean_root_logging.handlers)

        configure_logging("error")

        assert clean_root_logging.handlers == handlers
        assert clean_root_logging.level == logging.ERROR
