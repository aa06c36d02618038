from __future__ import annotations

import json
import logging

import pytest

from mcdu.utils.logging_utils import DEFAULT_FORMAT, JsonFormatter, setup_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield root
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)


def test_json_formatter_emits_one_object_per_record():
    record = logging.LogRecord("mcdu.relay", logging.WARNING, __file__, 1, "dropped %d", (3,), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "mcdu.relay"
    assert payload["msg"] == "dropped 3"


def test_setup_logging_with_file(tmp_path, restore_root_logging):
    log_file = tmp_path / "logs" / "mcdu.log"
    root = setup_logging("debug", str(log_file))
    assert root.level == logging.DEBUG
    logging.getLogger("mcdu.test").info("hello file")
    for h in root.handlers:
        h.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "hello file" in text
    assert " - mcdu.test - INFO - " in text
    assert logging.getLogger("uvicorn.access").level == logging.WARNING


def test_setup_logging_replaces_handlers(restore_root_logging, monkeypatch):
    monkeypatch.setenv("MCDU_VERBOSE_CONSOLE", "1")
    setup_logging("info")
    root = setup_logging("info")
    assert len(root.handlers) == 1
    assert root.handlers[0].formatter._fmt == DEFAULT_FORMAT
