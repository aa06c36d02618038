"""Pytest configuration & shared fixtures for the MCDU display tests."""
from __future__ import annotations

import contextlib
import copy
import json
import socket
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

_SIDE = {
    "lines": [["L1", "R1", "C1"]],
    "scratchpad": "",
    "title": "",
    "titleLeft": "",
    "arrows": [False, False, False, False],
}


def _find_free_port() -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


@pytest.fixture()
def free_port() -> int:
    return _find_free_port()


@pytest.fixture()
def make_message():
    """Build a wire message; keyword args override fields of the left side.

    Usage:
        raw = make_message(lines=[["a", "b", "c"]], title="{green}INIT{end}")
    """
    def _build(right: dict | None = None, **left_fields) -> str:
        left = copy.deepcopy(_SIDE)
        left.update(left_fields)
        return json.dumps({"left": left, "right": right if right is not None else copy.deepcopy(_SIDE)}, ensure_ascii=False)
    return _build


@pytest.fixture()
def sample_message_path() -> Path:
    return ROOT / "data" / "test_message.json"


@pytest.fixture(autouse=True)
def _clean_mcdu_env(monkeypatch):
    # keep developer shells from leaking MCDU_* settings into tests
    import os
    for key in list(os.environ):
        if key.startswith("MCDU_"):
            monkeypatch.delenv(key, raising=False)
    yield
