"""Screen-state decoder: JSON wire message -> ScreenUpdate.

Wire shape (one per ``update`` frame)::

    {"left":  {"lines": [[l, r, c], ...], "scratchpad": str, "title": str,
               "titleLeft": str, "arrows": [up, down, left, right]},
     "right": {...same...}}

Both sides must be well formed; only ``side`` (default left) is decoded.
Any structural problem raises DecodeError naming the offending path, and a
markup failure in any field fails the whole message, so callers never see a
partially decoded update.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from mcdu.markup.parser import ParsedText, parse_markup
from mcdu.utils.exceptions import DecodeError, MarkupError

from .model import (
    COL_CENTER,
    COL_RIGHT,
    DEFAULT_SIDE,
    SCREEN_COLUMNS,
    SIDES,
    Arrows,
    ScreenMessage,
    ScreenState,
    ScreenUpdate,
)

logger = logging.getLogger(__name__)

NBSP = "\u00a0"
TITLE_LEFT_KEYS = ("titleLeft", "title_left")


def normalize_spaces(text: str) -> str:
    return text.replace(NBSP, " ")


def swap_columns(row: Sequence[str]) -> tuple[str, str, str]:
    """[left, right, center] -> [left, center, right]. Applying it twice is a no-op."""
    return (row[0], row[COL_RIGHT], row[COL_CENTER])


def _expect_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"{path}: expected string, got {type(value).__name__}")
    return value


def _state_from_json(obj: Any, path: str) -> ScreenState:
    if not isinstance(obj, dict):
        raise DecodeError(f"{path}: expected object, got {type(obj).__name__}")
    for key in ("lines", "scratchpad", "title", "arrows"):
        if key not in obj:
            raise DecodeError(f"{path}.{key}: missing field")

    raw_lines = obj["lines"]
    if not isinstance(raw_lines, list):
        raise DecodeError(f"{path}.lines: expected array")
    lines: list[tuple[str, str, str]] = []
    for i, row in enumerate(raw_lines):
        if not isinstance(row, list) or len(row) != SCREEN_COLUMNS:
            raise DecodeError(f"{path}.lines[{i}]: expected array of {SCREEN_COLUMNS} strings")
        lines.append(tuple(_expect_str(cell, f"{path}.lines[{i}][{j}]") for j, cell in enumerate(row)))  # type: ignore[arg-type]

    present = [k for k in TITLE_LEFT_KEYS if k in obj]
    if not present:
        raise DecodeError(f"{path}.titleLeft: missing field")
    if len(present) > 1:
        raise DecodeError(f"{path}: both titleLeft and title_left given")
    title_left = _expect_str(obj[present[0]], f"{path}.{present[0]}")

    arrows = obj["arrows"]
    if not isinstance(arrows, list) or len(arrows) != 4 or not all(isinstance(a, bool) for a in arrows):
        raise DecodeError(f"{path}.arrows: expected array of 4 booleans")

    return ScreenState(
        lines=tuple(lines),
        scratchpad=_expect_str(obj["scratchpad"], f"{path}.scratchpad"),
        title=_expect_str(obj["title"], f"{path}.title"),
        title_left=title_left,
        arrows=Arrows(*arrows),
    )


def parse_message(raw: str | bytes) -> ScreenMessage:
    """Validate a wire message and return both raw sides."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"message is not valid UTF-8: {e}") from e
    # No-break spaces are padding from the producer; strip them before the
    # JSON (and any markup inside it) is looked at.
    raw = normalize_spaces(raw)
    try:
        obj = json.loads(raw)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, oversized int literals and runaway nesting alike
        raise DecodeError(f"invalid JSON: {e}") from e
    if not isinstance(obj, dict):
        raise DecodeError("message: expected object with 'left' and 'right'")
    for side in SIDES:
        if side not in obj:
            raise DecodeError(f"{side}: missing field")
    return ScreenMessage(
        left=_state_from_json(obj["left"], "left"),
        right=_state_from_json(obj["right"], "right"),
    )


def _parse_field(text: str, path: str, strict: bool) -> ParsedText:
    try:
        # an escaped \u00a0 only becomes a real no-break space after json.loads
        return parse_markup(normalize_spaces(text), strict=strict)
    except MarkupError as e:
        raise DecodeError(f"{path}: {e}") from e


def decode_state(state: ScreenState, strict: bool = True) -> ScreenUpdate:
    lines = []
    for i, row in enumerate(state.lines):
        ordered = swap_columns(row)
        lines.append(tuple(_parse_field(cell, f"lines[{i}][{j}]", strict) for j, cell in enumerate(ordered)))
    return ScreenUpdate(
        lines=tuple(lines),  # type: ignore[arg-type]
        scratchpad=_parse_field(state.scratchpad, "scratchpad", strict),
        title=_parse_field(state.title, "title", strict),
        title_left=_parse_field(state.title_left, "titleLeft", strict),
        arrows=state.arrows,
    )


def decode_message(raw: str | bytes, side: str = DEFAULT_SIDE, strict: bool = True) -> ScreenUpdate:
    """Full decode of one wire message for the given display side."""
    message = parse_message(raw)
    return decode_state(message.side(side), strict=strict)


def load_message_file(path: str | Path, side: str = DEFAULT_SIDE, strict: bool = True) -> ScreenUpdate:
    p = Path(path)
    try:
        raw = p.read_bytes()
    except OSError as e:
        raise DecodeError(f"cannot read {p}: {e}") from e
    update = decode_message(raw, side=side, strict=strict)
    logger.debug("decoder: loaded %s (%d lines)", p, len(update.lines))
    return update


__all__ = [
    "NBSP",
    "decode_message",
    "decode_state",
    "load_message_file",
    "normalize_spaces",
    "parse_message",
    "swap_columns",
]
