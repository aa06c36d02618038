"""Screen state shapes: raw per-side payload and the decoded update."""
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from mcdu.markup.parser import ParsedText

# Character grid of the physical display: title row, 12 lines, scratchpad.
SCREEN_ROWS = 14
SCREEN_COLS = 24
SCREEN_LINES = 12
SCREEN_COLUMNS = 3

# Wire order of a row is [left, right, center]; decoded order is [left, center, right].
COL_LEFT, COL_CENTER, COL_RIGHT = 0, 1, 2

SIDES = ("left", "right")
DEFAULT_SIDE = "left"


def is_label_line(index: int) -> bool:
    """Even lines carry small labels, odd lines the data below them."""
    return index % 2 == 0


class Arrows(NamedTuple):
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False


@dataclass(frozen=True, slots=True)
class ScreenState:
    """One side of a wire message, exactly as received."""
    lines: tuple[tuple[str, str, str], ...]
    scratchpad: str
    title: str
    title_left: str
    arrows: Arrows


@dataclass(frozen=True, slots=True)
class ScreenMessage:
    """Both mirrored sides of a wire message. Only one is ever decoded."""
    left: ScreenState
    right: ScreenState

    def side(self, name: str) -> ScreenState:
        if name not in SIDES:
            raise ValueError(f"unknown display side {name!r}")
        return self.left if name == "left" else self.right


@dataclass(frozen=True, slots=True)
class ScreenUpdate:
    """Renderer-ready update. Rows are [left, center, right]."""
    lines: tuple[tuple[ParsedText, ParsedText, ParsedText], ...]
    scratchpad: ParsedText
    title: ParsedText
    title_left: ParsedText
    arrows: Arrows

    def plain_lines(self) -> list[list[str]]:
        return [[cell.plain_text for cell in row] for row in self.lines]


__all__ = [
    "Arrows",
    "COL_CENTER",
    "COL_LEFT",
    "COL_RIGHT",
    "DEFAULT_SIDE",
    "SCREEN_COLS",
    "SCREEN_COLUMNS",
    "SCREEN_LINES",
    "SCREEN_ROWS",
    "SIDES",
    "ScreenMessage",
    "ScreenState",
    "ScreenUpdate",
    "is_label_line",
]
