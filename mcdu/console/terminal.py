"""Rich-based terminal rendering of the MCDU screen.

The consumer side of the relay: once per tick it drains the queue, keeps the
newest update and redraws. Draining never blocks; an empty drain leaves the
last valid screen on display.
"""
from __future__ import annotations

import logging
import threading
import time

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mcdu.markup.formatter import FormatterTag
from mcdu.markup.parser import ParsedText, TextRun
from mcdu.relay.queue import UpdateQueue
from mcdu.screen.model import SCREEN_COLS, SCREEN_LINES, ScreenUpdate, is_label_line

logger = logging.getLogger(__name__)

COLOR_STYLES: dict[FormatterTag, str] = {
    FormatterTag.AMBER: "orange3",
    FormatterTag.CYAN: "cyan",
    FormatterTag.GREEN: "green",
    FormatterTag.INOP: "grey50",
    FormatterTag.MAGENTA: "magenta",
    FormatterTag.RED: "red",
    FormatterTag.WHITE: "white",
    FormatterTag.YELLOW: "yellow",
}
DEFAULT_STYLE = "white"


def run_style(run: TextRun, label: bool = False) -> str:
    parts = [COLOR_STYLES.get(run.color, DEFAULT_STYLE)]
    font = run.font
    if font is FormatterTag.SMALL or (label and font is not FormatterTag.BIG):
        parts.append("dim")
    elif font is FormatterTag.BIG:
        parts.append("bold")
    return " ".join(parts)


def to_rich_text(parsed: ParsedText, label: bool = False) -> Text:
    text = Text(no_wrap=True, overflow="crop")
    for run in parsed:
        text.append(run.text, style=run_style(run, label))
    return text


def render_update(update: ScreenUpdate | None) -> Panel:
    grid = Table.grid(expand=True)
    grid.add_column(justify="left", ratio=1)
    grid.add_column(justify="center", ratio=1)
    grid.add_column(justify="right", ratio=1)

    if update is None:
        grid.add_row(Text(""), Text("NO DATA", style="grey50"), Text(""))
        return Panel(grid, width=SCREEN_COLS * 2 + 4, title="MCDU")

    arrows = update.arrows
    grid.add_row(
        to_rich_text(update.title_left),
        to_rich_text(update.title),
        Text(("↑" if arrows.up else " ") + ("↓" if arrows.down else " ")),
    )
    for i in range(SCREEN_LINES):
        if i < len(update.lines):
            row = update.lines[i]
            label = is_label_line(i)
            grid.add_row(*(to_rich_text(cell, label) for cell in row))
        else:
            grid.add_row(Text(""), Text(""), Text(""))
    grid.add_row(
        Text("←" if arrows.left else " "),
        to_rich_text(update.scratchpad),
        Text("→" if arrows.right else " "),
    )
    return Panel(grid, width=SCREEN_COLS * 2 + 4, title="MCDU")


class ScreenConsumer:
    """Applies queued updates at the consumer's own pace."""

    def __init__(self, queue: UpdateQueue[ScreenUpdate]):
        self.queue = queue
        self.current: ScreenUpdate | None = None
        self.applied = 0

    def tick(self) -> int:
        batch = self.queue.drain()
        if not batch:
            return 0
        # every queued update is applied in order; the last one stays on screen
        for update in batch:
            self.current = update
        self.applied += len(batch)
        return len(batch)


def run_terminal(
    queue: UpdateQueue[ScreenUpdate],
    refresh_hz: float = 10.0,
    stop: threading.Event | None = None,
    console: Console | None = None,
) -> ScreenConsumer:
    """Drive a live terminal view until ``stop`` is set (or Ctrl+C)."""
    consumer = ScreenConsumer(queue)
    stop = stop or threading.Event()
    period = 1.0 / refresh_hz
    with Live(render_update(None), console=console, refresh_per_second=refresh_hz, transient=False) as live:
        try:
            while not stop.is_set():
                if consumer.tick():
                    live.update(render_update(consumer.current))
                time.sleep(period)
        except KeyboardInterrupt:
            logger.info("terminal: interrupted")
    return consumer


def print_update(update: ScreenUpdate, console: Console | None = None) -> None:
    (console or Console()).print(render_update(update))


__all__ = [
    "COLOR_STYLES",
    "ScreenConsumer",
    "print_update",
    "render_update",
    "run_style",
    "run_terminal",
    "to_rich_text",
]
