from __future__ import annotations

from rich.console import Console

from mcdu.console.terminal import ScreenConsumer, render_update, run_style, to_rich_text
from mcdu.markup.parser import TextRun, parse_markup
from mcdu.markup.formatter import FormatterTag as T
from mcdu.relay.queue import UpdateQueue
from mcdu.screen.decoder import decode_message, load_message_file


def _render(renderable) -> str:
    console = Console(record=True, width=100, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_consumer_applies_batch_in_order_and_keeps_last(make_message):
    q = UpdateQueue(capacity=8)
    consumer = ScreenConsumer(q)
    assert consumer.tick() == 0
    assert consumer.current is None
    q.put(decode_message(make_message(title="A")))
    q.put(decode_message(make_message(title="B")))
    assert consumer.tick() == 2
    assert consumer.current.title.plain_text == "B"
    # nothing new: the last valid screen stays
    assert consumer.tick() == 0
    assert consumer.current.title.plain_text == "B"
    assert consumer.applied == 2


def test_run_style_maps_color_and_font():
    assert run_style(TextRun("x", (T.AMBER,))) == "orange3"
    assert run_style(TextRun("x", (T.CYAN, T.SMALL))) == "cyan dim"
    assert run_style(TextRun("x", (T.BIG,))) == "white bold"
    assert run_style(TextRun("x", ()), label=True) == "white dim"
    assert run_style(TextRun("x", (T.BIG,)), label=True) == "white bold"


def test_rich_text_spans_follow_runs():
    text = to_rich_text(parse_markup("{green}V1{end} {red}100{end}"))
    assert text.plain == "V1 100"
    assert [(s.start, s.end, str(s.style)) for s in text.spans] == [(0, 2, "green"), (2, 3, "white"), (3, 6, "red")]


def test_render_sample_screen(sample_message_path):
    out = _render(render_update(load_message_file(sample_message_path)))
    for needle in ("INIT", "IRS INIT>", "CO RTE", "LFPG/EGLL", "←", "→"):
        assert needle in out


def test_render_without_update():
    assert "NO DATA" in _render(render_update(None))
