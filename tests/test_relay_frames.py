from __future__ import annotations

import pytest

from mcdu import metrics as m
from mcdu.relay.frames import Frame, handle_frame, parse_frame
from mcdu.relay.queue import UpdateQueue


def test_split_on_first_colon_only():
    assert parse_frame("update:a:b:c") == Frame("update", "a:b:c")
    assert parse_frame('update:{"k":"v"}') == Frame("update", '{"k":"v"}')
    assert parse_frame("update:") == Frame("update", "")


def test_malformed_frames():
    assert parse_frame("update") is None
    assert parse_frame(":payload") is None
    assert parse_frame("") is None


def test_update_frame_is_decoded_and_enqueued(make_message):
    q = UpdateQueue(capacity=8)
    assert handle_frame("update:" + make_message(lines=[["a", "b", "c"]]), q)
    (update,) = q.drain()
    assert update.plain_lines() == [["a", "c", "b"]]


def test_invalid_json_is_discarded_and_counted():
    q = UpdateQueue(capacity=8)
    before = m.sample('mcdu_decode_errors_total', {'reason': 'json'})
    assert handle_frame("update:{not valid json", q) is False
    assert len(q) == 0
    assert m.sample('mcdu_decode_errors_total', {'reason': 'json'}) - before == 1


def test_markup_failure_is_counted_as_markup(make_message):
    q = UpdateQueue(capacity=8)
    before = m.sample('mcdu_decode_errors_total', {'reason': 'markup'})
    assert handle_frame("update:" + make_message(title="{end}"), q) is False
    assert m.sample('mcdu_decode_errors_total', {'reason': 'markup'}) - before == 1


def test_other_commands_and_malformed_frames_are_ignored(make_message):
    q = UpdateQueue(capacity=8)
    assert handle_frame("mcduConnected:" + make_message(), q) is False
    assert handle_frame("no colon at all", q) is False
    assert handle_frame("UPDATE:" + make_message(), q) is False
    assert len(q) == 0


def test_strict_flag_is_passed_to_decoder(make_message):
    q = UpdateQueue(capacity=8)
    frame = "update:" + make_message(title="{green}{blue}X")
    assert handle_frame(frame, q) is False
    assert handle_frame(frame, q, strict=False) is True


def test_full_rejecting_queue_does_not_raise(make_message):
    q = UpdateQueue(capacity=1, overflow="reject")
    frame = "update:" + make_message()
    assert handle_frame(frame, q) is True
    assert handle_frame(frame, q) is False
    assert len(q) == 1


@pytest.mark.parametrize("payload", [
    "1" * 5000,
    "[" * 100000 + "]" * 100000,
    '{"left": ' + "[" * 100000,
])
def test_oversized_or_deep_json_is_discarded(payload, make_message):
    q = UpdateQueue(capacity=8)
    assert handle_frame("update:" + payload, q) is False
    assert len(q) == 0
    assert handle_frame("update:" + make_message(title="NEXT"), q) is True
    assert [u.title.plain_text for u in q.drain()] == ["NEXT"]


def test_deep_nesting_is_counted_as_json():
    q = UpdateQueue(capacity=8)
    before = m.sample('mcdu_decode_errors_total', {'reason': 'json'})
    assert handle_frame("update:" + "[" * 100000 + "]" * 100000, q) is False
    assert m.sample('mcdu_decode_errors_total', {'reason': 'json'}) - before == 1
