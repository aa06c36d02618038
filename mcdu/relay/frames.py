"""Command frames: ``"<command>:<payload>"`` text units.

Split happens on the first colon only, so JSON payloads keep theirs. Frames
without a colon and commands other than ``update`` are ignored; the
connection that sent them stays open.
"""
from __future__ import annotations

import logging
from typing import NamedTuple

from mcdu import metrics as m
from mcdu.screen.decoder import decode_message
from mcdu.screen.model import DEFAULT_SIDE, ScreenUpdate
from mcdu.utils.exceptions import DecodeError, RelayQueueFull

from .queue import UpdateQueue

logger = logging.getLogger(__name__)

UPDATE_COMMAND = "update"


class Frame(NamedTuple):
    command: str
    payload: str


def parse_frame(text: str) -> Frame | None:
    command, sep, payload = text.partition(":")
    if not sep or not command:
        return None
    return Frame(command, payload)


def handle_frame(
    text: str,
    queue: UpdateQueue[ScreenUpdate],
    side: str = DEFAULT_SIDE,
    strict: bool = True,
    client_id: str = "-",
) -> bool:
    """Apply one received frame. Returns True when an update was enqueued.

    Nothing raised below this point escapes: decode failures and a full
    queue are logged and counted, and the caller keeps reading.
    """
    frame = parse_frame(text)
    if frame is None:
        m.frames_total.labels("malformed").inc()
        logger.debug("relay: ignoring malformed frame from %s", client_id)
        return False
    if frame.command != UPDATE_COMMAND:
        m.frames_total.labels("other").inc()
        logger.debug("relay: ignoring command %r from %s", frame.command, client_id)
        return False
    m.frames_total.labels(UPDATE_COMMAND).inc()

    try:
        update = decode_message(frame.payload, side=side, strict=strict)
    except DecodeError as e:
        m.decode_errors_total.labels(_reason(e)).inc()
        logger.warning("relay: discarded update from %s: %s", client_id, e)
        return False

    try:
        accepted = queue.put(update)
    except RelayQueueFull as e:
        logger.warning("relay: %s; update from %s rejected", e, client_id)
        return False
    if accepted:
        m.updates_enqueued_total.inc()
    return accepted


def _reason(err: DecodeError) -> str:
    cause = err.__cause__
    if cause is None:
        return "structure"
    if isinstance(cause, UnicodeDecodeError):
        return "encoding"
    if isinstance(cause, (ValueError, RecursionError)):
        return "json"
    return "markup"


__all__ = ["Frame", "UPDATE_COMMAND", "handle_frame", "parse_frame"]
