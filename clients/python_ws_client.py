"""Reference Python websocket client for the MCDU relay.

Plays the simulator side: reads a wire message (JSON with "left" and
"right" screens) and sends it as ``update:<json>`` frames.

Usage:
    python clients/python_ws_client.py --url ws://127.0.0.1:8380/ data/test_message.json
    python clients/python_ws_client.py --repeat 10 --interval 0.5 data/test_message.json
"""
from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from websockets.exceptions import WebSocketException
from websockets.sync.client import connect

log = logging.getLogger("mcdu.client")


def send_updates(url: str, message: str, repeat: int = 1, interval: float = 0.0) -> int:
    sent = 0
    with connect(url) as ws:
        for i in range(repeat):
            ws.send(f"update:{message}")
            sent += 1
            if interval and i + 1 < repeat:
                time.sleep(interval)
    return sent


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="send MCDU update frames to a relay")
    p.add_argument("file", help="wire message JSON file")
    p.add_argument("--url", default="ws://127.0.0.1:8380/")
    p.add_argument("--repeat", type=int, default=1)
    p.add_argument("--interval", type=float, default=0.0, help="seconds between frames")
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    message = Path(args.file).read_text(encoding="utf-8")
    try:
        sent = send_updates(args.url, message, args.repeat, args.interval)
    except (OSError, WebSocketException) as e:
        log.error("send failed: %s", e)
        return 1
    log.info("sent %d update frame%s to %s", sent, "" if sent == 1 else "s", args.url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
