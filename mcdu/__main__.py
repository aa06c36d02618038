"""Command line entry point.

  mcdu serve [--host H] [--port P] [--headless]   relay + live terminal display
  mcdu render FILE                                decode a wire message file once
  mcdu parse TEXT                                 show the runs of one markup field
"""
from __future__ import annotations

import argparse
import logging
import signal
import threading
import time
from dataclasses import replace

from dotenv import load_dotenv

from mcdu.config.runtime_config import OVERFLOW_POLICIES, RuntimeConfig, get_runtime_config
from mcdu.console.terminal import ScreenConsumer, print_update, run_terminal
from mcdu.markup.parser import parse_markup
from mcdu.metrics import start_metrics_server
from mcdu.relay.queue import UpdateQueue
from mcdu.relay.server import RelayServer
from mcdu.screen.decoder import load_message_file
from mcdu.screen.model import ScreenUpdate
from mcdu.utils.exceptions import MCDUError, RelayBindError
from mcdu.utils.logging_utils import setup_logging
from mcdu.version import get_version

log = logging.getLogger("mcdu")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="mcdu", description="MCDU display driven by simulator updates")
    p.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    p.add_argument("--env-file", default=".env", help="dotenv file loaded before reading MCDU_* settings")
    p.add_argument("--log-level", default=None, help="overrides MCDU_LOG_LEVEL")
    sub = p.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the relay and display updates")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--capacity", type=int, default=None, help="pending updates kept before overflow")
    serve.add_argument("--overflow", choices=OVERFLOW_POLICIES, default=None)
    serve.add_argument("--lenient-markup", action="store_true", help="treat unknown tags as {end}")
    serve.add_argument("--headless", action="store_true", help="log updates instead of drawing them")

    render = sub.add_parser("render", help="decode and print one wire message file")
    render.add_argument("file")
    render.add_argument("--side", choices=("left", "right"), default="left")

    parse = sub.add_parser("parse", help="print the styled runs of a markup field")
    parse.add_argument("text")
    return p.parse_args(argv)


def _apply_overrides(cfg: RuntimeConfig, args: argparse.Namespace) -> RuntimeConfig:
    relay = cfg.relay
    if args.host is not None:
        relay = replace(relay, host=args.host)
    if args.port is not None:
        relay = replace(relay, port=args.port)
    if args.capacity is not None:
        relay = replace(relay, queue_capacity=args.capacity)
    if args.overflow is not None:
        relay = replace(relay, overflow=args.overflow)
    if args.lenient_markup:
        relay = replace(relay, strict_markup=False)
    return replace(cfg, relay=relay)


def _headless_loop(queue: UpdateQueue[ScreenUpdate], refresh_hz: float, stop: threading.Event) -> None:
    consumer = ScreenConsumer(queue)
    while not stop.is_set():
        if consumer.tick() and consumer.current is not None:
            cur = consumer.current
            log.info("update: title=%r scratchpad=%r lines=%d", cur.title.plain_text, cur.scratchpad.plain_text, len(cur.lines))
        time.sleep(1.0 / refresh_hz)


def cmd_serve(cfg: RuntimeConfig, args: argparse.Namespace) -> int:
    cfg = _apply_overrides(cfg, args)
    if cfg.metrics.enabled:
        start_metrics_server(cfg.metrics.host, cfg.metrics.port)

    queue: UpdateQueue[ScreenUpdate] = UpdateQueue(cfg.relay.queue_capacity, cfg.relay.overflow)
    relay = RelayServer(queue, cfg.relay)
    try:
        relay.start()
    except RelayBindError as e:
        log.error("%s", e)
        return 2

    stop = threading.Event()

    def handle_sig(sig, frame):
        log.info("Signal %s received, shutting down", sig)
        stop.set()
    signal.signal(signal.SIGTERM, handle_sig)

    try:
        if args.headless:
            _headless_loop(queue, cfg.display.refresh_hz, stop)
        else:
            run_terminal(queue, cfg.display.refresh_hz, stop=stop)
    except KeyboardInterrupt:
        pass
    finally:
        relay.stop()
        log.info("Shutdown complete (%d updates dropped)", queue.dropped)
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    try:
        update = load_message_file(args.file, side=args.side)
    except MCDUError as e:
        log.error("render: %s", e)
        return 1
    print_update(update)
    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    try:
        parsed = parse_markup(args.text)
    except MCDUError as e:
        log.error("parse: %s", e)
        return 1
    for run in parsed:
        tags = ",".join(t.value for t in run.formatters) or "-"
        print(f"{run.text!r}\t[{tags}]")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    load_dotenv(args.env_file, override=False)
    cfg = get_runtime_config(refresh=True)
    setup_logging(args.log_level or cfg.logging.level, cfg.logging.file)

    if args.command == "serve":
        return cmd_serve(cfg, args)
    if args.command == "render":
        return cmd_render(args)
    return cmd_parse(args)


if __name__ == '__main__':
    raise SystemExit(main())
