"""Unified logging utilities for the MCDU display."""
from __future__ import annotations

import json
import logging
import os
import sys
import time

from .env_flags import is_truthy_env

DEFAULT_FORMAT = '%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s'
# Minimal console format (message only) used for cleaner terminal output.
MINIMAL_CONSOLE_FORMAT = '%(message)s'

# uvicorn.access logs one line per websocket handshake
SUPPRESSED_LOGGERS = [
    'uvicorn.access', 'websockets', 'asyncio'
]


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            'ts': getattr(record, 'created', time.time()),
            'level': record.levelname,
            'logger': record.name,
            'thread': record.threadName,
            'msg': record.getMessage(),
        }
        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str = 'INFO', log_file: str | None = None, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Configure root logging.

    Console handler uses the minimal message-only format unless
    MCDU_VERBOSE_CONSOLE=1 (restores DEFAULT_FORMAT), MCDU_JSON_LOGS=1 (JSON
    lines) or an explicit fmt argument is passed.

    File handler (if enabled) always uses the full DEFAULT_FORMAT.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)
    # Remove existing handlers to avoid duplication on re-init
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.flush()
        h.close()

    if fmt != DEFAULT_FORMAT:
        console_fmt = fmt
    elif is_truthy_env('MCDU_VERBOSE_CONSOLE'):
        console_fmt = DEFAULT_FORMAT
    else:
        console_fmt = MINIMAL_CONSOLE_FORMAT

    # stderr keeps stdout free for the live terminal display
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(log_level)
    if is_truthy_env('MCDU_JSON_LOGS'):
        console.setFormatter(JsonFormatter())
    else:
        console.setFormatter(logging.Formatter(console_fmt))
    root.addHandler(console)

    if log_file:
        try:
            directory = os.path.dirname(log_file)
            if directory:
                os.makedirs(directory, exist_ok=True)
            fh = logging.FileHandler(log_file, encoding='utf-8')
            fh.setLevel(log_level)
            # Always keep detailed format in file for post-mortem analysis
            fh.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            root.addHandler(fh)
        except OSError as e:
            root.error(f"Failed to create log file handler: {e}")

    for name in SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root

__all__ = ["DEFAULT_FORMAT", "MINIMAL_CONSOLE_FORMAT", "JsonFormatter", "setup_logging"]
